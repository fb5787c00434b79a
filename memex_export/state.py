"""
Module for persisting the resume cursor between runs.
"""

import json
from pathlib import Path
from typing import Optional
from rich.console import Console

console = Console()


class StateStore:
    """Stores the last fetched cursor in a small JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Optional[int]:
        """
        Load the last fetched date.

        Returns:
            The stored cursor, or None if there is no usable state
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                state = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            console.print(f"[yellow]Ignoring unreadable state file {self.path}:[/yellow] {e}")
            return None

        last_fetched = state.get("lastFetchedDate") if isinstance(state, dict) else None
        if isinstance(last_fetched, bool) or not isinstance(last_fetched, int):
            return None
        return last_fetched or None

    def save(self, cursor: int) -> bool:
        """Save the last fetched date. Failures are logged, never raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"lastFetchedDate": cursor}, f, indent=2)
            return True
        except OSError as e:
            console.print(f"[bold red]Error saving state:[/bold red] {e}")
            return False

    def reset(self) -> None:
        self.path.unlink(missing_ok=True)
