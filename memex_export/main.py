"""
Main module for orchestrating the export.
"""

import argparse
import sys
from dataclasses import dataclass
from typing import Optional
from rich.console import Console

from .cache import DiskResponseCache, NullResponseCache
from .config import ExportConfig, ensure_directories, load_config
from .dates import format_iso
from .exceptions import MemexExportError
from .json_exporter import save_annotations_json, save_json_data
from .markdown_exporter import save_markdown_data, save_markdown_space_data
from .memex_client import MemexClient
from .models import empty_content_page, extend_content_page
from .paginator import fetch_all_personal_spaces, iter_personal_content
from .state import StateStore

console = Console()


@dataclass
class ExportSummary:
    """Counts of what a run exported."""

    spaces: int = 0
    pages: int = 0
    bookmarks: int = 0
    annotations: int = 0
    last_fetched_date: Optional[int] = None


def create_client(config: ExportConfig) -> MemexClient:
    cache = DiskResponseCache(config.cache_dir) if config.use_cache else NullResponseCache()
    return MemexClient(config, cache=cache)


def run_export(config: ExportConfig, client=None, state_store=None) -> ExportSummary:
    """
    Export spaces, bookmarks and annotations to disk.

    Content resumes from the stored cursor, which is saved after every page,
    so an interrupted run picks up where it stopped.
    """
    ensure_directories(config)
    client = client or create_client(config)
    state_store = state_store or StateStore(config.state_file)
    summary = ExportSummary()

    # PHASE 1: Spaces
    console.print("[bold cyan]PHASE 1: Fetching personal spaces...[/bold cyan]")
    personal_spaces = fetch_all_personal_spaces(client, config.start_timestamp)
    summary.spaces = len(personal_spaces)

    # PHASE 2: Content, page by page
    last_fetched_date = state_store.load()
    to_when = last_fetched_date or config.start_timestamp
    if last_fetched_date:
        console.print(f"[yellow]Resuming from {format_iso(last_fetched_date)}[/yellow]")

    console.print("[bold cyan]PHASE 2: Fetching personal content...[/bold cyan]")
    all_data = empty_content_page()

    for page in iter_personal_content(client, to_when):
        extend_content_page(all_data, page.data)

        save_json_data(page.data, personal_spaces, config.json_output_dir)
        save_markdown_data(page.data, personal_spaces, config.markdown_output_dir)

        summary.pages += 1
        summary.last_fetched_date = page.next_cursor
        console.print(f"Fetched data until {page.next_cursor}")
        state_store.save(page.next_cursor)

    summary.bookmarks = len(all_data["locators"])
    summary.annotations = len(all_data["annotations"])

    # PHASE 3: Annotations and space notes
    console.print("[bold cyan]PHASE 3: Writing annotations and spaces...[/bold cyan]")
    save_annotations_json(all_data["annotations"], config.markdown_output_dir)
    save_markdown_space_data(personal_spaces, all_data, config.markdown_output_dir)

    console.print(
        f"[bold green]Export completed:[/bold green] {summary.spaces} spaces, "
        f"{summary.bookmarks} bookmarks, {summary.annotations} annotations "
        f"in {summary.pages} pages"
    )
    return summary


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Export Memex bookmarks, spaces and annotations to JSON and Markdown."
    )
    parser.add_argument(
        "--start-timestamp",
        type=int,
        help="Export items before this time (ms since epoch); overrides START_TIMESTAMP",
    )
    parser.add_argument("--domain", help="Memex domain (default: memex.social)")
    parser.add_argument("--no-cache", action="store_true", help="Do not cache API responses")
    parser.add_argument("--clear-cache", action="store_true", help="Delete cached responses before exporting")
    parser.add_argument("--reset-state", action="store_true", help="Ignore the stored resume point")
    return parser.parse_args(argv)


def main(argv=None):
    """Main function for exporting Memex content."""
    args = parse_args(argv)
    try:
        config = load_config(
            start_timestamp=args.start_timestamp,
            domain=args.domain,
            use_cache=False if args.no_cache else None,
        )

        if args.clear_cache:
            count = DiskResponseCache(config.cache_dir).clear()
            console.print(f"[yellow]Deleted {count} cached responses[/yellow]")

        if args.reset_state:
            StateStore(config.state_file).reset()
            console.print("[yellow]Resume state cleared[/yellow]")

        run_export(config)

    except MemexExportError as e:
        console.print(f"[bold red]{type(e).__name__}:[/bold red] {e}")
        sys.exit(1)
    except Exception:
        console.print("[bold red]Unexpected Error:[/bold red]")
        console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
