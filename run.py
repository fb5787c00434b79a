#!/usr/bin/env python3
"""
Script to run the Memex export.

Requires MEMEX_KEY_ID and MEMEX_KEY_SECRET in the environment.
"""

from memex_export.main import main

if __name__ == "__main__":
    main()
