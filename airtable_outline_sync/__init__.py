"""
AirTable → Outline Sync

Mirrors one AirTable table into a single Outline wiki document,
rendered as a Markdown table.
"""

__version__ = "1.0.0"

from airtable_outline_sync.sync_engine import run_sync  # noqa: E402

__all__ = ["run_sync", "__version__"]
