"""
Main sync engine for AirTable → Outline synchronization.

Orchestrates one full run:
- Record fetching from AirTable
- Markdown rendering
- Document create/update in Outline

Runs are stateless: every run re-fetches and re-renders everything.
"""

from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from airtable_outline_sync.airtable_api import AirtableAPI
from airtable_outline_sync.config import Config
from airtable_outline_sync.markdown_converter import MarkdownConverter
from airtable_outline_sync.outline_api import OutlineAPI


@dataclass
class SyncResult:
    """Result of a sync operation."""

    record_count: int
    document_id: Optional[str] = None
    document_url: Optional[str] = None
    created: bool = False
    dry_run: bool = False

    @property
    def summary(self) -> str:
        """One-line, human-readable summary."""
        if self.dry_run:
            return f"Dry run: rendered {self.record_count} records (no document written)"
        return f"Successfully synced {self.record_count} records to Outline"

    def __str__(self) -> str:
        return self.summary


class SyncEngine:
    """
    Main orchestrator for AirTable → Outline synchronization.

    Coordinates all components to perform the sync:
    1. Fetch all records from AirTable
    2. Render them as a Markdown table
    3. Create or update the Outline document

    Any failure aborts the run and is raised unchanged; nothing is
    retried or rolled back.
    """

    def __init__(
        self,
        config: Config,
        airtable_api: Optional[AirtableAPI] = None,
        outline_api: Optional[OutlineAPI] = None,
        markdown_converter: Optional[MarkdownConverter] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize sync engine.

        Args:
            config: Configuration instance.
            airtable_api: Optional source client (built from config if omitted).
            outline_api: Optional destination client (built from config if omitted).
            markdown_converter: Optional renderer.
            console: Where progress output goes (defaults to stdout).
        """
        self.config = config
        self.airtable_api = airtable_api or AirtableAPI(config)
        self.outline_api = outline_api or OutlineAPI(config)
        self.markdown_converter = markdown_converter or MarkdownConverter()
        self.console = console or Console()

    def render(self) -> tuple[str, int]:
        """Fetch and render without writing. Returns (markdown, record_count)."""
        self.console.print(f"[cyan]Fetching records from[/cyan] {self.config.table_label}")
        records = self.airtable_api.fetch_all()
        self.console.print(f"[cyan]Fetched {len(records)} records[/cyan]")

        markdown = self.markdown_converter.convert(records, self.config.table_label)
        return markdown, len(records)

    def sync(self) -> SyncResult:
        """
        Perform full synchronization.

        Returns:
            SyncResult with details of the operation.
        """
        self.console.print("\n[bold blue]🔄 Starting AirTable → Outline Sync[/bold blue]\n")

        markdown, record_count = self.render()

        if self.config.dry_run:
            self.console.print(Markdown(markdown))
            result = SyncResult(record_count=record_count, dry_run=True)
            self._print_summary(result)
            return result

        title = self.config.document_title
        action = "Creating" if self.outline_api.will_create else "Updating"
        self.console.print(f"[cyan]{action} Outline document:[/cyan] {title}")

        document = self.outline_api.upsert(title, markdown)

        result = SyncResult(
            record_count=record_count,
            document_id=document.id,
            document_url=document.url,
            created=document.created,
        )

        if result.created and result.document_id:
            self.console.print(
                f"[yellow]Created document {result.document_id}. "
                f"Set OUTLINE_DOCUMENT_ID to update it on future runs.[/yellow]"
            )

        self._print_summary(result)

        return result

    def _print_summary(self, result: SyncResult) -> None:
        """Print sync summary."""
        self.console.print("\n" + "=" * 50)
        self.console.print("[bold]Sync Summary[/bold]")
        self.console.print("=" * 50)

        table = Table(show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Table", self.config.table_label)
        table.add_row("Records", str(result.record_count))
        table.add_row("API requests", str(self.airtable_api.request_count))
        if not result.dry_run:
            table.add_row("Document created", "✓" if result.created else "✗")
            table.add_row("Document", result.document_url or result.document_id or "-")

        self.console.print(table)
        self.console.print(f"\n[green]{result.summary}[/green]\n")


def run_sync(config: Config) -> str:
    """
    Run one sync and return its one-line summary.

    Raises:
        SyncError: Any failure from fetching or writing, unchanged.
    """
    return SyncEngine(config).sync().summary
