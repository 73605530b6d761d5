"""Rich console display for reconciliation run summaries."""

from typing import Any, Dict, List
from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box
from rich.markup import escape

from ...common.adapters import RecordSkip
from ..config import RunConfig
from ..models import ReconStatus, RunSummary

# Display configuration constants
MAX_SKIPPED_DISPLAY = 100  # Maximum skipped records to show


class UnifiedDisplay:
    """Rich console display for reconciliation results."""

    def __init__(self, console: Console = None):
        """Initialize display with Rich console."""
        self.console = console or Console()

    def show_header(self, run_config: RunConfig) -> None:
        """Display run header with the effective configuration."""
        header = Text("Derivatives Settlement Reconciliation", style="bold blue")
        dtcc = run_config.dtcc_settings
        cls_settings = run_config.cls_settings
        subheader = Text(
            f"Business date {run_config.business_date.isoformat()} | "
            f"DTCC cutoff {dtcc.cutoff_time.isoformat()} ({dtcc.cutoff_policy.value}) | "
            f"CLS {cls_settings.source_currency}->{cls_settings.target_currency} "
            f"{cls_settings.rate_type} | OCC {run_config.occ_settings.cmo_code} | "
            f"tolerance {run_config.tolerance}",
            style="italic",
        )
        self.console.print(Panel.fit(Group(header, subheader), border_style="blue"))

    def show_summary(self, summary: RunSummary) -> None:
        """Display per-source results and the overall status."""
        table = Table(title="Reconciliation Results", box=box.ROUNDED)
        table.add_column("Source", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Count", justify="right")
        table.add_column("Sanitized Count", justify="right")
        table.add_column("Count Delta", justify="right")
        table.add_column("Amount (USD)", justify="right", style="magenta")
        table.add_column("Sanitized Amount", justify="right")
        table.add_column("Amount Delta", justify="right")
        table.add_column("Skipped", justify="right")

        for result in summary.results:
            status_style = "bold green" if result.status == ReconStatus.MATCH else "bold red"
            skipped_style = "yellow" if result.skip_count else "dim"
            table.add_row(
                result.source_system.value,
                f"[{status_style}]{result.status.value}[/{status_style}]",
                str(result.source_total.record_count),
                str(result.sanitized_total.record_count),
                str(result.count_delta),
                f"{result.source_total.total_amount:,.2f}",
                f"{result.sanitized_total.total_amount:,.2f}",
                f"{result.amount_delta:,.2f}",
                f"[{skipped_style}]{result.skip_count}[/{skipped_style}]",
            )

        for source, error in summary.failed_sources.items():
            table.add_row(source.value, "[bold red]FAILED[/bold red]", "-", "-", "-", "-", "-", "-", "-")
            self.show_error(f"{source.value} processing aborted: {error}")

        self.console.print("\n")
        self.console.print(table)

        if summary.unrouted_count:
            self.console.print(
                f"\n[yellow]{summary.unrouted_count} records had an unknown source tag[/yellow]"
            )

        if summary.all_match:
            self.console.print("\n[green]All sources reconciled: MATCH[/green]")
        else:
            self.console.print("\n[red]Reconciliation breaks found[/red]")

    def show_bucket_totals(self, summary: RunSummary) -> None:
        """Display per-bucket totals for each source."""
        table = Table(title="Bucket Totals", box=box.SIMPLE)
        table.add_column("Source", style="cyan")
        table.add_column("Bucket", style="green")
        table.add_column("Amount (USD)", justify="right")

        for result in summary.results:
            for bucket, amount in sorted(
                result.source_total.bucket_totals.items(), key=lambda item: item[0].value
            ):
                table.add_row(result.source_system.value, bucket.value, f"{amount:,.2f}")

        self.console.print("\n")
        self.console.print(table)

    def show_skipped_records(self, skipped: List[RecordSkip]) -> None:
        """Display records dropped by data errors."""
        if not skipped:
            return

        display_count = min(len(skipped), MAX_SKIPPED_DISPLAY)
        title = f"Skipped Records ({len(skipped)} total"
        if len(skipped) > MAX_SKIPPED_DISPLAY:
            title += f", showing first {display_count}"
        title += ")"

        table = Table(title=title, box=box.SIMPLE)
        table.add_column("Source", style="cyan")
        table.add_column("Record ID", style="dim", no_wrap=True)
        table.add_column("Error", style="yellow")
        table.add_column("Reason")

        for skip in skipped[:display_count]:
            table.add_row(
                skip.source_system.value if skip.source_system else "?",
                skip.record_id or "",
                skip.error_type,
                escape(skip.reason),
            )

        self.console.print("\n")
        self.console.print(table)

    def show_rule_info(self, rule_info: Dict[str, Any]) -> None:
        """Display information about a source adapter's rules."""
        table = Table(
            title=f"{rule_info.get('source', 'Unknown')}: {rule_info.get('rule_name', 'Unknown')}",
            box=box.ROUNDED,
        )
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Source", rule_info.get("source", "Unknown"))
        table.add_row("Description", rule_info.get("description", "No description"))

        requirements = rule_info.get("requirements", [])
        if requirements:
            table.add_row("Requirements", "\n".join(f"- {req}" for req in requirements))

        self.console.print(table)

    def show_error(self, message: str) -> None:
        """Display error message."""
        self.console.print(f"\n[red]Error: {escape(message)}[/red]")
