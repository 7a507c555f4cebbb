"""
Discrepancy checker CLI - scan a document corpus for conflicting numbers.

Usage:
    python cli.py scan <root> [--output PATH] [--format markdown|json]
    python cli.py facts <root> [--kind KIND] [--search TEXT] [--limit N]
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from discrepancy.config import Config
from discrepancy.corpus import CorpusError
from discrepancy.analysis.scanner import DiscrepancyScanner
from discrepancy.models import ConflictReport, FactKind
from discrepancy.reporting import write_report

console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFLICTS = 2


def _check_config() -> bool:
    """Print configuration problems; True when the config is usable."""
    issues = Config.validate()
    if issues:
        console.print("[red]Configuration Error:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
    return not issues


def print_summary(report: ConflictReport):
    """Display the scan summary and conflict overview."""
    console.print(Panel.fit(
        "[bold blue]Discrepancy Scan[/bold blue]",
        border_style="blue"
    ))

    stats_table = Table(show_header=False, box=None)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="green")

    stats_table.add_row("Documents Scanned", str(report.documents_scanned))
    stats_table.add_row("Documents Skipped", str(report.documents_skipped))
    stats_table.add_row("Facts", str(report.total_facts))
    stats_table.add_row("Context Keys", str(report.unique_keys))
    stats_table.add_row("Direct Conflicts", str(len(report.direct_conflicts)))
    stats_table.add_row("Similar-Context Groups", str(len(report.similar_context_conflicts)))

    console.print(stats_table)
    console.print()

    if report.direct_conflicts:
        table = Table(title="Conflicting numbers (same context key)")
        table.add_column("Context", style="white", max_width=50)
        table.add_column("Values", style="yellow")
        table.add_column("Documents", style="cyan", max_width=40)

        for conflict in report.direct_conflicts:
            table.add_row(
                conflict.context_key,
                "\n".join(v.display_value for v in conflict.values),
                "\n".join(", ".join(v.documents) for v in conflict.values),
            )

        console.print(table)
        console.print()


def cmd_scan(args) -> int:
    """Scan a corpus and write the discrepancy report."""
    if not _check_config():
        return EXIT_ERROR

    scanner = DiscrepancyScanner()
    console.print(f"[cyan]Scanning[/cyan] {args.root} [cyan]for text documents...[/cyan]")

    try:
        report = scanner.scan_directory(
            args.root,
            include_rich_documents=args.rich_documents,
        )
    except CorpusError as e:
        console.print(f"[red]Error:[/red] {e}")
        return EXIT_ERROR

    output = Path(args.output or Config.REPORT_PATH)
    write_report(report, output, args.format)

    print_summary(report)
    console.print(f"[green]✓[/green] Report written to {output}")
    console.print(f"Summary: {report.summary_line()}")
    console.print("Review the report before fixing.")

    if args.fail_on_conflicts and report.has_conflicts:
        return EXIT_CONFLICTS
    return EXIT_OK


def cmd_facts(args) -> int:
    """List the facts extracted from a corpus."""
    if not _check_config():
        return EXIT_ERROR

    scanner = DiscrepancyScanner()

    try:
        documents = scanner.iter_directory(
            args.root,
            include_rich_documents=args.rich_documents,
        )
        facts, scanned, _ = scanner.collect_facts(documents)
    except CorpusError as e:
        console.print(f"[red]Error:[/red] {e}")
        return EXIT_ERROR

    if args.kind:
        facts = [f for f in facts if f.kind == args.kind]

    if args.search:
        search_lower = args.search.lower()
        facts = [
            f for f in facts
            if search_lower in f.context_key or search_lower in f.raw_text.lower()
        ]

    if not facts:
        console.print("[yellow]No facts found[/yellow]")
        return EXIT_OK

    total = len(facts)
    facts = facts[:args.limit]

    table = Table(title=f"Facts ({len(facts)} of {total} shown, {scanned} documents)")
    table.add_column("Kind", style="dim", width=6)
    table.add_column("Value", style="green")
    table.add_column("Raw", style="yellow")
    table.add_column("Context", style="white", max_width=50)
    table.add_column("Document", style="cyan", max_width=30)

    for fact in facts:
        display = fact.to_display_dict()
        table.add_row(
            display["Kind"],
            display["Value"],
            display["Raw"],
            display["Context"],
            display["Document"],
        )

    console.print(table)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Discrepancy checker - find conflicting numbers across documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL)"
    )

    # Accepted after the subcommand too; SUPPRESS keeps the top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=argparse.SUPPRESS,
        help="Logging level (defaults to LOG_LEVEL)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser(
        "scan",
        parents=[common],
        help="Scan a corpus and write a report"
    )
    scan_parser.add_argument("root", help="Corpus root directory")
    scan_parser.add_argument("--output", "-o", help="Report path (defaults to REPORT_PATH)")
    scan_parser.add_argument(
        "--format", "-f",
        default="markdown",
        choices=["markdown", "json"],
        help="Report format"
    )
    scan_parser.add_argument(
        "--rich-documents",
        action="store_true",
        help="Also scan PDF and Excel files"
    )
    scan_parser.add_argument(
        "--fail-on-conflicts",
        action="store_true",
        help="Exit with status 2 when any conflict is found"
    )

    # Facts command
    facts_parser = subparsers.add_parser(
        "facts",
        parents=[common],
        help="List extracted facts"
    )
    facts_parser.add_argument("root", help="Corpus root directory")
    facts_parser.add_argument(
        "--kind", "-k",
        choices=[k.value for k in FactKind],
        help="Filter by fact kind"
    )
    facts_parser.add_argument("--search", "-s", help="Search in context and raw text")
    facts_parser.add_argument("--limit", "-n", type=int, default=50, help="Max facts to show")
    facts_parser.add_argument(
        "--rich-documents",
        action="store_true",
        help="Also scan PDF and Excel files"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    Config.setup_logging(args.log_level)

    if args.command == "scan":
        return cmd_scan(args)
    elif args.command == "facts":
        return cmd_facts(args)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
