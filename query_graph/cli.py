"""
Command-line interface for the join graph extractor.

This module reads a SQL file (or stdin), extracts the join graph of each
statement in it and prints the result as a colored summary, tables, JSON or
Graphviz DOT.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from colorama import Back, Fore, Style, init
from tabulate import tabulate

from query_graph import (
    ErrorMode,
    ExtractorConfig,
    GraphExtractor,
    NodeKind,
    ScriptSplitter,
    SqlGraph,
    highlight_segments,
)
from query_graph.exceptions import QueryGraphError
from query_graph.models.result import ExtractionOutcome
from query_graph.parser.script_splitter import StatementSpan
from query_graph.utils.highlight import (
    CATEGORY_CTE,
    CATEGORY_SUBQUERY,
    highlight_position,
    node_category,
)

HAS_COLOR = True

CATEGORY_COLORS = {
    CATEGORY_CTE: Back.GREEN,
    CATEGORY_SUBQUERY: Back.YELLOW,
}


def colorize(text: str, color: str) -> str:
    if not HAS_COLOR:
        return text
    return f"{color}{text}{Style.RESET_ALL}"


def print_success(msg: str) -> None:
    """Print success message."""
    if HAS_COLOR:
        print(f"{Fore.GREEN}[OK] {msg}{Style.RESET_ALL}")
    else:
        print(f"[OK] {msg}")


def print_error(msg: str) -> None:
    """Print error message."""
    if HAS_COLOR:
        print(f"{Fore.RED}[ERROR] {msg}{Style.RESET_ALL}", file=sys.stderr)
    else:
        print(f"[ERROR] {msg}", file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    if HAS_COLOR:
        print(f"{Fore.YELLOW}[WARN] {msg}{Style.RESET_ALL}")
    else:
        print(f"[WARN] {msg}")


def print_info(msg: str) -> None:
    """Print info message."""
    print(colorize(msg, Fore.CYAN))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="query-graph",
        description="SQL Join Graph Extractor - v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize tables and joins
  %(prog)s query.sql

  # Show the query with every located table highlighted
  %(prog)s query.sql --highlight

  # Machine-readable output
  %(prog)s query.sql --format json

  # Graphviz
  %(prog)s query.sql --format dot > query.dot

  # Read from stdin
  cat query.sql | %(prog)s -
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument("sql_file", help="SQL file to analyze ('-' for stdin)")

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json", "dot"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--highlight",
        action="store_true",
        help="Print the SQL with located tables highlighted",
    )
    output_group.add_argument(
        "--stats", action="store_true", help="Print graph statistics"
    )
    output_group.add_argument(
        "--export", "-o", metavar="FILE", help="Export the graphs to a JSON file"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    # === Configuration parameters ===
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail on internal extraction errors instead of returning an empty graph",
    )
    config_group.add_argument(
        "--no-warnings", action="store_true", help="Suppress warnings"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        query-graph query.sql
        query-graph query.sql --highlight
        query-graph query.sql --format table --stats
        query-graph query.sql --format json --export graph.json
    """
    args = build_parser().parse_args(argv)

    global HAS_COLOR
    if args.no_color or args.format in ("json", "dot"):
        HAS_COLOR = False
    else:
        init(autoreset=True)

    try:
        # 1. Read SQL
        sql_text = read_sql(args.sql_file)

        # 2. Configure extractor
        config = ExtractorConfig(
            on_internal_error=ErrorMode.FAIL if args.strict else ErrorMode.WARN,
            collect_warnings=not args.no_warnings,
        )
        extractor = GraphExtractor(config)

        # 3. Extract each statement
        results = analyze_script(extractor, sql_text)
        if not results:
            print_warning("No SQL statements found")
            sys.exit(1)

        # 4. Output
        if args.format == "json":
            print(json.dumps(results_to_dict(results), indent=2, ensure_ascii=False))
        elif args.format == "dot":
            for span, outcome, graph in results:
                print(graph.to_relation_graph().to_dot())
        else:
            for span, outcome, graph in results:
                handle_statement(span, graph, args.format, len(results) > 1)
                if args.highlight:
                    handle_highlight(sql_text, span, graph)
                if args.stats:
                    handle_stats(graph)
                if not args.no_warnings:
                    show_warnings(sql_text, span, outcome)

        # 5. Export
        if args.export:
            handle_export(results, args.export)

    except QueryGraphError as e:
        print_error(f"Graph extraction failed: {e}")
        sys.exit(1)
    except OSError as e:
        print_error(f"Cannot read input: {e}")
        sys.exit(1)


def read_sql(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    sql_file = Path(source)
    if not sql_file.exists():
        print_error(f"File not found: {source}")
        sys.exit(1)
    return sql_file.read_text(encoding="utf-8")


def analyze_script(
    extractor: GraphExtractor, sql_text: str
) -> list[tuple[StatementSpan, ExtractionOutcome, SqlGraph]]:
    """Extract every statement; graphs are shifted to file offsets."""
    results = []
    for span in ScriptSplitter().split(sql_text):
        outcome = extractor.extract_with_diagnostics(span.text)
        results.append((span, outcome, outcome.graph.shifted(span.start)))
    return results


def results_to_dict(
    results: list[tuple[StatementSpan, ExtractionOutcome, SqlGraph]]
) -> dict[str, Any]:
    statements = []
    for span, outcome, graph in results:
        entry: dict[str, Any] = {
            "statement": span.index + 1,
            "start": span.start,
            "end": span.end,
            "status": outcome.status.value,
        }
        entry.update(graph.to_dict())
        entry["warnings"] = [
            w.to_dict() | {"position": shift(w.position, span.start)}
            for w in outcome.warnings
        ]
        statements.append(entry)
    return {"statements": statements}


def shift(position: int | None, offset: int) -> int | None:
    return None if position is None else position + offset


def handle_statement(
    span: StatementSpan, graph: SqlGraph, format: str, numbered: bool
) -> None:
    """Show the nodes and links of one statement."""
    if numbered:
        print_info(f"\n=== Statement {span.index + 1} (offset {span.start}) ===")

    if graph.is_empty:
        print_warning("No tables recognized")
        return

    print_success(
        f"Found {len(graph.nodes)} node(s) and {len(graph.links)} link(s)"
    )

    if format == "table":
        node_rows = [
            [
                node.id,
                node.kind.value,
                node.table_name,
                node.alias,
                f"{node.location.start}-{node.location.end}" if node.location else "",
            ]
            for node in graph.nodes
        ]
        print(
            tabulate(
                node_rows,
                headers=["Id", "Kind", "Table", "Alias", "Location"],
                tablefmt="simple",
            )
        )
        if graph.links:
            print()
            link_rows = [
                [link.source, link.target, link.kind.value, link.condition]
                for link in graph.links
            ]
            print(
                tabulate(
                    link_rows,
                    headers=["Source", "Target", "Kind", "Condition"],
                    tablefmt="simple",
                )
            )
        return

    print("\nNodes:")
    for node in graph.nodes:
        color = Fore.GREEN if node.kind is NodeKind.CTE else Fore.CYAN
        kind = colorize(f"{node.kind.value:<5}", color)
        alias = f" AS {node.alias}" if node.has_alias else ""
        where = f" @{node.location.start}" if node.location else ""
        print(f"  {kind} {node.id}: {node.table_name}{alias}{where}")

    if graph.links:
        print("\nLinks:")
        for link in graph.links:
            print(
                f"  {link.source} -> {link.target} "
                f"[{link.kind.value}] {link.condition}"
            )


def handle_highlight(sql_text: str, span: StatementSpan, graph: SqlGraph) -> None:
    """Print the statement with located nodes marked."""
    print("\nHighlighted:")
    pieces = []
    for segment in highlight_segments(sql_text[: span.end], graph.nodes):
        if segment.end <= span.start:
            continue
        text = segment.text
        if segment.start < span.start:
            text = text[span.start - segment.start :]
        if segment.is_highlighted:
            color = CATEGORY_COLORS.get(node_category(segment.kind), Back.CYAN)
            text = colorize(text, color) if HAS_COLOR else f"[{text}]"
        pieces.append(text)
    print("".join(pieces).strip("\n"))


def handle_stats(graph: SqlGraph) -> None:
    """Print node and link counts."""
    stats = graph.to_relation_graph().get_statistics()
    print()
    print(tabulate(sorted(stats.items()), headers=["Metric", "Count"]))


def show_warnings(
    sql_text: str, span: StatementSpan, outcome: ExtractionOutcome
) -> None:
    """Show diagnostics recorded while extracting one statement."""
    if not outcome.warnings:
        return
    print_warning(f"\n{len(outcome.warnings)} warning(s):")
    for i, warning in enumerate(outcome.warnings, 1):
        print(f"  {i}. [{warning.level}] {warning.message}")
        if warning.position is not None:
            print(
                highlight_position(
                    sql_text, warning.position + span.start, context_lines=0
                )
            )


def handle_export(
    results: list[tuple[StatementSpan, ExtractionOutcome, SqlGraph]],
    output_file: str,
) -> None:
    """Export all statement graphs to JSON."""
    output_path = Path(output_file)
    output_path.write_text(
        json.dumps(results_to_dict(results), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    print_success(f"Exported to {output_path}")


if __name__ == "__main__":
    main()
