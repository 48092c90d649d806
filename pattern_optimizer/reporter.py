"""Report generation for analysis results.

Generates formatted reports showing the per-axis scores, applied techniques,
knowledge domains and the rewritten code.
"""

from __future__ import annotations

import json
from typing import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .schemas import AnalysisResult, DashboardStats, Domain


def format_line_ranges(lines: list[int]) -> str:
    """Collapse sorted line numbers into ranges, e.g. [1, 2, 3, 7] -> "1-3, 7"."""
    if not lines:
        return "-"

    ranges = []
    start = prev = lines[0]
    for line in lines[1:]:
        if line == prev + 1:
            prev = line
            continue
        ranges.append(f"{start}-{prev}" if start != prev else str(start))
        start = prev = line
    ranges.append(f"{start}-{prev}" if start != prev else str(start))
    return ", ".join(ranges)


def generate_json_report(result: AnalysisResult) -> str:
    """Generate a JSON report from the result.

    Args:
        result: The analysis result.

    Returns:
        JSON string in the camelCase wire shape.
    """
    return json.dumps(result.to_dict(), indent=2)


def generate_text_report(result: AnalysisResult, verbose: bool = False) -> str:
    """Generate a plain text report from the result.

    Args:
        result: The analysis result.
        verbose: Include the optimized code.

    Returns:
        Formatted text report.
    """
    lines = []
    metrics = result.metrics

    lines.append("=" * 70)
    lines.append("                  Code Optimization Report")
    lines.append("=" * 70)
    lines.append("")
    lines.append(f"File: {result.filename} ({result.language})")
    lines.append("")

    lines.append("SCORES")
    lines.append("-" * 70)
    lines.append(f"  Performance:          {metrics.performance_score:>3}")
    lines.append(f"  Security:             {metrics.security_score:>3}")
    lines.append(f"  Readability:          {metrics.readability_score:>3}")
    lines.append(f"  Improvement:          {metrics.improvement_percentage:>3}%")
    lines.append(f"  Optimized lines:      {format_line_ranges(metrics.optimized_lines)}")
    lines.append("")

    lines.append("INSIGHTS")
    lines.append("-" * 70)
    for insight in result.insights:
        lines.append(f"  [{insight.type}] {insight.applied_technique}")
        lines.append(f"    {insight.description}")
        lines.append(f"    Impact: {insight.impact}")
    lines.append("")

    if result.domains:
        lines.append("KNOWLEDGE DOMAINS")
        lines.append("-" * 70)
        for domain in result.domains:
            lines.append(f"  {domain.name:<30} {', '.join(domain.algorithms)}")
        lines.append("")

    if verbose:
        lines.append("OPTIMIZED CODE")
        lines.append("-" * 70)
        lines.append(result.optimized_code)
        lines.append("")

    lines.append("=" * 70)

    return "\n".join(lines)


def generate_markdown_report(result: AnalysisResult, verbose: bool = False) -> str:
    """Generate a markdown report from the result.

    Args:
        result: The analysis result.
        verbose: Include the original and optimized code blocks.

    Returns:
        Markdown text.
    """
    metrics = result.metrics
    lines = [
        "# Code Optimization Report",
        "",
        f"**File:** `{result.filename}` ({result.language})",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "|---|---|",
        f"| Performance score | {metrics.performance_score} |",
        f"| Security score | {metrics.security_score} |",
        f"| Readability score | {metrics.readability_score} |",
        f"| Improvement | {metrics.improvement_percentage}% |",
        f"| Optimized lines | {format_line_ranges(metrics.optimized_lines)} |",
        "",
        "## Insights",
        "",
    ]

    for insight in result.insights:
        lines.append(f"- **{insight.applied_technique}** ({insight.type}): {insight.description}")
        lines.append(f"  - Impact: {insight.impact}")
    lines.append("")

    if result.domains:
        lines.append("## Knowledge Domains")
        lines.append("")
        lines.append("| Domain | Techniques |")
        lines.append("|---|---|")
        for domain in result.domains:
            lines.append(f"| {domain.name} | {', '.join(domain.algorithms)} |")
        lines.append("")

    if verbose:
        fence = "```"
        lines.append("## Original Code")
        lines.append("")
        lines.append(f"{fence}{result.language}")
        lines.append(result.original_code)
        lines.append(fence)
        lines.append("")
        lines.append("## Optimized Code")
        lines.append("")
        lines.append(f"{fence}{result.language}")
        lines.append(result.optimized_code)
        lines.append(fence)
        lines.append("")

    return "\n".join(lines)


def print_rich_report(
    result: AnalysisResult, verbose: bool = False, console: Console | None = None
) -> None:
    """Print a rich-formatted report to the console.

    Args:
        result: The analysis result.
        verbose: Also show the optimized code with syntax highlighting.
        console: Console to print to (defaults to stdout).
    """
    console = console or Console()
    metrics = result.metrics

    console.print()
    console.print(
        Panel.fit(
            f"[bold]Code Optimization Report[/bold]\n[dim]{result.filename} ({result.language})[/dim]",
            border_style="blue",
        )
    )
    console.print()

    score_table = Table(title="Scores", show_header=False, box=None)
    score_table.add_column("Metric", style="cyan")
    score_table.add_column("Value", justify="right")
    score_table.add_row("Performance", str(metrics.performance_score))
    score_table.add_row("Security", str(metrics.security_score))
    score_table.add_row("Readability", str(metrics.readability_score))
    score_table.add_row("Improvement", f"[bold green]{metrics.improvement_percentage}%[/bold green]")
    score_table.add_row("Optimized lines", format_line_ranges(metrics.optimized_lines))
    console.print(score_table)
    console.print()

    insight_table = Table(title="Insights")
    insight_table.add_column("Type", style="dim")
    insight_table.add_column("Technique", style="green")
    insight_table.add_column("Description", max_width=40)
    insight_table.add_column("Impact", max_width=40)
    for insight in result.insights:
        insight_table.add_row(
            insight.type, insight.applied_technique, insight.description, insight.impact
        )
    console.print(insight_table)

    if result.domains:
        console.print()
        domain_table = Table(title="Knowledge Domains")
        domain_table.add_column("Domain", style="cyan")
        domain_table.add_column("Techniques")
        for domain in result.domains:
            domain_table.add_row(domain.name, ", ".join(domain.algorithms))
        console.print(domain_table)

    if verbose:
        console.print()
        console.print(
            Panel(
                Syntax(result.optimized_code, result.language, line_numbers=True),
                title="[bold]Optimized Code[/bold]",
                border_style="green",
            )
        )

    console.print()


def generate_summary_report(stats: DashboardStats) -> str:
    """Generate a plain text aggregate summary across stored analyses."""
    lines = [
        "",
        "=" * 70,
        "              AGGREGATE SUMMARY",
        "=" * 70,
        f"  Files analyzed:        {stats.analysis_count}",
        f"  Performance average:   {stats.performance_score}",
        f"  Security average:      {stats.security_score}",
        f"  Readability average:   {stats.readability_score}",
    ]

    if stats.recent_optimizations:
        lines.append("")
        lines.append("Recent optimizations:")
        for opt in stats.recent_optimizations:
            lines.append(
                f"  {opt['filename']:<24} {opt['type']:<12} {opt['improvement']:<20} {opt['domain']}"
            )

    if stats.domains:
        lines.append("")
        lines.append("Domains:")
        for row in stats.domains:
            lines.append(
                f"  {row['name']:<24} {row['algorithmsApplied']:>3} applied  "
                f"{row['learningAccuracy']:>3}% accuracy"
            )

    lines.append("=" * 70)
    return "\n".join(lines)


def print_rich_summary(stats: DashboardStats, console: Console | None = None) -> None:
    """Print the aggregate summary with rich tables."""
    console = console or Console()

    console.print()
    console.print(
        Panel.fit(
            f"[bold green]{stats.analysis_count}[/bold green] file(s) analyzed\n"
            f"Performance [bold]{stats.performance_score}[/bold]  "
            f"Security [bold]{stats.security_score}[/bold]  "
            f"Readability [bold]{stats.readability_score}[/bold]",
            title="[bold]Aggregate Summary[/bold]",
            border_style="green",
        )
    )

    if stats.recent_optimizations:
        recent_table = Table(title="Recent Optimizations")
        recent_table.add_column("File", style="cyan")
        recent_table.add_column("Type", style="dim")
        recent_table.add_column("Improvement", style="green")
        recent_table.add_column("Domain")
        for opt in stats.recent_optimizations:
            recent_table.add_row(opt["filename"], opt["type"], opt["improvement"], opt["domain"])
        console.print(recent_table)

    if stats.domains:
        domain_table = Table(title="Domains")
        domain_table.add_column("Domain", style="cyan")
        domain_table.add_column("Applied", justify="right")
        domain_table.add_column("Accuracy", justify="right")
        for row in stats.domains:
            domain_table.add_row(
                row["name"], str(row["algorithmsApplied"]), f"{row['learningAccuracy']}%"
            )
        console.print(domain_table)

    console.print()


def generate_domains_report(domains: Iterable[Domain]) -> str:
    """List knowledge domains and their algorithms as plain text."""
    lines = []
    for domain in domains:
        status = "" if domain.active else " (inactive)"
        lines.append(f"{domain.name}{status} - {domain.learning_accuracy}% accuracy")
        lines.append(f"  {domain.description}")
        for technique in domain.techniques():
            lines.append(f"    - {technique}")
    return "\n".join(lines)
