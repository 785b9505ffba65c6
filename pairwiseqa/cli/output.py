"""Rich terminal output for pairwise results.

Value cells are colored by the tag of the chosen value.

Example:
    >>> output = CLIOutput()
    >>> output.results_table(results, step_names=["Browser", "OS"])
    >>> output.coverage_summary(stats)
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pairwiseqa.combinatorial import CoverageStats
from pairwiseqa.errors import PairwiseQAError
from pairwiseqa.models import PairwiseResult, Step, Tag
from pairwiseqa.reporters import CSVReporter

TAG_STYLES = {
    Tag.GREEN: "green",
    Tag.YELLOW: "yellow",
    Tag.RED: "red",
}


def tag_style(tag: Tag) -> str:
    return TAG_STYLES.get(tag, "yellow")


def build_results_table(
    results: Sequence[PairwiseResult],
    step_names: Sequence[str] | None = None,
    title: str | None = None,
) -> Table:
    """Build a table with one row per result and a trailing Description column."""
    columns = CSVReporter.columns(results, step_names)
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    for column in columns:
        table.add_column(column)

    for index, result in enumerate(results, start=1):
        cells: list[Text | str] = [str(index)]
        for name in columns[:-1]:
            value = result.values.get(name, "")
            cells.append(Text(value, style=tag_style(result.tag_for(name))))
        cells.append(result.description)
        table.add_row(*cells)

    return table


def build_steps_table(steps: Sequence[Step]) -> Table:
    table = Table(title="Steps")
    table.add_column("Step")
    table.add_column("Values")
    for step in steps:
        values = Text()
        for i, value in enumerate(step.filled_values):
            if i:
                values.append(", ")
            values.append(value.value.strip(), style=tag_style(value.tag))
        if not values:
            values.append(f"({step.name})", style="dim")
        table.add_row(step.name, values)
    return table


class CLIOutput:
    """Writes tables, summaries and errors to a rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def results_table(
        self,
        results: Sequence[PairwiseResult],
        step_names: Sequence[str] | None = None,
        title: str | None = "Pairwise Test Combinations",
    ) -> None:
        if not results:
            self.console.print("[dim]No pairwise combinations generated.[/dim]")
            return
        self.console.print(build_results_table(results, step_names, title=title))

    def steps_table(self, steps: Sequence[Step]) -> None:
        self.console.print(build_steps_table(steps))

    def coverage_summary(self, stats: CoverageStats) -> None:
        style = "green" if stats.complete else "yellow"
        self.console.print(
            Panel(
                f"{stats.test_count} test(s) selected from {stats.total_assignments} combinations\n"
                f"{stats.covered_pairs}/{stats.total_pairs} pairs covered ({stats.coverage_pct:.1f}%)",
                title="Coverage",
                border_style=style,
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green][OK][/green] {message}")

    def error(self, error: PairwiseQAError) -> None:
        self.console.print(Text(error.format_verbose(), style="red"))
