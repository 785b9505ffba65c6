"""CLI commands for pairwiseqa."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from pairwiseqa.cli.output import CLIOutput
from pairwiseqa.combinatorial import PairwiseSelector, build_domains
from pairwiseqa.config import PairwiseConfig, load_config
from pairwiseqa.errors import PairwiseQAError
from pairwiseqa.reporters import CSVReporter, JSONReporter
from pairwiseqa.state import Workspace
from pairwiseqa.storage import dump_document, load_document, load_steps


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(output: CLIOutput, error: PairwiseQAError) -> NoReturn:
    output.error(error)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """pairwiseqa - pairwise test combination generator."""
    ctx.ensure_object(dict)
    output = CLIOutput()
    ctx.obj["output"] = output

    try:
        config_obj = load_config(config)
    except PairwiseQAError as e:
        _fail(output, e)
    if verbose:
        config_obj.verbose = True

    ctx.obj["config"] = config_obj
    setup_logging(config_obj.verbose)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--max-results", "-n", type=click.IntRange(min=1), help="Maximum number of test cases")
@click.option("--output", "-o", "output_path", type=click.Path(), help="Write the result document here")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def generate(
    ctx: click.Context,
    input_path: str,
    max_results: int | None,
    output_path: str | None,
    output_format: str,
) -> None:
    """Generate pairwise combinations from step definitions (YAML or JSON)."""
    config: PairwiseConfig = ctx.obj["config"]
    output: CLIOutput = ctx.obj["output"]
    limit = max_results or config.max_results

    try:
        workspace = Workspace(steps=tuple(load_steps(input_path)))
        workspace = workspace.generate(max_results=limit, max_assignments=config.max_assignments)
    except PairwiseQAError as e:
        _fail(output, e)

    reporter = JSONReporter(indent=config.json_indent)
    document = reporter.build_document(workspace.results, workspace.steps)

    if output_format == "json":
        click.echo(dump_document(document, indent=config.json_indent))
    else:
        output.steps_table(workspace.steps)
        output.results_table(workspace.results, workspace.step_names)
        selector = PairwiseSelector(build_domains(workspace.steps), max_results=limit)
        output.coverage_summary(selector.coverage_stats(workspace.results))

    if output_path:
        saved = reporter.write_document(document, output_path)
        if output_format == "table":
            output.success(f"Saved {len(workspace.results)} result(s) to {saved}")


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def show(ctx: click.Context, document_path: str) -> None:
    """Display the results stored in an exported document."""
    output: CLIOutput = ctx.obj["output"]

    try:
        workspace = Workspace.from_document(load_document(document_path))
    except PairwiseQAError as e:
        _fail(output, e)

    output.steps_table(workspace.steps)
    output.results_table(workspace.results, workspace.step_names)


@cli.command()
@click.argument("document_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    "export_format",
    type=click.Choice(["csv", "json"]),
    default="csv",
    help="Export format",
)
@click.option("--output", "-o", "output_path", type=click.Path(), help="Destination file or directory")
@click.pass_context
def export(
    ctx: click.Context,
    document_path: str,
    export_format: str,
    output_path: str | None,
) -> None:
    """Export a document's results as CSV or as a fresh JSON document."""
    config: PairwiseConfig = ctx.obj["config"]
    output: CLIOutput = ctx.obj["output"]
    destination = Path(output_path) if output_path else Path(config.output_dir)

    try:
        workspace = Workspace.from_document(load_document(document_path))
        if export_format == "csv":
            reporter = CSVReporter(filename=config.csv_filename)
            saved = reporter.save(workspace.results, destination, step_names=workspace.step_names)
        else:
            saved = JSONReporter(indent=config.json_indent).save(
                workspace.results, destination, steps=workspace.steps
            )
    except PairwiseQAError as e:
        _fail(output, e)

    output.success(f"Exported {len(workspace.results)} result(s) to {saved}")
