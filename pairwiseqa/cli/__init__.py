"""pairwiseqa CLI - command line interface."""

from pairwiseqa.cli.commands import cli
from pairwiseqa.cli.output import CLIOutput


def main() -> None:
    """Main entry point for the pairwiseqa CLI."""
    cli()


__all__ = ["main", "cli", "CLIOutput"]
