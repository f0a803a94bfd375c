"""Main CLI entry point for contentkpi."""

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError as PydanticValidationError

from contentkpi import __version__
from contentkpi.aggregator import Aggregator
from contentkpi.core.exceptions import ConfigurationError, ContentKPIError
from contentkpi.core.logging import configure_logging
from contentkpi.core.settings import (
    ContentKPISettings,
    generate_example_config,
    generate_json_schema,
    get_settings,
)
from contentkpi.issues import (
    GroupedIssue,
    NormalizedIssue,
    Severity,
    filter_issues,
)
from contentkpi.loader import load_file
from contentkpi.reporters import create_reporter, get_registry

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 2  # Error (invalid config, unreadable input, etc.)

SEVERITY_CHOICES = [str(s) for s in Severity]


class ConfigContext:
    """Context object to hold configuration state."""

    def __init__(self) -> None:
        """Initialize config context."""
        self.config_file: Path | None = None
        self.verbose: bool = False

    def load_settings(self, **overrides: Any) -> ContentKPISettings:
        """Build settings from the config file, environment and overrides.

        Raises:
            ConfigurationError: If any value fails validation.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        try:
            settings = get_settings(config_file=self.config_file, **overrides)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        configure_logging(
            level="DEBUG" if self.verbose else settings.log_level,
            json_output=settings.logging.json_output,
            log_file=settings.logging.file,
            module_levels=settings.logging.modules,
        )
        return settings


pass_config = click.make_pass_decorator(ConfigContext, ensure=True)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to contentkpi.config.yaml configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.version_option(version=__version__, prog_name="contentkpi")
@click.pass_context
def cli(ctx: click.Context, config_file: Path | None, verbose: bool) -> None:
    """contentkpi - combined content KPI scoring.

    Combines page and domain analyses into one weighted score and a ranked,
    de-duplicated list of issues.

    Examples:

      # Show the combined score and the issue list
      contentkpi aggregate analyses.json

      # Machine-readable report
      contentkpi aggregate analyses.json --format=json --output=report.json

      # Only critical issues
      contentkpi issues analyses.json --severity=critical
    """
    ctx.ensure_object(ConfigContext)
    config_ctx = ctx.obj
    config_ctx.verbose = verbose
    config_ctx.config_file = config_file

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command(name="version")
def version_cmd() -> None:
    """Show contentkpi version information.

    Examples:

      contentkpi version
    """
    click.echo(f"contentkpi v{__version__}")
    click.echo(f"Python: {sys.version.split()[0]}")
    click.echo(f"Platform: {sys.platform}")


@cli.command(name="aggregate")
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(get_registry().list_reporters()),
    default=None,
    help="Report format (defaults to the configured default_format)",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the report to a file instead of stdout",
)
@click.option(
    "--page-weight",
    type=float,
    default=None,
    help="Share of the combined score taken by page analysis (0-1)",
)
@click.option(
    "--view",
    is_flag=True,
    help="JSON only: emit rounded scores, bands and colors",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable ANSI colors in console output",
)
@pass_config
def aggregate_cmd(
    config_ctx: ConfigContext,
    input_file: Path,
    output_format: str | None,
    output_file: Path | None,
    page_weight: float | None,
    view: bool,
    no_color: bool,
) -> None:
    """Combine page and domain scores and rank their issues.

    INPUT_FILE is a JSON or YAML document holding ``pageScores`` and
    ``domainAnalyses`` lists.

    Exit Codes:

      0 - Report produced
      2 - Error occurred (invalid config, unreadable input, etc.)
    """
    try:
        settings = config_ctx.load_settings(page_weight=page_weight)
        aggregator = Aggregator.from_settings(settings)
        pages, domains = load_file(input_file)
        report = aggregator.aggregate(pages, domains)

        output_format = output_format or settings.default_format
        if output_format == "json":
            reporter = create_reporter(
                "json", {"output_file": output_file, "view": view}
            )
            reporter.report(report)
        elif output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w") as f:
                reporter = create_reporter(
                    "console",
                    {"output": f, "use_colors": False, "verbose": config_ctx.verbose},
                )
                reporter.report(report)
        else:
            reporter = create_reporter(
                "console",
                {"use_colors": not no_color, "verbose": config_ctx.verbose},
            )
            reporter.report(report)

    except ContentKPIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except OSError as e:
        click.echo(f"Error: cannot write report: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if output_file:
        click.echo(f"Report written to {output_file}", err=True)
    sys.exit(EXIT_SUCCESS)


@cli.command(name="issues")
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--severity",
    "-s",
    type=click.Choice(SEVERITY_CHOICES),
    default=None,
    help="Only show issues of this severity",
)
@click.option(
    "--dimension",
    "-d",
    default=None,
    help="Only show issues of this dimension",
)
@click.option(
    "--grouped/--flat",
    default=True,
    help="Group identical issues across sources (default) or list every one",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output issues as JSON",
)
@pass_config
def issues_cmd(
    config_ctx: ConfigContext,
    input_file: Path,
    severity: str | None,
    dimension: str | None,
    grouped: bool,
    as_json: bool,
) -> None:
    """List issues from page and domain analyses, most severe first.

    Examples:

      contentkpi issues analyses.json

      contentkpi issues analyses.json --flat --dimension=technical
    """
    try:
        settings = config_ctx.load_settings()
        aggregator = Aggregator.from_settings(settings)
        pages, domains = load_file(input_file)
        report = aggregator.aggregate(pages, domains)
    except ContentKPIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if grouped:
        groups = [
            g
            for g in report.issues
            if _group_matches(g, severity, dimension)
        ]
        if as_json:
            click.echo(json.dumps([g.to_dict() for g in groups], indent=2))
        else:
            _print_groups(groups)
    else:
        flat = filter_issues(
            report.flat_issues,
            dimension=dimension,
            severity=severity,
        )
        if as_json:
            click.echo(json.dumps([i.to_dict() for i in flat], indent=2))
        else:
            _print_flat(flat)

    sys.exit(EXIT_SUCCESS)


def _group_matches(
    group: GroupedIssue, severity: str | None, dimension: str | None
) -> bool:
    if severity and group.severity != severity:
        return False
    if dimension and group.dimension.lower() != dimension.lower():
        return False
    return True


def _print_groups(groups: list[GroupedIssue]) -> None:
    if not groups:
        click.echo("No issues found.")
        return

    click.echo(f"Issues ({len(groups)}):")
    for group in groups:
        issue = group.representative_issue
        click.echo(
            f"  [{group.severity}] {issue.description}"
            f" ({group.dimension}; {group.source_label}, {group.occurrences}x)"
        )


def _print_flat(issues: list[NormalizedIssue]) -> None:
    if not issues:
        click.echo("No issues found.")
        return

    click.echo(f"Issues ({len(issues)}):")
    for issue in issues:
        click.echo(
            f"  [{issue.severity}] {issue.description}"
            f" ({issue.dimension}; {issue.source})"
        )


@cli.command(name="config")
@click.option(
    "--example",
    is_flag=True,
    help="Print an example contentkpi.config.yaml",
)
@click.option(
    "--schema",
    is_flag=True,
    help="Print the JSON Schema of the configuration file",
)
@pass_config
def config_cmd(config_ctx: ConfigContext, example: bool, schema: bool) -> None:
    """Show the effective configuration.

    Values come from CONTENTKPI_* environment variables, then
    contentkpi.config.yaml, then built-in defaults.

    Examples:

      contentkpi config

      contentkpi config --example > contentkpi.config.yaml
    """
    if example:
        click.echo(generate_example_config(), nl=False)
        sys.exit(EXIT_SUCCESS)

    if schema:
        click.echo(json.dumps(generate_json_schema(), indent=2))
        sys.exit(EXIT_SUCCESS)

    try:
        settings = config_ctx.load_settings()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(yaml.safe_dump(settings.to_dict(), sort_keys=False), nl=False)
    sys.exit(EXIT_SUCCESS)


def main() -> None:
    """Main entry point for the CLI."""
    cli(auto_envvar_prefix="CONTENTKPI")


if __name__ == "__main__":
    main()
