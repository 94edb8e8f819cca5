"""flowframe CLI - render a Flow JSON report as code frames."""

from pathlib import Path
from typing import TextIO

import click

from flowframe import __version__
from flowframe.config.loader import load_config
from flowframe.config.models import FlowFrameConfig
from flowframe.core.errors import FlowFrameError
from flowframe.core.logging import configure_logging, get_logger
from flowframe.report.formatter import format_report
from flowframe.report.options import ReportOptions, get_default_options

log = get_logger("cli")


def build_options(
    config: FlowFrameConfig,
    *,
    no_color: bool,
    highlight_code: bool,
) -> ReportOptions:
    """Defaults, then config file/env values, then command line flags."""
    defaults = get_default_options()
    reporter = config.reporter

    ci = defaults.ci if reporter.ci is None else reporter.ci
    color = reporter.color
    if color is None:
        color = False if ci else defaults.color
    if no_color:
        color = False

    return ReportOptions(
        color=color,
        highlight_code=highlight_code or reporter.highlight_code,
        ci=ci,
        theme=reporter.theme,
        lines_above=reporter.lines_above,
        lines_below=reporter.lines_below,
    )


@click.command()
@click.version_option(version=__version__, prog_name="flowframe")
@click.argument("report", default="-", type=click.File("r", encoding="utf-8"))
@click.option("--no-color", is_flag=True, help="Disable ANSI colors")
@click.option(
    "--highlight-code",
    is_flag=True,
    help="Syntax-highlight source lines in frames (ignored without color)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Extra YAML config file",
)
@click.option(
    "--fail-on-errors",
    is_flag=True,
    help="Exit with status 1 when the report contains errors",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    report: TextIO,
    no_color: bool,
    highlight_code: bool,
    config_path: Path | None,
    fail_on_errors: bool,
    verbose: bool,
) -> None:
    """Render a Flow JSON report (flow check --json --json-version 2).

    REPORT is a file path, or '-' (default) to read standard input.
    """
    try:
        config = load_config(config_path)
    except FlowFrameError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    options = build_options(config, no_color=no_color, highlight_code=highlight_code)
    log.debug("cli_options", color=bool(options.color), highlight_code=options.highlight_code, ci=options.ci)

    try:
        output = format_report(report.read(), options)
    except FlowFrameError as e:
        log.debug("report_failed", error=e.error_name, **e.details)
        raise click.ClickException(str(e)) from e

    if output is None:
        return

    click.echo(output, color=bool(options.color))
    if fail_on_errors:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
