"""pugwrap CLI interface.

Commands:
- render: Render a pug template from a file, a string or stdin
- check: Validate that the pug executable is available
- init: Initialize pugwrap configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer

from pugwrap import __version__
from pugwrap.compiler import PugCompiler
from pugwrap.config import PugwrapConfig, create_default_config, load_config
from pugwrap.errors import CompilerIOError, CompilerReportedError
from pugwrap.options import PugOptions
from pugwrap.payload import PathPayload, RawPayload
from pugwrap.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="pugwrap",
    help="Render pug templates through the external pug compiler",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: PugwrapConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pugwrap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """pugwrap - render pug templates from Python."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    template: Annotated[
        Path | None,
        typer.Argument(help="Template file (template text is read from stdin if omitted)"),
    ] = None,
    string: Annotated[
        str | None,
        typer.Option("--string", "-s", help="Template text to render"),
    ] = None,
    obj: Annotated[
        str | None,
        typer.Option("--obj", help="Template data as JSON text"),
    ] = None,
    obj_file: Annotated[
        Path | None,
        typer.Option("--obj-file", help="File holding template data"),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Output directory passed to pug"),
    ] = None,
    pretty: Annotated[
        bool,
        typer.Option("--pretty", help="Pretty-print the markup"),
    ] = False,
    no_debug: Annotated[
        bool,
        typer.Option("--no-debug", help="Compile without debug instrumentation"),
    ] = False,
    client: Annotated[
        bool,
        typer.Option("--client", help="Compile a client-side template function"),
    ] = False,
    doctype: Annotated[
        str | None,
        typer.Option("--doctype", help="Doctype override (e.g. html, xml)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write markup to this file instead of stdout"),
    ] = None,
) -> None:
    """Render a pug template.

    Config defaults apply first; flags given here override them.

    Exit codes:
        0: Template rendered
        1: pug could not run or reported an error
    """
    if template is not None and string is not None:
        _logger.error("Pass either a template file or --string, not both")
        raise typer.Exit(1)
    if obj is not None and obj_file is not None:
        _logger.error("Pass either --obj or --obj-file, not both")
        raise typer.Exit(1)

    compiler = PugCompiler(executable=_config.compiler.executable if _config else "pug")
    options = PugOptions.from_config(_config.defaults) if _config else PugOptions()

    if obj is not None:
        options.with_object(RawPayload(obj))
    if obj_file is not None:
        options.with_object(PathPayload(obj_file))
    if out is not None:
        options.out_dir(out)
    if pretty:
        options.pretty()
    if no_debug:
        options.no_debug()
    if client:
        options.client()
    if doctype is not None:
        options.doctype_as(doctype)

    try:
        if template is not None:
            source = str(template)
            html = compiler.evaluate_with_options(template, options)
        else:
            source = "<string>" if string is not None else "<stdin>"
            text = string if string is not None else sys.stdin.read()
            html = compiler.evaluate_string_with_options(text, options)
    except CompilerReportedError as e:
        _logger.error(f"pug failed to render {template or 'template'}")
        typer.echo(e.message, err=True)
        raise typer.Exit(1)
    except CompilerIOError as e:
        _logger.error(f"Failed to run {compiler.executable}: {e}")
        raise typer.Exit(1)

    _logger.debug("Rendered template", extra={"pug": {"source": source, "chars": len(html)}})

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(html, encoding="utf-8")
        _logger.info(f"Wrote {output}")
    else:
        typer.echo(html, nl=False)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Show whether pug (and node, which runs it) can be found.

    Exit codes:
        0: pug and node found
        1: pug not found
        2: pug found, node not found
    """
    from pugwrap.utils.preflight import PreflightChecker

    executable = _config.compiler.executable if _config else "pug"
    report = PreflightChecker().check_all(executable)

    if json_output:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        if report.pug.found:
            typer.echo(f"pug:  {report.pug.path} ({report.pug.version or 'version unknown'})")
        else:
            typer.echo(f"pug:  {report.pug.name} not found, install with `{report.pug.hint}`")

        if report.node.found:
            typer.echo(f"node: {report.node.path} ({report.node.version or 'version unknown'})")
        else:
            typer.echo(f"node: not found, pug-cli needs it ({report.node.hint})")

    raise typer.Exit(report.exit_code)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Initialize pugwrap configuration in .pugwrap/config.yaml."""
    config_dir = Path(".pugwrap")
    config_dir.mkdir(exist_ok=True)
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")
