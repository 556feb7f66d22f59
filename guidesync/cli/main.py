"""Main CLI entry point for the guidesync command.

This module provides the Typer application that feeds local files (or
stdin) through the converter and writes the result to stdout.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import typer

from guidesync import __version__
from guidesync.cli.config import ConfigLoader
from guidesync.cli.models import ConverterConfig, ExitCode
from guidesync.cli.output import OutputHandler
from guidesync.content_converter import MarkdownConverter
from guidesync.errors import ConversionError, FilesystemError, GuidesyncError

app = typer.Typer(
    name="guidesync",
    help="""Convert help-center articles between Markdown and HTML.

QUICK START:
  guidesync to-html article.md            # Markdown → HTML on stdout
  guidesync to-markdown body.html         # HTML → Markdown on stdout
  cat body.html | guidesync to-markdown   # Read from stdin""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'guidesync' namespace logger so third-party
    libraries keep their own settings.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("guidesync")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"guidesync_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _resolve_path(source: str, contents_dir: str) -> str:
    """Resolve a relative input path against the configured contents directory."""
    if os.path.isabs(source):
        return source
    return os.path.join(contents_dir, source)


def _describe_source(source: str) -> str:
    return "stdin" if source == STDIN_MARKER else source


def _read_source(source: str, contents_dir: str) -> str:
    """Read one input, either a file or stdin.

    Raises:
        FilesystemError: If the file cannot be read
    """
    if source == STDIN_MARKER:
        return sys.stdin.read()

    path = _resolve_path(source, contents_dir)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise FilesystemError(path, 'read', 'File not found')
    except PermissionError:
        raise FilesystemError(path, 'read', 'Permission denied')
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(path, 'read', str(e))


def _convert(convert: Callable[[str], str], content: str, source: str) -> str:
    """Run one conversion, wrapping library failures in ConversionError."""
    try:
        return convert(content)
    except Exception as e:
        raise ConversionError(f"Conversion failed: {e}", source) from e


def _load_config(ctx: typer.Context, output: OutputHandler) -> ConverterConfig:
    config_path = ctx.obj["config_path"]
    try:
        config = ConfigLoader.load(config_path)
    except GuidesyncError as e:
        logger.error(f"Failed to load config: {e}")
        output.error(f"Failed to load config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    output.debug(f"Loaded configuration from {config_path}")
    return config


def _run_conversion(
    ctx: typer.Context,
    files: Optional[List[str]],
    to_html: bool,
    link_target_blank: bool = False,
) -> None:
    """Convert every input and echo the results in order.

    Stops at the first failure; nothing is written for the failing input.
    """
    output = OutputHandler(verbosity=ctx.obj["verbosity"], no_color=ctx.obj["no_color"])
    config = _load_config(ctx, output)

    enable_link_target_blank = config.enable_link_target_blank or link_target_blank

    converter = MarkdownConverter(enable_link_target_blank=enable_link_target_blank)
    convert = converter.markdown_to_html if to_html else converter.html_to_markdown

    for source in files or [STDIN_MARKER]:
        output.info(f"Converting {_describe_source(source)}")
        try:
            content = _read_source(source, config.contents_dir)
            result = _convert(convert, content, source)
        except FilesystemError as e:
            output.error(str(e))
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        except ConversionError as e:
            logger.debug(f"Conversion of {source} failed", exc_info=e.__cause__)
            output.error(str(e))
            raise typer.Exit(ExitCode.CONVERSION_ERROR)

        if result and not result.endswith("\n"):
            result += "\n"
        typer.echo(result, nl=False)
        output.success(f"Converted {source}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to the configuration file (default: ~/.config/guidesync/config.yaml)",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=errors only, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Convert help-center articles between Markdown and HTML."""
    _configure_logging(verbosity, logdir)
    ctx.obj = {
        "config_path": config_path or ConfigLoader.default_path(),
        "verbosity": verbosity,
        "no_color": no_color,
    }


@app.command("to-html")
def to_html_command(
    ctx: typer.Context,
    files: Optional[List[str]] = typer.Argument(
        None,
        help="Markdown files to convert ('-' or nothing reads stdin)",
    ),
    link_target_blank: bool = typer.Option(
        False,
        "--link-target-blank",
        help="Open external links in a new tab (also enabled by the config file)",
    ),
) -> None:
    """Render Markdown files to HTML on stdout.

    \b
    EXAMPLE:
      guidesync to-html --link-target-blank article.md > body.html
    """
    _run_conversion(ctx, files, to_html=True, link_target_blank=link_target_blank)


@app.command("to-markdown")
def to_markdown_command(
    ctx: typer.Context,
    files: Optional[List[str]] = typer.Argument(
        None,
        help="HTML files to convert ('-' or nothing reads stdin)",
    ),
) -> None:
    """Render HTML files to Markdown on stdout.

    \b
    EXAMPLE:
      guidesync to-markdown body.html > article.md
    """
    _run_conversion(ctx, files, to_html=False)


@app.command("version")
def version_command() -> None:
    """Show version and exit."""
    typer.echo(f"guidesync version {__version__}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m guidesync.cli.main
if __name__ == "__main__":
    main()
