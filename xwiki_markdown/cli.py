"""
Converts between Markdown and XWiki files and renders XWiki previews.
Converted files are written next to their source unless an output folder is
configured; previews go to stdout or to the given file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import click
from .config import ConfigError, ConverterConfig, build_config
from .constants import MARKDOWN_EXTENSIONS, XWIKI_EXTENSIONS
from .filesystem import (
    get_max_file_size,
    normalize_filepath,
    output_path_for,
    read_source,
    write_output,
)
from .images import LocationHint
from .logging_utils import configure_logging
from .markdown_to_xwiki import convert_markdown_to_xwiki
from .preview import build_preview_page
from .renderer import render_xwiki_html
from .xwiki_to_markdown import convert_xwiki_to_markdown

__all__ = ["cli"]

logger = logging.getLogger(__name__)


def _load_input(
    filepath: str, extensions: tuple[str, ...], **overrides: object
) -> tuple[Path, ConverterConfig, str]:
    base_dir = Path.cwd().resolve()
    try:
        source = normalize_filepath(filepath, base_dir, extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(source.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        content = read_source(source, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    return source, config, content


def _write(target: Path, content: str):
    try:
        write_output(target, content)
    except IOError as error:
        raise click.ClickException(str(error)) from error


def _convert_file(
    filepath: str,
    extensions: tuple[str, ...],
    target_suffix: str,
    folder_setting: str,
    output_folder: str | None,
    convert: Callable[[str], str],
    label: str,
):
    source, config, content = _load_input(
        filepath, extensions, **{folder_setting: output_folder}
    )
    target = output_path_for(source, target_suffix, getattr(config, folder_setting))
    logger.debug("Converting %s to %s", source, target)
    _write(target, convert(content))
    click.echo(f"Converted to {label}: {target.name}")


@click.group()
@click.version_option(package_name="xwiki-markdown")
@click.option("-v", "--verbose", is_flag=True, help="Log every conversion step to stderr")
def cli(verbose: bool = False):
    """Convert between Markdown and XWiki, and preview XWiki as HTML."""
    configure_logging(verbose)


@cli.command("md2xwiki")
@click.option("--output-folder", help="Folder for the .xwiki file")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def md2xwiki(filepath: str, output_folder: str | None = None):
    """
    Convert a Markdown file to XWiki syntax.

    Args:
        filepath: Markdown file to convert.
        output_folder: Override for the configured ``xwiki_output_folder``.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file cannot be read or written.

    Examples:
        xwiki-markdown md2xwiki README.md --output-folder wiki
    """
    _convert_file(
        filepath,
        MARKDOWN_EXTENSIONS,
        XWIKI_EXTENSIONS[0],
        "xwiki_output_folder",
        output_folder,
        convert_markdown_to_xwiki,
        "XWiki",
    )


@cli.command("xwiki2md")
@click.option("--output-folder", help="Folder for the .md file")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def xwiki2md(filepath: str, output_folder: str | None = None):
    """
    Convert an XWiki file to Markdown.

    Args:
        filepath: XWiki file to convert.
        output_folder: Override for the configured ``markdown_output_folder``.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file cannot be read or written.

    Examples:
        xwiki-markdown xwiki2md docs/page.xwiki
    """
    _convert_file(
        filepath,
        XWIKI_EXTENSIONS,
        MARKDOWN_EXTENSIONS[0],
        "markdown_output_folder",
        output_folder,
        convert_xwiki_to_markdown,
        "Markdown",
    )


@cli.command("preview")
@click.option("--output", "output", type=click.Path(dir_okay=False), help="Write the page here")
@click.option(
    "--workspace-root",
    type=click.Path(file_okay=False),
    help="Directory that /-prefixed image paths start from (default: current directory)",
)
@click.option("--resource-base", help="Origin serving local files to the preview")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def preview(
    filepath: str,
    output: str | None = None,
    workspace_root: str | None = None,
    resource_base: str | None = None,
):
    """
    Render an XWiki file as a standalone HTML preview page.

    Args:
        filepath: XWiki file to render.
        output: Destination of the page; printed to stdout when omitted.
        workspace_root: Root for ``/``-prefixed image paths.
        resource_base: Origin under which local images are addressed.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file cannot be read or written.

    Examples:
        xwiki-markdown preview docs/page.xwiki --output preview.html
    """
    source, config, content = _load_input(filepath, XWIKI_EXTENSIONS)
    root = Path(workspace_root).resolve() if workspace_root else Path.cwd().resolve()
    location = LocationHint(
        document_path=source.as_posix(),
        workspace_root=root.as_posix(),
        resource_base=resource_base,
    )

    fragment = render_xwiki_html(content, location)
    page = build_preview_page(
        fragment, title=config.preview_title, csp_source=resource_base or "'self'"
    )

    if output is None:
        click.echo(page, nl=False)
        return
    _write(Path(output), page)


if __name__ == "__main__":
    cli()
