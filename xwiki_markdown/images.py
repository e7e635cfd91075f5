"""Image path resolution for the HTML preview."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import quote

logger = logging.getLogger(__name__)

PASSTHROUGH_PREFIXES = ("http://", "https://", "//", "data:")


@dataclass(frozen=True)
class LocationHint:
    """Where the rendered document lives, used only to resolve image paths.

    Attributes:
        document_path: Absolute path of the document being rendered.
        workspace_root: Directory that ``/``-prefixed image paths are relative
            to. When None such paths are taken as absolute filesystem paths.
        resource_base: Origin under which local files are served to the
            preview (for example a webview resource origin). When None,
            images are addressed with ``file://`` URIs.

    Examples:
        LocationHint("/ws/docs/page.xwiki", workspace_root="/ws")
    """

    document_path: str
    workspace_root: str | None = None
    resource_base: str | None = None


def resolve_local_path(src: str, location: LocationHint) -> PurePosixPath:
    """Resolve an image reference against the document location.

    ``./x``, ``../x`` and bare ``x`` are relative to the document's directory;
    ``/x`` is relative to the workspace root.

    Raises:
        ValueError: If the result is not an absolute path.

    Examples:
        resolve_local_path("../img/a.png", LocationHint("/ws/docs/page.xwiki"))
        # PurePosixPath("/ws/img/a.png")
    """
    if src.startswith("/"):
        if location.workspace_root:
            path = PurePosixPath(location.workspace_root) / src.lstrip("/")
        else:
            path = PurePosixPath(src)
    else:
        path = PurePosixPath(location.document_path).parent / src

    if not path.is_absolute():
        raise ValueError(f"cannot resolve {src!r} against relative location {path}")

    return PurePosixPath(posixpath.normpath(str(path)))


def path_to_uri(path: PurePosixPath, location: LocationHint) -> str:
    """Map a resolved local path to an address the preview can load."""
    if location.resource_base:
        return location.resource_base.rstrip("/") + quote(str(path))
    return path.as_uri()


def resolve_image_path(src: str, location: LocationHint | None = None) -> str:
    """Resolve an image reference to an addressable URI.

    Web URLs, protocol-relative ``//host/...`` URLs and data URIs pass
    through unchanged. Local paths are resolved relative to the document and
    mapped through the location hint. Without a hint, or when resolution
    fails, the original string is returned.

    Args:
        src: Image reference as written in the document.
        location: Location of the rendered document.

    Returns:
        str: URI for the ``src`` attribute of the rendered image.

    Examples:
        resolve_image_path("https://x/y.png")  # "https://x/y.png"
        resolve_image_path("./img/a.png", LocationHint("/ws/page.xwiki"))
        # "file:///ws/img/a.png"
    """
    if src.startswith(PASSTHROUGH_PREFIXES) or location is None:
        return src

    try:
        return path_to_uri(resolve_local_path(src, location), location)
    except ValueError as error:
        logger.debug("Keeping unresolved image path %r: %s", src, error)
        return src
