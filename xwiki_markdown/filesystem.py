"""Filesystem helpers for xwiki-markdown."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import FileTooLargeError, UnsupportedFileError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "XWIKI_MARKDOWN_MAX_FILE_SIZE"
NEW_FILE_PERMISSIONS = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["XWIKI_MARKDOWN_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any parent directory is a symlink.

    Examples:
        contains_symlink(Path("/tmp/link/child"))
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path, extensions: tuple[str, ...]) -> Path:
    """Resolve and validate an input filepath under a base directory.

    Args:
        raw_path: User-supplied path (absolute or relative).
        base_dir: Working directory that constrains allowed paths.
        extensions: Lower-case suffixes accepted for this input.

    Returns:
        Path: Absolute path to the input file.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, or
            traverses a symlink.
        UnsupportedFileError: If the suffix is not one of `extensions`.

    Examples:
        normalize_filepath("docs/page.xwiki", Path.cwd(), (".xwiki",))
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error

    if resolved.suffix.lower() not in extensions:
        raise UnsupportedFileError(resolved, extensions)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.

    Examples:
        stat_result = collect_file_stat(Path("page.xwiki"))
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        FileTooLargeError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise FileTooLargeError(filepath, max_size)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("page.xwiki")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_source(filepath: Path, max_size: int) -> str:
    """Read a UTF-8 input file after checking its size.

    Raises:
        IOError: If the file is too large, unreadable, or not valid UTF-8.

    Examples:
        read_source(Path("page.xwiki"), 10 * 1024 * 1024)
    """
    enforce_file_size(collect_file_stat(filepath), max_size, filepath)
    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error


def output_path_for(source: Path, suffix: str, output_folder: str = "") -> Path:
    """Choose where a converted file is written.

    The output keeps the source's stem with `suffix`, next to the source or in
    `output_folder` when one is configured.

    Examples:
        output_path_for(Path("/docs/a.md"), ".xwiki")  # Path("/docs/a.xwiki")
        output_path_for(Path("/docs/a.md"), ".xwiki", "/out")  # Path("/out/a.xwiki")
    """
    filename = source.stem + suffix
    if output_folder:
        return Path(output_folder).expanduser() / filename
    return source.with_name(filename)


def write_output(filepath: Path, content: str):
    """Write `content` to `filepath` atomically.

    The text goes to a temporary file in the target directory, which then
    replaces the target. An existing target keeps its permissions; new files
    are created with mode 0644.

    Raises:
        IOError: If the target is a symlink, or the file cannot be written.

    Examples:
        write_output(Path("page.xwiki"), "= Title =\\n")
    """
    if contains_symlink(filepath):
        error_message = f"Symlinks are not supported for security reasons: {filepath}"
        raise IOError(error_message)

    permissions = NEW_FILE_PERMISSIONS
    if filepath.exists():
        permissions = stat.S_IMODE(collect_file_stat(filepath).st_mode)

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        error_message = f"Cannot create output folder {filepath.parent}: {error}"
        raise IOError(error_message) from error

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
        logger.debug("Wrote %d characters to %s", len(content), filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
