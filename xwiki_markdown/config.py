"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

CONFIG_TABLE = "xwiki-markdown"
DOTFILE_NAME = ".xwiki-markdown.toml"


@dataclass
class ConverterConfig:
    """Configuration for the conversion and preview commands.

    Attributes:
        xwiki_output_folder: Folder receiving ``.xwiki`` files converted from
            Markdown. Empty means next to the source file.
        markdown_output_folder: Folder receiving ``.md`` files converted from
            XWiki. Empty means next to the source file.
        preview_title: Title of the generated preview page.
        max_file_size: Maximum input file size in bytes.

    Examples:
        ConverterConfig(xwiki_output_folder="wiki", max_file_size=1024)
    """

    # Output locations
    xwiki_output_folder: str = ""
    markdown_output_folder: str = ""

    # Preview
    preview_title: str = "XWiki Preview"

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> ConverterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.xwiki-markdown]`` table from `pyproject.toml` and the
    ``[xwiki-markdown]`` or ``[tool.xwiki-markdown]`` table from
    `.xwiki-markdown.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConverterConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConverterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ConverterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConverterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys may be written kebab-case like the table name itself
    options = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ConverterConfig(**options)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: ConverterConfig) -> ConverterConfig:
    """Strip surrounding whitespace from folder settings.

    A folder made only of whitespace is treated as unset.
    """
    changes = {}
    for name in ("xwiki_output_folder", "markdown_output_folder"):
        value = getattr(config, name)
        if isinstance(value, str) and value != value.strip():
            changes[name] = value.strip()
    if not changes:
        return config
    return replace(config, **changes)


def validate_config(config: ConverterConfig) -> None:
    """Validate a `ConverterConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If text settings are not strings, the preview title is
            empty, or the size limit is not a positive integer.

    Examples:
        validate_config(ConverterConfig(max_file_size=2048))
    """
    for config_field in fields(ConverterConfig):
        value = getattr(config, config_field.name)
        if config_field.type == "str" and not isinstance(value, str):
            raise ConfigError(f"`{config_field.name}` must be a string")

    if not config.preview_title.strip():
        raise ConfigError("`preview_title` must not be empty")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})


def apply_overrides(config: ConverterConfig, **overrides: object) -> ConverterConfig:
    """Apply override values to a `ConverterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConverterConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConverterConfig`.

    Examples:
        updated = apply_overrides(config, xwiki_output_folder="out")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConverterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConverterConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), markdown_output_folder="docs")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
