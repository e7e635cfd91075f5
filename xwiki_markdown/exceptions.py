"""Package-specific exception types.

The conversion engine itself never raises for string input; these errors belong
to the file boundary used by the command line.
"""

from __future__ import annotations

from pathlib import Path


class UnsupportedFileError(ValueError):
    """Raised when an input file does not carry an expected extension.

    Args:
        path: Offending path.
        expected: Extensions accepted for the requested conversion.
    """

    def __init__(self, path: Path, expected: tuple[str, ...]):
        self.path = path
        self.expected = expected
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"{self.path} is not a supported input file.\n"
            f"Supported extensions are: {', '.join(self.expected)}"
        )


class FileTooLargeError(OSError):
    """Raised when an input file exceeds the configured size limit.

    Args:
        path: Offending path.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, max_size: int):
        self.path = path
        self.max_size = max_size
        super().__init__(f"{path} exceeds the maximum allowed size of {max_size} bytes.")
