"""Error types with formatted context."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised on a malformed config file, style spec, or command-line option.

    Classification itself never raises; only the layers that read user
    settings do.
    """

    def __init__(self, message: str, path: Path | None = None, key: str | None = None) -> None:
        self.message = message
        self.path = path
        self.key = key
        super().__init__(self.format())

    def format(self) -> str:
        result = f"error: {self.message}"
        if self.path is not None:
            location = str(self.path)
            if self.key is not None:
                location += f" [{self.key}]"
            result += f"\n  --> {location}"
        return result
