"""
Configuration settings for the CSV record mapper.

**Conceptual**: This module provides a strongly-typed settings object loaded
from environment variables (via an optional .env file at the project root).
Values are validated when the object is built, so a bad setting fails at
startup with a clear message rather than halfway through a write.

**Environment variables**:
  - TAGCSV_ENCODING (optional): Text encoding for reading and writing CSV
    files. Defaults to "utf-8".
  - TAGCSV_FLOAT_PRECISION (optional): Decimal places used when writing float
    fields. Defaults to "0", the fixed zero-decimal format of
    previously written files. "none" writes the shortest text that parses
    back to the same value.
  - TAGCSV_REJECT_DUPLICATE_COLUMNS (optional): "true" (default) rejects
    record types in which two fields map to one column; "false" lets them
    share it.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); existing variables win
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_TRUE_STRINGS = ("true", "1", "yes")
_FALSE_STRINGS = ("false", "0", "no")


@dataclass(frozen=True)
class MapperSettings:
    """
    Settings for reading and writing record files.

    Attributes:
        encoding: Text encoding of CSV files (default "utf-8").
        float_precision: Decimal places for float cells on write. None selects
                        the shortest text that round-trips. Default 0.
        reject_duplicate_columns: Raise DuplicateColumnMapping when two fields
                                 are annotated with the same column (default True).
    """
    encoding: str = "utf-8"
    float_precision: Optional[int] = 0
    reject_duplicate_columns: bool = True

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.encoding:
            raise ValueError("TAGCSV_ENCODING must not be empty.")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(
                f"TAGCSV_ENCODING is not a known text encoding, got: {self.encoding}"
            )
        if self.float_precision is not None and self.float_precision < 0:
            raise ValueError(
                f"float_precision must be non-negative or None, got: {self.float_precision}"
            )

    @classmethod
    def from_env(cls) -> "MapperSettings":
        """
        Load mapper settings from environment variables.

        Returns:
            MapperSettings with values from the environment, defaults elsewhere.

        Raises:
            ValueError: If any variable is set to an invalid value.

        Usage example:
            >>> # In .env file:
            >>> # TAGCSV_FLOAT_PRECISION=none
            >>>
            >>> settings = MapperSettings.from_env()
            >>> print(settings.float_precision)  # None
        """
        encoding = os.getenv("TAGCSV_ENCODING", "utf-8")
        precision_str = os.getenv("TAGCSV_FLOAT_PRECISION", "0").strip()
        duplicates_str = os.getenv("TAGCSV_REJECT_DUPLICATE_COLUMNS", "true").strip().lower()

        if precision_str.lower() == "none":
            float_precision = None
        else:
            try:
                float_precision = int(precision_str)
            except ValueError:
                raise ValueError(
                    f"TAGCSV_FLOAT_PRECISION must be a non-negative integer or 'none', "
                    f"got: {precision_str}"
                )

        if duplicates_str in _TRUE_STRINGS:
            reject_duplicate_columns = True
        elif duplicates_str in _FALSE_STRINGS:
            reject_duplicate_columns = False
        else:
            raise ValueError(
                f"TAGCSV_REJECT_DUPLICATE_COLUMNS must be true or false, got: {duplicates_str}"
            )

        return cls(
            encoding=encoding,
            float_precision=float_precision,
            reject_duplicate_columns=reject_duplicate_columns,
        )


_default_settings: Optional[MapperSettings] = None


def get_settings() -> MapperSettings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached.
    Callers that need different values should build a MapperSettings
    directly and pass it in instead.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = MapperSettings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    The next get_settings() call reloads from the environment.
    """
    global _default_settings
    _default_settings = None
