# -*- coding: utf-8 -*-
"""
hgtgrid Exception Hierarchy - Domain-specific exceptions for tile lookup.

Provides a small exception hierarchy that lets callers catch hgtgrid errors
distinctly from Python built-in exceptions. All hgtgrid exceptions subclass
both ``HgtGridError`` and the appropriate built-in exception for backward
compatibility.

"No data" is not an error: queries over void samples or permanently
missing tiles return ``None``.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
from pathlib import Path
from typing import Optional, Union


class HgtGridError(Exception):
    """Base exception for all hgtgrid errors."""


class ValidationError(HgtGridError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for malformed tile names, wrongly shaped coordinate arrays,
    negative retry ceilings, and other input validation failures.
    """


class StorageNotFoundError(HgtGridError, FileNotFoundError):
    """The tile storage root does not exist or is not a directory.

    Raised at construction time. Not recoverable: the resolver has
    nowhere to look for tiles.
    """


class CorruptTileError(HgtGridError, ValueError):
    """A tile file is present but cannot be decoded into a height grid.

    Raised when the byte length does not describe a square grid of
    16-bit samples, or an archive holds no readable grid. A corrupt tile
    indicates a data integrity problem, not absence, so it is never
    retried through the missing-tile provider.

    Parameters
    ----------
    message : str
        Human-readable description.
    path : str or Path, optional
        File that failed to decode.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
