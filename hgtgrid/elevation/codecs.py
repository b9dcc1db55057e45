# -*- coding: utf-8 -*-
"""
Tile Codecs - Read raw HGT grid bytes from plain and archived tile files.

A plain ``.hgt`` file is the raw grid. Archived tiles wrap the same bytes in
a container; an ``ArchiveCodec`` pairs the archive file suffix with a reader
that returns the embedded grid bytes, so the resolver never needs to know the
container format.

Two codecs are provided:

- ``ZIP_CODEC``  - ``<name>.hgt.zip`` (USGS / NASA distribution format)
- ``GZIP_CODEC`` - ``<name>.hgt.gz`` (common terrain tile mirrors)

All readers open files in ``with`` blocks so handles are released before
returning, whether decoding succeeds or not.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

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
import gzip
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

# hgtgrid internal
from hgtgrid.exceptions import CorruptTileError

_HGT_SUFFIX = '.hgt'


def read_plain_grid(path: Path) -> bytes:
    """Read the raw bytes of a plain ``.hgt`` tile.

    Parameters
    ----------
    path : Path
        Path to the ``.hgt`` file.

    Returns
    -------
    bytes
        Raw big-endian 16-bit grid samples.

    Raises
    ------
    CorruptTileError
        If the file exists but cannot be read.
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise CorruptTileError(f"Cannot read tile {path}: {e}", path) from e


def read_zipped_grid(path: Path) -> bytes:
    """Extract the grid bytes from a zipped ``.hgt`` tile.

    The member whose name matches the tile stem is preferred; otherwise
    the first ``.hgt`` member in the archive is used.

    Parameters
    ----------
    path : Path
        Path to the ``.hgt.zip`` file.

    Returns
    -------
    bytes
        Raw grid bytes of the embedded ``.hgt`` member.

    Raises
    ------
    CorruptTileError
        If the archive is unreadable or holds no ``.hgt`` member.
    """
    path = Path(path)
    # N45W007.hgt.zip -> n45w007.hgt
    expected = path.stem.lower()
    try:
        with zipfile.ZipFile(path, 'r') as zf:
            members = [
                info for info in zf.infolist()
                if not info.is_dir()
                and info.filename.lower().endswith(_HGT_SUFFIX)
            ]
            if not members:
                raise CorruptTileError(
                    f"Archive {path} contains no {_HGT_SUFFIX} member.", path
                )
            member = members[0]
            for info in members:
                if Path(info.filename).name.lower() == expected:
                    member = info
                    break
            return zf.read(member)
    except (zipfile.BadZipFile, zlib.error, OSError) as e:
        raise CorruptTileError(
            f"Cannot read tile archive {path}: {e}", path
        ) from e


def read_gzipped_grid(path: Path) -> bytes:
    """Decompress a gzipped ``.hgt.gz`` tile.

    Raises
    ------
    CorruptTileError
        If the file is not valid gzip data or cannot be read.
    """
    try:
        with gzip.open(path, 'rb') as f:
            return f.read()
    except (gzip.BadGzipFile, zlib.error, EOFError, OSError) as e:
        raise CorruptTileError(
            f"Cannot read tile archive {path}: {e}", path
        ) from e


@dataclass(frozen=True)
class ArchiveCodec:
    """Archive file suffix paired with a reader for the embedded grid.

    Attributes
    ----------
    suffix : str
        Full file suffix appended to the tile name, e.g. ``'.hgt.zip'``.
    read : Callable[[Path], bytes]
        Returns the raw ``.hgt`` bytes held in the archive. Must raise
        ``CorruptTileError`` for unreadable archives.
    """

    suffix: str
    read: Callable[[Path], bytes]

    def path_for(self, root: Path, name: str) -> Path:
        """Archive path of tile ``name`` under ``root``."""
        return Path(root) / f"{name}{self.suffix}"


ZIP_CODEC = ArchiveCodec(suffix='.hgt.zip', read=read_zipped_grid)
GZIP_CODEC = ArchiveCodec(suffix='.hgt.gz', read=read_gzipped_grid)
