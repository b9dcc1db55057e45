# -*- coding: utf-8 -*-
"""
Elevation Module - SRTM HGT tile resolution, caching and elevation lookup.

Resolves geographic coordinates to 1x1 degree SRTM tiles, loads tiles
lazily from a storage directory (plain ``.hgt`` or archived ``.hgt.zip``),
caches them for the lifetime of the model, and answers nearest-sample and
bilinear elevation queries. Absent tiles can be materialized by an injected
missing-tile provider and are retried a bounded number of times before
being recorded as empty.

Key Classes
-----------
- ElevationModel: Abstract base class for elevation models
- SRTMElevation: Query facade over a tile directory
- TileResolver: Cache / locate / provide / retry engine
- TileCache: In-memory load-once cell store
- LoadedCell, EmptyCell: Per-tile elevation data
- MissingTileProvider, MirrorDirectoryProvider: Tile materialization
- ArchiveCodec: Archived tile readers (ZIP_CODEC, GZIP_CODEC)

Usage
-----
    >>> from hgtgrid.elevation import SRTMElevation
    >>> elev = SRTMElevation('/data/srtm')
    >>> elev.get_elevation(45.5, -6.5)
    312
    >>> elev.get_elevation_bilinear(45.5, -6.5)
    312.0

Dependencies
------------
numpy

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

from hgtgrid.elevation.address import TileAddress, TileCoordinate, resolve_tile
from hgtgrid.elevation.base import ElevationModel
from hgtgrid.elevation.cache import TileCache
from hgtgrid.elevation.cell import (
    VOID_ELEVATION,
    ElevationCell,
    EmptyCell,
    LoadedCell,
)
from hgtgrid.elevation.codecs import (
    GZIP_CODEC,
    ZIP_CODEC,
    ArchiveCodec,
    read_gzipped_grid,
    read_plain_grid,
    read_zipped_grid,
)
from hgtgrid.elevation.providers import (
    CallableProvider,
    MirrorDirectoryProvider,
    MissingTileProvider,
)
from hgtgrid.elevation.resolver import RETRY_CEILING, TileResolver
from hgtgrid.elevation.srtm import SRTMElevation

__all__ = [
    'TileAddress',
    'TileCoordinate',
    'resolve_tile',
    'ElevationModel',
    'TileCache',
    'VOID_ELEVATION',
    'ElevationCell',
    'EmptyCell',
    'LoadedCell',
    'GZIP_CODEC',
    'ZIP_CODEC',
    'ArchiveCodec',
    'read_gzipped_grid',
    'read_plain_grid',
    'read_zipped_grid',
    'CallableProvider',
    'MirrorDirectoryProvider',
    'MissingTileProvider',
    'RETRY_CEILING',
    'TileResolver',
    'SRTMElevation',
]
