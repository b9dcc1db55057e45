# -*- coding: utf-8 -*-
"""
hgtgrid - SRTM HGT elevation tile lookup.

Answers "what is the ground elevation at this latitude/longitude?" by
locating, lazily loading and caching 1x1 degree SRTM ``.hgt`` tiles
(plain or zipped) from a storage directory. Missing tiles can be
materialized on demand by an injected provider, with a bounded number
of retries before a tile is recorded as permanently empty.

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from hgtgrid.exceptions import (
    HgtGridError,
    ValidationError,
    StorageNotFoundError,
    CorruptTileError,
)
from hgtgrid.elevation import (
    ElevationModel,
    SRTMElevation,
    TileResolver,
    TileCache,
    TileCoordinate,
    TileAddress,
    resolve_tile,
    LoadedCell,
    EmptyCell,
    MissingTileProvider,
    MirrorDirectoryProvider,
)

__all__ = [
    'HgtGridError',
    'ValidationError',
    'StorageNotFoundError',
    'CorruptTileError',
    'ElevationModel',
    'SRTMElevation',
    'TileResolver',
    'TileCache',
    'TileCoordinate',
    'TileAddress',
    'resolve_tile',
    'LoadedCell',
    'EmptyCell',
    'MissingTileProvider',
    'MirrorDirectoryProvider',
]
