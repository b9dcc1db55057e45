# -*- coding: utf-8 -*-
"""
SRTM Elevation Model - Terrain elevation lookup from SRTM HGT tiles.

Front end over ``TileResolver``: resolves the tile for each query, then
delegates to the resolved cell. Tiles are read from a flat directory of
``<name>.hgt`` or ``<name>.hgt.zip`` files, loaded on first use and kept
in memory until ``unload()``.

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
import math
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Union

# hgtgrid internal
from hgtgrid.elevation.base import ElevationModel
from hgtgrid.elevation.providers import MissingTileProvider
from hgtgrid.elevation.resolver import TileResolver


class SRTMElevation(ElevationModel):
    """Elevation model backed by a directory of SRTM HGT tiles.

    Parameters
    ----------
    storage_root : str or Path
        Directory containing the tiles. Must exist.
    provider : MissingTileProvider or callable, optional
        Asked to materialize tiles that are not present locally.
    **resolver_options
        Forwarded to ``TileResolver`` (``retries``, ``archive_codec``,
        ``write_markers``).

    Raises
    ------
    StorageNotFoundError
        If ``storage_root`` does not exist or is not a directory.

    Examples
    --------
    >>> from hgtgrid import SRTMElevation
    >>> elev = SRTMElevation('/data/srtm')
    >>> elev.get_elevation(45.5, -6.5)
    312
    >>> elev.get_elevation_bilinear(45.5001, -6.5001)
    312.4
    """

    def __init__(
        self,
        storage_root: Union[str, Path],
        provider: Optional[
            Union[MissingTileProvider, Callable[[Path, str], bool]]
        ] = None,
        **resolver_options: Any,
    ) -> None:
        self._resolver = TileResolver(storage_root, provider, **resolver_options)

    @property
    def resolver(self) -> TileResolver:
        return self._resolver

    @property
    def storage_root(self) -> Path:
        return self._resolver.storage_root

    def get_elevation(self, latitude: float, longitude: float) -> Optional[int]:
        # NaN or infinite coordinates have no tile
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return None
        cell = self._resolver.resolve(latitude, longitude)
        return cell.elevation_at(latitude, longitude)

    def get_elevation_bilinear(
        self, latitude: float, longitude: float
    ) -> Optional[float]:
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return None
        cell = self._resolver.resolve(latitude, longitude)
        return cell.elevation_bilinear_at(latitude, longitude)

    def unload(self) -> None:
        """Drop all cached tiles; the next query re-resolves from disk."""
        self._resolver.clear()

    @property
    def tile_count(self) -> int:
        """Number of tiles currently cached, empty ones included."""
        return len(self._resolver.cached_cells())

    @property
    def coverage_bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """Geographic bounding box of the loaded tiles.

        Returns
        -------
        Tuple[float, float, float, float] or None
            ``(min_lon, min_lat, max_lon, max_lat)`` in degrees over the
            tiles that hold data, or None if none are loaded.
        """
        coords = [
            cell.coordinate for cell in self._resolver.cached_cells()
            if not cell.is_empty
        ]
        if not coords:
            return None
        lons = [c.lon for c in coords]
        lats = [c.lat for c in coords]
        return (
            float(min(lons)),
            float(min(lats)),
            float(max(lons)) + 1.0,
            float(max(lats)) + 1.0,
        )

    def __enter__(self) -> 'SRTMElevation':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unload()
