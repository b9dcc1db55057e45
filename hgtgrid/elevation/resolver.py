# -*- coding: utf-8 -*-
"""
Tile Resolver - Locate, load, cache and retry SRTM tiles on demand.

Given a coordinate, the resolver derives the tile, consults the cache, and
on a miss looks for the tile under the storage root::

    storage_root/
        N45W007.hgt          plain grid (preferred)
        N46W007.hgt.zip      archived grid
        N47W007.txt          marker for a tile given up on (optional)

When neither file exists and a missing-tile provider is configured, the
provider is asked to materialize the tile and the storage root is checked
again. A tile that is still absent is retried a bounded number of times
(``RETRY_CEILING``); after that it is cached as an ``EmptyCell`` and never
requested again until the cache is cleared.

Retry counters are kept per tile, so an absent tile cannot use up the
retry budget of another.

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
import logging
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

# hgtgrid internal
from hgtgrid.elevation.address import TileCoordinate, resolve_tile
from hgtgrid.elevation.cache import TileCache
from hgtgrid.elevation.cell import ElevationCell, EmptyCell, LoadedCell
from hgtgrid.elevation.codecs import ZIP_CODEC, ArchiveCodec, read_plain_grid
from hgtgrid.elevation.providers import MissingTileProvider, as_provider
from hgtgrid.exceptions import (
    CorruptTileError,
    StorageNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

RETRY_CEILING = 3

_PLAIN_SUFFIX = '.hgt'
_MARKER_SUFFIX = '.txt'


class TileResolver:
    """Resolve coordinates to cached elevation cells.

    Parameters
    ----------
    storage_root : str or Path
        Directory holding ``.hgt`` / ``.hgt.zip`` tiles. Must exist.
    provider : MissingTileProvider or callable, optional
        Asked to materialize absent tiles. A plain callable
        ``(storage_root, name) -> bool`` is accepted. When None, absent
        tiles become empty after the retry checks.
    retries : int, optional
        Retry ceiling per tile. A tile that never appears is looked up
        ``max(retries, 1) + 1`` times; the first miss is always retried
        once. Default ``RETRY_CEILING`` (3).
    archive_codec : ArchiveCodec, optional
        Suffix and reader for archived tiles. Default ``.hgt.zip``.
    write_markers : bool, optional
        If True, write ``<name>.txt`` holding the attempt count when a
        tile is given up on. Default False, leaving disk state untouched.

    Raises
    ------
    StorageNotFoundError
        If ``storage_root`` does not exist or is not a directory.
    ValidationError
        If ``retries`` is negative.

    Notes
    -----
    A single re-entrant lock guards the whole resolve-or-load sequence,
    so one resolver may be shared between threads. Provider calls and
    grid decoding happen under the lock.
    """

    def __init__(
        self,
        storage_root: Union[str, Path],
        provider: Optional[
            Union[MissingTileProvider, Callable[[Path, str], bool]]
        ] = None,
        *,
        retries: int = RETRY_CEILING,
        archive_codec: ArchiveCodec = ZIP_CODEC,
        write_markers: bool = False,
    ) -> None:
        storage_root = Path(storage_root)
        if not storage_root.exists():
            raise StorageNotFoundError(
                f"Tile storage directory does not exist: {storage_root}"
            )
        if not storage_root.is_dir():
            raise StorageNotFoundError(
                f"Tile storage root must be a directory, got file: "
                f"{storage_root}"
            )
        if retries < 0:
            raise ValidationError(f"retries must be >= 0, got {retries}")

        self.storage_root = storage_root
        self.provider = as_provider(provider)
        self.retries = int(retries)
        self.archive_codec = archive_codec
        self.write_markers = bool(write_markers)

        self._cache = TileCache()
        self._attempts: Dict[TileCoordinate, int] = {}
        self._lock = threading.RLock()

    @property
    def cache(self) -> TileCache:
        """Cache of resolved cells."""
        return self._cache

    def plain_path(self, name: str) -> Path:
        return self.storage_root / f"{name}{_PLAIN_SUFFIX}"

    def archive_path(self, name: str) -> Path:
        return self.archive_codec.path_for(self.storage_root, name)

    def marker_path(self, name: str) -> Path:
        return self.storage_root / f"{name}{_MARKER_SUFFIX}"

    def resolve(self, latitude: float, longitude: float) -> ElevationCell:
        """Cell of the tile containing a location.

        Parameters
        ----------
        latitude : float
            Latitude in degrees North.
        longitude : float
            Longitude in degrees East.

        Returns
        -------
        ElevationCell
            ``LoadedCell`` if the tile could be loaded, ``EmptyCell``
            once the tile has been given up on.

        Raises
        ------
        CorruptTileError
            If the tile file is present but cannot be decoded.
        """
        return self.resolve_coordinate(resolve_tile(latitude, longitude).coordinate)

    def resolve_coordinate(self, coordinate: TileCoordinate) -> ElevationCell:
        """Cell for a tile coordinate; see ``resolve``."""
        with self._lock:
            cell = self._cache.get(coordinate)
            if cell is not None:
                return cell

            try:
                cell = self._locate(coordinate)
            except CorruptTileError:
                self._attempts.pop(coordinate, None)
                raise

            self._cache.put(coordinate, cell)
            return cell

    def cached_cells(self) -> List[ElevationCell]:
        """Consistent snapshot of the cached cells, taken under the lock."""
        with self._lock:
            return self._cache.cells()

    def clear(self) -> None:
        """Drop cached cells and retry counters."""
        with self._lock:
            self._cache.clear()
            self._attempts.clear()

    def _locate(self, coordinate: TileCoordinate) -> ElevationCell:
        """Run the locate / provide / retry loop for an uncached tile."""
        name = coordinate.name
        while True:
            cell = self._load_existing(coordinate)
            if cell is None and self.provider is not None:
                self._request_missing(name)
                cell = self._load_existing(coordinate)

            if cell is not None:
                self._attempts.pop(coordinate, None)
                logger.info("Loaded tile %s from %s", name, cell.source)
                return cell

            attempts = self._attempts.get(coordinate)
            if attempts is None:
                self._attempts[coordinate] = 1
            elif attempts < self.retries:
                self._attempts[coordinate] = attempts + 1
            else:
                return self._give_up(coordinate, attempts)
            logger.debug("Tile %s not found, retry %d of %d", name,
                         self._attempts[coordinate], self.retries)

    def _load_existing(self, coordinate: TileCoordinate) -> Optional[LoadedCell]:
        """Load the tile from the storage root if a file is present."""
        name = coordinate.name

        plain = self.plain_path(name)
        if plain.is_file():
            return LoadedCell.from_file(coordinate, plain, reader=read_plain_grid)

        archive = self.archive_path(name)
        if archive.is_file():
            return LoadedCell.from_file(
                coordinate, archive, reader=self.archive_codec.read
            )

        return None

    def _request_missing(self, name: str) -> None:
        """Ask the provider for a tile. Provider errors are logged only."""
        try:
            provided = self.provider.attempt(self.storage_root, name)
        except Exception:
            logger.warning("Missing-tile provider failed for %s", name,
                           exc_info=True)
            return
        logger.debug("Missing-tile provider returned %s for %s",
                     provided, name)

    def _give_up(self, coordinate: TileCoordinate, attempts: int) -> EmptyCell:
        """Record a tile as permanently missing."""
        marker = self.marker_path(coordinate.name)
        if self.write_markers:
            try:
                marker.write_text(str(attempts))
            except OSError:
                logger.warning("Cannot write marker file %s", marker,
                               exc_info=True)
        logger.info("Tile %s unavailable after %d retries; treating as "
                    "empty", coordinate.name, attempts)
        return EmptyCell(coordinate, marker)
