# -*- coding: utf-8 -*-
"""
Tile Cache - In-memory store of resolved elevation cells.

Maps ``TileCoordinate`` to ``ElevationCell``. Entries are added lazily by
the resolver and never evicted; ``clear()`` drops everything so the next
query re-resolves from storage.

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
from typing import Dict, Iterator, List, Optional

# hgtgrid internal
from hgtgrid.elevation.address import TileCoordinate
from hgtgrid.elevation.cell import ElevationCell


class TileCache:
    """Load-once store of elevation cells keyed by tile coordinate.

    Holds at most one cell per coordinate. ``put`` never replaces an
    existing entry, so an ``EmptyCell`` stays terminal for the lifetime
    of the cache.

    Examples
    --------
    >>> cache = TileCache()
    >>> cache.put(cell.coordinate, cell)
    >>> cache.get(cell.coordinate) is cell
    True
    """

    def __init__(self) -> None:
        self._cells: Dict[TileCoordinate, ElevationCell] = {}

    def get(self, coordinate: TileCoordinate) -> Optional[ElevationCell]:
        """Cached cell for ``coordinate``, or None on a miss."""
        return self._cells.get(coordinate)

    def put(self, coordinate: TileCoordinate, cell: ElevationCell) -> None:
        """Insert ``cell`` unless ``coordinate`` is already cached."""
        self._cells.setdefault(coordinate, cell)

    def clear(self) -> None:
        """Drop all cached cells."""
        self._cells.clear()

    def coordinates(self) -> Iterator[TileCoordinate]:
        """Iterate over cached tile coordinates."""
        return iter(list(self._cells))

    def cells(self) -> List[ElevationCell]:
        """Snapshot of the cached cells."""
        return list(self._cells.values())

    @property
    def loaded_count(self) -> int:
        """Number of cached cells that hold data."""
        return sum(1 for cell in self._cells.values() if not cell.is_empty)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._cells
