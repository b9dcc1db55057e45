# -*- coding: utf-8 -*-
"""
Elevation Cells - Per-tile elevation data with nearest and bilinear lookup.

An elevation cell holds the data of one 1x1 degree tile. Two variants exist:

- ``LoadedCell`` wraps a decoded SRTM height grid.
- ``EmptyCell`` stands for a tile known to have no data. It is terminal:
  once cached it is never replaced until the cache is cleared.

HGT Grid Specification
----------------------
- Format: raw big-endian signed 16-bit integers, no header
- Grid size: square, side derived from the file size
  (1201 for 3 arc-second SRTM3, 3601 for 1 arc-second SRTM1)
- Row 0 = northern edge, column 0 = western edge
- Adjacent tiles share their edge rows/columns
- Void samples: -32768

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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

# Third-party
import numpy as np

# hgtgrid internal
from hgtgrid.elevation.address import TileCoordinate
from hgtgrid.elevation.codecs import read_plain_grid
from hgtgrid.exceptions import CorruptTileError, ValidationError

VOID_ELEVATION = -32768

_HGT_DTYPE = np.dtype('>i2')

# Fractional indices this close to a whole sample (scaled by grid side) are
# treated as lying on it
_SNAP_TOLERANCE = 1e-9


def _snap(index: float, samples: int) -> float:
    """Round ``index`` to the nearest whole sample if within tolerance."""
    nearest = math.floor(index + 0.5)
    if abs(index - nearest) <= _SNAP_TOLERANCE * samples:
        return float(nearest)
    return index


class ElevationCell(ABC):
    """Abstract base class for the data of a single tile.

    Cells are immutable after construction and never perform I/O when
    queried. Query coordinates are expected to fall inside the tile; the
    resolver guarantees this, and positions slightly outside are clamped
    to the tile edge.

    Parameters
    ----------
    coordinate : TileCoordinate
        Southwest corner of the tile.
    """

    def __init__(self, coordinate: TileCoordinate) -> None:
        self._coordinate = coordinate

    @property
    def coordinate(self) -> TileCoordinate:
        """Southwest corner of the tile."""
        return self._coordinate

    @property
    def latitude(self) -> int:
        return self._coordinate.lat

    @property
    def longitude(self) -> int:
        return self._coordinate.lon

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        """True when the cell can never produce an elevation."""
        ...

    @abstractmethod
    def elevation_at(self, latitude: float, longitude: float) -> Optional[int]:
        """Elevation of the grid sample nearest to a location.

        Parameters
        ----------
        latitude : float
            Latitude in degrees North.
        longitude : float
            Longitude in degrees East.

        Returns
        -------
        int or None
            Height in meters, or None if the sample is void or the cell
            holds no data.
        """
        ...

    @abstractmethod
    def elevation_bilinear_at(
        self, latitude: float, longitude: float
    ) -> Optional[float]:
        """Bilinearly interpolated elevation at a location.

        Parameters
        ----------
        latitude : float
            Latitude in degrees North.
        longitude : float
            Longitude in degrees East.

        Returns
        -------
        float or None
            Height in meters, or None if any of the four surrounding
            samples is void or the cell holds no data.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coordinate.name})"


class LoadedCell(ElevationCell):
    """Elevation cell backed by a decoded HGT height grid.

    Parameters
    ----------
    coordinate : TileCoordinate
        Southwest corner of the tile.
    grid : np.ndarray
        Square 2D array of elevation samples in meters, row 0 at the
        northern edge. Copied to a read-only int16 array.
    source : str or Path, optional
        File the grid was decoded from.

    Raises
    ------
    ValidationError
        If ``grid`` is not a square 2D array with at least 2 samples
        per side.

    Examples
    --------
    >>> import numpy as np
    >>> cell = LoadedCell(TileCoordinate(45, 7), np.array([[3, 4], [1, 2]]))
    >>> cell.elevation_at(45.0, 7.0)
    1
    >>> cell.elevation_bilinear_at(45.5, 7.5)
    2.5
    """

    def __init__(
        self,
        coordinate: TileCoordinate,
        grid: np.ndarray,
        source: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(coordinate)
        grid = np.array(grid, dtype=np.int16)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValidationError(
                f"Height grid must be square, got shape {grid.shape}"
            )
        if grid.shape[0] < 2:
            raise ValidationError(
                f"Height grid needs at least 2x2 samples, got {grid.shape}"
            )
        grid.setflags(write=False)
        self._grid = grid
        self._samples = grid.shape[0]
        self._source = Path(source) if source is not None else None

    @classmethod
    def from_bytes(
        cls,
        coordinate: TileCoordinate,
        data: bytes,
        source: Optional[Union[str, Path]] = None,
    ) -> 'LoadedCell':
        """Decode raw HGT bytes into a cell.

        Parameters
        ----------
        coordinate : TileCoordinate
            Southwest corner of the tile.
        data : bytes
            Raw big-endian 16-bit samples.
        source : str or Path, optional
            File the bytes were read from, used in error messages.

        Returns
        -------
        LoadedCell

        Raises
        ------
        CorruptTileError
            If the byte count does not describe a square grid with at
            least 2 samples per side.
        """
        where = source if source is not None else coordinate.name
        if len(data) % _HGT_DTYPE.itemsize != 0:
            raise CorruptTileError(
                f"Tile {where} has odd byte length {len(data)}.", source
            )

        count = len(data) // _HGT_DTYPE.itemsize
        samples = math.isqrt(count)
        if samples * samples != count or samples < 2:
            raise CorruptTileError(
                f"Tile {where} holds {count} samples, which is not a "
                f"square grid of at least 2x2.", source
            )

        grid = np.frombuffer(data, dtype=_HGT_DTYPE).reshape((samples, samples))
        return cls(coordinate, grid, source=source)

    @classmethod
    def from_file(
        cls,
        coordinate: TileCoordinate,
        path: Union[str, Path],
        reader: Callable[[Path], bytes] = read_plain_grid,
    ) -> 'LoadedCell':
        """Read and decode a tile file.

        ``reader`` returns the raw grid bytes for ``path``; pass an archive
        codec's ``read`` for compressed tiles.
        """
        path = Path(path)
        return cls.from_bytes(coordinate, reader(path), source=path)

    @property
    def is_empty(self) -> bool:
        return False

    @property
    def samples(self) -> int:
        """Number of samples per grid side."""
        return self._samples

    @property
    def resolution_arcsec(self) -> float:
        """Sample spacing in arc-seconds (3.0 for SRTM3, 1.0 for SRTM1)."""
        return 3600.0 / (self._samples - 1)

    @property
    def grid(self) -> np.ndarray:
        """Read-only height grid, row 0 at the northern edge."""
        return self._grid

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def _fractional_index(
        self, latitude: float, longitude: float
    ) -> Tuple[float, float]:
        """Map a location to fractional (row, col) grid indices.

        Latitude runs from the northern edge (row 0) to the southern edge
        (row samples-1); longitude from the western edge (col 0) to the
        eastern edge. Results are clamped to the grid, and positions that
        differ from a sample only by rounding error are snapped onto it.
        """
        last = self._samples - 1
        row = _snap((self._coordinate.lat + 1 - latitude) * last, self._samples)
        col = _snap((longitude - self._coordinate.lon) * last, self._samples)
        return min(max(row, 0.0), float(last)), min(max(col, 0.0), float(last))

    def elevation_at(self, latitude: float, longitude: float) -> Optional[int]:
        row_frac, col_frac = self._fractional_index(latitude, longitude)
        # Round half up; np.round would round half to even
        row = int(math.floor(row_frac + 0.5))
        col = int(math.floor(col_frac + 0.5))

        value = int(self._grid[row, col])
        if value == VOID_ELEVATION:
            return None
        return value

    def elevation_bilinear_at(
        self, latitude: float, longitude: float
    ) -> Optional[float]:
        row_frac, col_frac = self._fractional_index(latitude, longitude)

        row0 = int(math.floor(row_frac))
        col0 = int(math.floor(col_frac))
        row1 = int(math.ceil(row_frac))
        col1 = int(math.ceil(col_frac))

        # Sample four corners
        q00 = int(self._grid[row0, col0])
        q01 = int(self._grid[row0, col1])
        q10 = int(self._grid[row1, col0])
        q11 = int(self._grid[row1, col1])
        if VOID_ELEVATION in (q00, q01, q10, q11):
            return None

        dr = row_frac - row0
        dc = col_frac - col0

        return (
            q00 * (1.0 - dr) * (1.0 - dc)
            + q01 * (1.0 - dr) * dc
            + q10 * dr * (1.0 - dc)
            + q11 * dr * dc
        )


class EmptyCell(ElevationCell):
    """Cell for a tile known to have no data.

    Parameters
    ----------
    coordinate : TileCoordinate
        Southwest corner of the tile.
    marker_path : str or Path
        Marker file recording that the tile is missing
        (``<storage_root>/<name>.txt``).
    """

    def __init__(
        self,
        coordinate: TileCoordinate,
        marker_path: Union[str, Path],
    ) -> None:
        super().__init__(coordinate)
        self._marker_path = Path(marker_path)

    @property
    def marker_path(self) -> Path:
        return self._marker_path

    @property
    def is_empty(self) -> bool:
        return True

    def elevation_at(self, latitude: float, longitude: float) -> Optional[int]:
        return None

    def elevation_bilinear_at(
        self, latitude: float, longitude: float
    ) -> Optional[float]:
        return None
