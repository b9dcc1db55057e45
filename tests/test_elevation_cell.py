# -*- coding: utf-8 -*-
"""
Elevation Cell Tests - Grid decoding, nearest-sample and bilinear lookup.

Uses a synthetic 3x3 tile at N45W007 whose samples sit every 0.5 degrees::

    lat 46.0   10  20  30
    lat 45.5   40  50  60
    lat 45.0   70  80  90
              -7.0 -6.5 -6.0  (lon)

Dependencies
------------
pytest

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

import inspect
from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from hgtgrid.elevation.address import TileCoordinate
from hgtgrid.elevation.cell import (
    VOID_ELEVATION,
    EmptyCell,
    LoadedCell,
)
from hgtgrid.elevation.codecs import read_plain_grid
from hgtgrid.exceptions import CorruptTileError, ValidationError

COORD = TileCoordinate(45, -7)
GRID = [
    [10, 20, 30],
    [40, 50, 60],
    [70, 80, 90],
]


def _hgt_bytes(grid):
    return np.asarray(grid, dtype=np.int16).astype('>i2').tobytes()


@pytest.fixture
def cell():
    return LoadedCell.from_bytes(COORD, _hgt_bytes(GRID))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class TestLoadedCellDecoding:
    """Test construction from raw HGT bytes."""

    def test_from_bytes_shape(self, cell):
        """Side length is derived from the byte count."""
        assert cell.samples == 3
        assert cell.grid.shape == (3, 3)
        np.testing.assert_array_equal(cell.grid, np.array(GRID))

    def test_big_endian_decoding(self):
        """Samples are read as big-endian signed 16-bit integers."""
        data = bytes([0x01, 0x00, 0xFF, 0xFF, 0x80, 0x00, 0x00, 0x07])
        cell = LoadedCell.from_bytes(COORD, data)
        np.testing.assert_array_equal(cell.grid, [[256, -1], [-32768, 7]])

    def test_srtm3_resolution(self):
        """A 1201x1201 grid is 3 arc-second data."""
        data = np.zeros((1201, 1201), dtype='>i2').tobytes()
        cell = LoadedCell.from_bytes(COORD, data)
        assert cell.samples == 1201
        assert cell.resolution_arcsec == pytest.approx(3.0)

    def test_grid_is_read_only(self, cell):
        """The decoded grid cannot be modified."""
        with pytest.raises(ValueError):
            cell.grid[0, 0] = 1

    def test_odd_byte_length_raises(self):
        """Truncated data with an odd byte count is corrupt."""
        with pytest.raises(CorruptTileError, match="odd byte length"):
            LoadedCell.from_bytes(COORD, _hgt_bytes(GRID)[:-1])

    def test_non_square_raises(self):
        """A sample count that is not a perfect square is corrupt."""
        with pytest.raises(CorruptTileError, match="not a square grid"):
            LoadedCell.from_bytes(COORD, _hgt_bytes(GRID)[:-2])

    def test_single_sample_raises(self):
        """A 1x1 grid cannot be interpolated and is rejected."""
        with pytest.raises(CorruptTileError):
            LoadedCell.from_bytes(COORD, _hgt_bytes([[5]]))

    def test_empty_data_raises(self):
        """Empty files are corrupt."""
        with pytest.raises(CorruptTileError):
            LoadedCell.from_bytes(COORD, b'')

    def test_corrupt_error_carries_path(self, tmp_path):
        """CorruptTileError names the offending file."""
        path = tmp_path / 'N45W007.hgt'
        path.write_bytes(b'\x00\x01\x02')
        with pytest.raises(CorruptTileError) as excinfo:
            LoadedCell.from_file(COORD, path)
        assert excinfo.value.path == path

    def test_from_file(self, tmp_path):
        """from_file reads the grid and records the source path."""
        path = tmp_path / 'N45W007.hgt'
        path.write_bytes(_hgt_bytes(GRID))
        cell = LoadedCell.from_file(COORD, path)
        assert cell.source == path
        assert cell.elevation_at(45.5, -6.5) == 50

    def test_non_square_array_raises(self):
        """Direct construction validates the grid shape."""
        with pytest.raises(ValidationError, match="must be square"):
            LoadedCell(COORD, np.zeros((2, 3)))

    def test_from_file_custom_reader(self, tmp_path):
        """from_file decodes whatever bytes the reader returns for the path."""
        seen = []

        def reader(path):
            seen.append(path)
            return _hgt_bytes(GRID)

        path = tmp_path / 'N45W007.bin'
        cell = LoadedCell.from_file(COORD, str(path), reader=reader)
        assert seen == [path]
        assert cell.source == path
        assert cell.elevation_at(45.5, -6.5) == 50

    def test_from_file_reader_signature(self):
        """The reader is typed as path -> bytes and defaults to plain files."""
        reader = inspect.signature(LoadedCell.from_file).parameters['reader']
        assert reader.annotation == Callable[[Path], bytes]
        assert reader.default is read_plain_grid


# ---------------------------------------------------------------------------
# Nearest-sample lookup
# ---------------------------------------------------------------------------

class TestElevationAt:
    """Test nearest-sample lookup."""

    @pytest.mark.parametrize("lat, lon, expected", [
        (46.0, -7.0, 10),
        (46.0, -6.0, 30),
        (45.5, -6.5, 50),
        (45.0, -7.0, 70),
        (45.0, -6.0, 90),
    ])
    def test_exact_samples(self, cell, lat, lon, expected):
        """Queries on grid samples return the encoded values."""
        assert cell.elevation_at(lat, lon) == expected

    def test_rounds_to_nearest(self, cell):
        """Positions between samples snap to the closest one."""
        # row = (46 - lat) * 2
        assert cell.elevation_at(45.8, -7.0) == 10
        assert cell.elevation_at(45.7, -7.0) == 40
        assert cell.elevation_at(45.5, -6.8) == 40
        assert cell.elevation_at(45.5, -6.7) == 50

    def test_half_rounds_up(self, cell):
        """A position exactly between two samples takes the later index."""
        assert cell.elevation_at(45.75, -7.0) == 40
        assert cell.elevation_at(46.0, -6.75) == 20

    def test_returns_int(self, cell):
        """Elevations are plain Python ints."""
        assert type(cell.elevation_at(45.5, -6.5)) is int

    def test_void_sample_is_none(self):
        """The void sentinel reads back as no data."""
        grid = np.array(GRID)
        grid[1, 1] = VOID_ELEVATION
        cell = LoadedCell(COORD, grid)
        assert cell.elevation_at(45.5, -6.5) is None
        assert cell.elevation_at(46.0, -7.0) == 10

    def test_negative_elevation(self):
        """Below-sea-level samples are returned as-is."""
        cell = LoadedCell(COORD, [[-28, -10], [0, 5]])
        assert cell.elevation_at(46.0, -7.0) == -28


# ---------------------------------------------------------------------------
# Bilinear lookup
# ---------------------------------------------------------------------------

class TestElevationBilinearAt:
    """Test bilinear interpolation."""

    def test_center_of_four_samples(self, cell):
        """Midpoint of four samples is their mean."""
        assert cell.elevation_bilinear_at(45.75, -6.75) == pytest.approx(30.0)
        assert cell.elevation_bilinear_at(45.25, -6.25) == pytest.approx(70.0)

    def test_along_row(self, cell):
        """On a sample row only columns are interpolated."""
        assert cell.elevation_bilinear_at(45.5, -6.75) == pytest.approx(45.0)

    def test_along_column(self, cell):
        """On a sample column only rows are interpolated."""
        assert cell.elevation_bilinear_at(45.25, -7.0) == pytest.approx(55.0)

    def test_weights(self, cell):
        """Weights are proportional to proximity along each axis."""
        # row 0.5, col 0.25 -> rows blend 10/40 and 20/50
        expected = 0.75 * (0.5 * 10 + 0.5 * 40) + 0.25 * (0.5 * 20 + 0.5 * 50)
        assert cell.elevation_bilinear_at(45.75, -6.875) == pytest.approx(expected)

    def test_matches_nearest_on_samples(self, cell):
        """At every non-void sample, bilinear equals nearest lookup."""
        for row in range(3):
            for col in range(3):
                lat = 46.0 - row * 0.5
                lon = -7.0 + col * 0.5
                assert cell.elevation_bilinear_at(lat, lon) == pytest.approx(
                    cell.elevation_at(lat, lon)
                )

    def test_void_neighbour_is_none(self):
        """Any void among the four neighbours yields no data."""
        grid = np.array(GRID)
        grid[0, 0] = VOID_ELEVATION
        cell = LoadedCell(COORD, grid)
        assert cell.elevation_bilinear_at(45.75, -6.75) is None
        assert cell.elevation_bilinear_at(45.99, -6.51) is None
        assert cell.elevation_bilinear_at(45.25, -6.25) == pytest.approx(70.0)

    def test_void_at_exact_sample(self):
        """Bilinear on a void sample is no data, like nearest lookup."""
        grid = np.array(GRID)
        grid[2, 2] = VOID_ELEVATION
        cell = LoadedCell(COORD, grid)
        assert cell.elevation_bilinear_at(45.0, -6.0) is None
        assert cell.elevation_at(45.0, -6.0) is None

    def test_tile_edges(self, cell):
        """Edges interpolate within the tile only."""
        assert cell.elevation_bilinear_at(45.0, -6.25) == pytest.approx(85.0)
        assert cell.elevation_bilinear_at(45.75, -6.0) == pytest.approx(45.0)

    @pytest.mark.parametrize("row", [5, 6, 7, 8, 9, 15, 600, 1199])
    def test_srtm3_sample_row_ignores_void_row_below(self, row):
        """On a 1201 grid a sample latitude does not pull in the next row."""
        grid = np.full((1201, 1201), 100, dtype=np.int16)
        grid[row + 1, :] = VOID_ELEVATION
        cell = LoadedCell(TileCoordinate(45, 7), grid)
        lat = 46 - row / 1200
        assert cell.elevation_at(lat, 7.5) == 100
        assert cell.elevation_bilinear_at(lat, 7.5) == pytest.approx(100.0)

    @pytest.mark.parametrize("col", [5, 7, 9, 15, 333, 1199])
    def test_srtm3_sample_column_ignores_void_column_east(self, col):
        """On a 1201 grid a sample longitude does not pull in the next column."""
        grid = np.full((1201, 1201), 100, dtype=np.int16)
        grid[:, col + 1] = VOID_ELEVATION
        cell = LoadedCell(TileCoordinate(45, 7), grid)
        lon = 7 + col / 1200
        assert cell.elevation_at(45.5, lon) == 100
        assert cell.elevation_bilinear_at(45.5, lon) == pytest.approx(100.0)

    def test_srtm3_between_samples_still_checks_neighbours(self):
        """Snapping only applies at samples; in between, voids still count."""
        grid = np.full((1201, 1201), 100, dtype=np.int16)
        grid[6, :] = VOID_ELEVATION
        cell = LoadedCell(TileCoordinate(45, 7), grid)
        assert cell.elevation_bilinear_at(46 - 5.5 / 1200, 7.5) is None


# ---------------------------------------------------------------------------
# EmptyCell
# ---------------------------------------------------------------------------

class TestEmptyCell:
    """Test the no-data cell."""

    def test_always_no_data(self, tmp_path):
        """Every query on an empty cell returns None."""
        cell = EmptyCell(COORD, tmp_path / 'N45W007.txt')
        assert cell.is_empty
        assert cell.elevation_at(45.5, -6.5) is None
        assert cell.elevation_bilinear_at(45.5, -6.5) is None

    def test_identity(self, tmp_path):
        """Empty cells keep their coordinate and marker path."""
        marker = tmp_path / 'N45W007.txt'
        cell = EmptyCell(COORD, marker)
        assert cell.coordinate == COORD
        assert (cell.latitude, cell.longitude) == (45, -7)
        assert cell.marker_path == marker
        assert repr(cell) == 'EmptyCell(N45W007)'

    def test_loaded_cell_not_empty(self, cell):
        assert not cell.is_empty
        assert repr(cell) == 'LoadedCell(N45W007)'
