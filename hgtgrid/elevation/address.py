# -*- coding: utf-8 -*-
"""
Tile Address - Map geographic coordinates to SRTM tile coordinates and names.

Each SRTM tile covers a 1x1 degree cell identified by the integer degree of
its southwest corner. The canonical tile name is the on-disk file stem::

    N45W007   ->  tile (45, -7), covering 45..46 N, 7..6 W
    S01E000   ->  tile (-1, 0),  covering 1 S..0, 0..1 E

A point lying exactly on a 1-degree line belongs to the tile north/east of
the line in both hemispheres, so ``(45.0, -7.0)`` resolves to ``N45W007``.

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
from dataclasses import dataclass

# hgtgrid internal
from hgtgrid.exceptions import ValidationError


def _tile_degree(value: float) -> int:
    """Southwest-corner degree of the tile containing ``value``.

    Negative values are floored toward the tile below/left unless they sit
    exactly on an integer, in which case the integer itself is kept.
    """
    if not math.isfinite(value):
        raise ValidationError(f"Coordinate must be finite, got {value}")
    degree = int(math.floor(abs(value)))
    if value < 0:
        degree = -degree
        if degree != value:
            degree -= 1
    return degree


@dataclass(frozen=True)
class TileCoordinate:
    """Integer southwest corner of a 1x1 degree tile.

    Parameters
    ----------
    lat : int
        Tile latitude in degrees North.
    lon : int
        Tile longitude in degrees East.
    """

    lat: int
    lon: int

    @property
    def name(self) -> str:
        """Canonical tile name, e.g. ``'N45W007'``."""
        return '{}{:02d}{}{:03d}'.format(
            'S' if self.lat < 0 else 'N', abs(self.lat),
            'W' if self.lon < 0 else 'E', abs(self.lon),
        )

    @classmethod
    def from_name(cls, name: str) -> 'TileCoordinate':
        """Parse a canonical tile name back into a coordinate.

        Parameters
        ----------
        name : str
            Tile name such as ``'N45W007'`` or ``'s01e000'``. A trailing
            ``.hgt`` or ``.hgt.zip`` suffix is ignored.

        Returns
        -------
        TileCoordinate

        Raises
        ------
        ValidationError
            If ``name`` does not follow the SRTM naming convention.
        """
        stem = name.split('.', 1)[0].upper()
        try:
            if len(stem) != 7:
                raise ValueError(stem)
            lat_hemi, lat_str = stem[0], stem[1:3]
            lon_hemi, lon_str = stem[3], stem[4:7]
            if lat_hemi not in 'NS' or lon_hemi not in 'EW':
                raise ValueError(stem)
            lat = int(lat_str)
            lon = int(lon_str)
        except ValueError:
            raise ValidationError(
                f"Not a valid SRTM tile name: {name!r}. "
                f"Expected e.g. 'N45W007'."
            ) from None

        if lat_hemi == 'S':
            lat = -lat
        if lon_hemi == 'W':
            lon = -lon
        return cls(lat, lon)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TileAddress:
    """Tile coordinate together with its canonical file stem.

    Attributes
    ----------
    coordinate : TileCoordinate
        Southwest corner of the tile.
    name : str
        Canonical tile name used as the on-disk file stem.
    """

    coordinate: TileCoordinate
    name: str


def resolve_tile(latitude: float, longitude: float) -> TileAddress:
    """Resolve a geographic coordinate to the tile that contains it.

    Parameters
    ----------
    latitude : float
        Latitude in degrees North.
    longitude : float
        Longitude in degrees East.

    Returns
    -------
    TileAddress
        Tile coordinate and canonical name.

    Raises
    ------
    ValidationError
        If either coordinate is NaN or infinite.

    Examples
    --------
    >>> resolve_tile(45.0, -7.0).name
    'N45W007'
    >>> resolve_tile(-0.5, 0.25).coordinate
    TileCoordinate(lat=-1, lon=0)
    """
    coordinate = TileCoordinate(_tile_degree(latitude), _tile_degree(longitude))
    return TileAddress(coordinate=coordinate, name=coordinate.name)
