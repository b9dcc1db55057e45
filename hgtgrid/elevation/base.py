# -*- coding: utf-8 -*-
"""
Elevation Model Base Class - Abstract interface for terrain elevation lookup.

Defines the query surface shared by elevation models: single-point
``get_elevation`` / ``get_elevation_bilinear`` returning ``None`` for no
data, ``unload`` to drop cached data, and a vectorized ``sample`` method
supporting the scalar / array / stacked ``(2, N)`` dispatch pattern with
NaN for no data.

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
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

# Third-party
import numpy as np

# hgtgrid internal
from hgtgrid.exceptions import ValidationError


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _to_array(val: Any) -> np.ndarray:
    """Convert scalar, list, or array to 1D numpy array of float64."""
    arr = np.asarray(val, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    return arr


class ElevationModel(ABC):
    """Abstract base class for terrain elevation lookup.

    Subclasses implement the single-point queries and ``unload``. The
    public ``sample`` method builds on them to answer batches of points.

    Coordinate Conventions
    ----------------------
    - **Heights:** meters above mean sea level as stored in the data.
    - **Latitude:** Degrees North, range [-90, 90].
    - **Longitude:** Degrees East, range [-180, 180].
    - **No data:** ``None`` from single-point queries, NaN from ``sample``.
    """

    @abstractmethod
    def get_elevation(self, latitude: float, longitude: float) -> Optional[int]:
        """Elevation of the nearest grid sample.

        Parameters
        ----------
        latitude : float
            Latitude in degrees North.
        longitude : float
            Longitude in degrees East.

        Returns
        -------
        int or None
            Height in meters, or None if no data is available.
        """
        ...

    @abstractmethod
    def get_elevation_bilinear(
        self, latitude: float, longitude: float
    ) -> Optional[float]:
        """Elevation smoothed by bilinear interpolation.

        Parameters
        ----------
        latitude : float
            Latitude in degrees North.
        longitude : float
            Longitude in degrees East.

        Returns
        -------
        float or None
            Height in meters, or None if no data is available.
        """
        ...

    @abstractmethod
    def unload(self) -> None:
        """Release all cached elevation data."""
        ...

    def _sample_array(
        self, lats: np.ndarray, lons: np.ndarray, bilinear: bool
    ) -> np.ndarray:
        """Query arrays of coordinates point by point.

        Parameters
        ----------
        lats : np.ndarray
            Latitudes in degrees North. Shape ``(N,)``, dtype float64.
        lons : np.ndarray
            Longitudes in degrees East. Shape ``(N,)``, dtype float64.
        bilinear : bool
            Use bilinear interpolation instead of nearest sample.

        Returns
        -------
        np.ndarray
            Elevation values in meters. Shape ``(N,)``. NaN where no data
            is available.
        """
        if lats.shape != lons.shape:
            raise ValidationError(
                f"lats and lons must have the same shape, got "
                f"{lats.shape} and {lons.shape}"
            )
        query = self.get_elevation_bilinear if bilinear else self.get_elevation
        heights = np.full(lats.shape[0], np.nan, dtype=np.float64)
        for i in range(lats.shape[0]):
            value = query(float(lats[i]), float(lons[i]))
            if value is not None:
                heights[i] = value
        return heights

    def sample(
        self,
        lat_or_points: Union[float, list, np.ndarray],
        lon: Optional[Union[float, list, np.ndarray]] = None,
        bilinear: bool = False,
    ) -> Union[float, np.ndarray]:
        """Query terrain elevation for one or more geographic locations.

        Accepts three input forms:

        - **Scalar:** ``sample(lat, lon)`` returns a single float.
        - **Stacked (2, N) array:** ``sample(points_2xN)`` returns an
          ``(N,)`` ndarray.
        - **Separate arrays:** ``sample(lats_arr, lons_arr)`` returns an
          ndarray.

        Parameters
        ----------
        lat_or_points : float, list, or np.ndarray
            Latitude(s) when ``lon`` is provided, or a ``(2, N)`` ndarray
            of stacked ``[lats; lons]`` when ``lon`` is None.
        lon : float, list, or np.ndarray, optional
            Longitude(s). Omit to pass a ``(2, N)`` stacked array as the
            first argument.
        bilinear : bool, optional
            Interpolate bilinearly instead of taking the nearest sample.
            Default False.

        Returns
        -------
        float
            When scalar inputs are given. NaN if no data.
        np.ndarray
            When array inputs are given. Shape ``(N,)``, NaN where no data.

        Raises
        ------
        ValidationError
            If a ``(2, N)`` array is expected but the shape is wrong.

        Examples
        --------
        >>> elev.sample(45.5, -6.5)
        312.0
        >>> elev.sample(np.array([[45.5, 45.6], [-6.5, -6.4]]), bilinear=True)
        array([312.  , 318.25])
        """
        if lon is None:
            # (2, N) ndarray input
            pts = np.asarray(lat_or_points, dtype=np.float64)
            if pts.ndim != 2 or pts.shape[0] != 2:
                raise ValidationError(
                    f"Expected (2, N) array, got shape {pts.shape}"
                )
            return self._sample_array(pts[0], pts[1], bilinear)
        elif _is_scalar(lat_or_points) and _is_scalar(lon):
            heights = self._sample_array(
                _to_array(lat_or_points), _to_array(lon), bilinear
            )
            return float(heights[0])
        else:
            return self._sample_array(
                _to_array(lat_or_points), _to_array(lon), bilinear
            )
