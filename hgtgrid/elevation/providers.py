# -*- coding: utf-8 -*-
"""
Missing-Tile Providers - Materialize absent tiles into the storage root.

When a tile is not present locally, the resolver asks a provider to put it
there. A provider only has to try: its boolean result is advisory, and the
resolver always re-checks the storage root afterwards. Retry and give-up
policy lives in the resolver, never in the provider.

Any callable ``(storage_root, name) -> bool`` can serve as a provider; it is
wrapped in ``CallableProvider``. ``MirrorDirectoryProvider`` copies tiles
from a second local directory such as a mounted network share.

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
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

# hgtgrid internal
from hgtgrid.exceptions import StorageNotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Tile file suffixes a mirror is searched for, in order of preference
_MIRROR_SUFFIXES = ('.hgt', '.hgt.zip')


class MissingTileProvider(ABC):
    """Abstract capability that tries to materialize a missing tile."""

    @abstractmethod
    def attempt(self, storage_root: Path, name: str) -> bool:
        """Try to make tile ``name`` available under ``storage_root``.

        Parameters
        ----------
        storage_root : Path
            Directory the resolver loads tiles from.
        name : str
            Canonical tile name, e.g. ``'N45W007'``.

        Returns
        -------
        bool
            True if the provider believes it wrote the tile. Advisory
            only; the resolver re-checks the filesystem regardless.
        """
        ...


class CallableProvider(MissingTileProvider):
    """Adapt a plain function ``(storage_root, name) -> bool`` to a provider."""

    def __init__(self, func: Callable[[Path, str], bool]) -> None:
        if not callable(func):
            raise ValidationError(
                f"Provider must be callable, got {type(func).__name__}"
            )
        self._func = func

    def attempt(self, storage_root: Path, name: str) -> bool:
        return bool(self._func(storage_root, name))


def as_provider(
    provider: Optional[Union[MissingTileProvider, Callable[[Path, str], bool]]],
) -> Optional[MissingTileProvider]:
    """Normalize a provider argument: None, a provider, or a callable."""
    if provider is None or isinstance(provider, MissingTileProvider):
        return provider
    return CallableProvider(provider)


class MirrorDirectoryProvider(MissingTileProvider):
    """Copy missing tiles from a mirror directory into the storage root.

    Looks for ``<name>.hgt`` then ``<name>.hgt.zip`` in the mirror and
    copies the first match. Files are written to a temporary name and
    atomically moved into place, so a concurrent reader never sees a
    partial tile.

    Parameters
    ----------
    mirror_root : str or Path
        Directory holding the tile files to copy from.
    suffixes : sequence of str, optional
        File suffixes to look for, in order of preference.

    Raises
    ------
    StorageNotFoundError
        If ``mirror_root`` does not exist or is not a directory.

    Examples
    --------
    >>> provider = MirrorDirectoryProvider('/mnt/srtm_share')
    >>> elev = SRTMElevation('/data/srtm', provider=provider)
    """

    def __init__(
        self,
        mirror_root: Union[str, Path],
        suffixes: Sequence[str] = _MIRROR_SUFFIXES,
    ) -> None:
        mirror_root = Path(mirror_root)
        if not mirror_root.is_dir():
            raise StorageNotFoundError(
                f"Mirror directory does not exist: {mirror_root}"
            )
        self.mirror_root = mirror_root
        self.suffixes = tuple(suffixes)

    def attempt(self, storage_root: Path, name: str) -> bool:
        for suffix in self.suffixes:
            source = self.mirror_root / f"{name}{suffix}"
            if not source.is_file():
                continue

            target = Path(storage_root) / source.name
            tmp_path = target.with_name(target.name + '.tmp')
            try:
                shutil.copyfile(source, tmp_path)
                tmp_path.replace(target)
            except OSError:
                if tmp_path.exists():
                    tmp_path.unlink()
                raise
            logger.info("Copied tile %s from mirror %s", source.name,
                        self.mirror_root)
            return True

        logger.debug("Tile %s not found in mirror %s", name, self.mirror_root)
        return False
