"""On-disk layout for Aleo nodes.

Production data lives under ``~/.aleo/storage``; development instances keep
hidden, id-suffixed folders in the current working directory. These helpers
only build paths, they never touch the filesystem.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

ALEO_DIRECTORY = ".aleo"

# Used when no home directory (or working directory) can be resolved.
_FALLBACK_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class StorageMode:
    """Where node data is kept.

    - production: ``~/.aleo/storage/...``
    - development(id): ``./.<role>-<network>-<id>``
    - custom(path): production layout rooted at ``path``
    """

    dev: Optional[int] = None
    path: Optional[Path] = None

    @classmethod
    def production(cls) -> "StorageMode":
        return cls()

    @classmethod
    def development(cls, dev_id: int) -> "StorageMode":
        return cls(dev=int(dev_id))

    @classmethod
    def custom(cls, path: Union[str, os.PathLike]) -> "StorageMode":
        return cls(path=Path(path))

    @property
    def is_development(self) -> bool:
        return self.dev is not None


ModeLike = Union[StorageMode, int, None]


def _mode(mode: ModeLike) -> StorageMode:
    if isinstance(mode, StorageMode):
        return mode
    if mode is None:
        return StorageMode.production()
    return StorageMode.development(mode)


def aleo_dir() -> Path:
    """``~/.aleo``, or ``.aleo`` beside the package without a home directory."""
    try:
        home = Path.home()
    except (KeyError, RuntimeError):
        home = _FALLBACK_DIR
    return home / ALEO_DIRECTORY


def _base_path(mode: StorageMode) -> Path:
    if mode.path is not None:
        return mode.path
    if mode.is_development:
        # In development mode, data sits in the directory the node runs from.
        try:
            return Path.cwd()
        except OSError:
            return _FALLBACK_DIR
    return aleo_dir()


def aleo_ledger_dir(network: int, dev: ModeLike = None) -> Path:
    mode = _mode(dev)
    path = _base_path(mode)
    if mode.is_development:
        return path / f".ledger-{network}-{mode.dev}"
    return path / "storage" / f"ledger-{network}"


def aleo_bft_primary_dir(network: int, dev: ModeLike = None) -> Path:
    mode = _mode(dev)
    path = _base_path(mode)
    if mode.is_development:
        return path / f".bft-{network}" / f"primary-{mode.dev}"
    return path / "storage" / f"bft-{network}" / "primary"


def aleo_bft_worker_dir(network: int, worker_id: int, dev: ModeLike = None) -> Path:
    mode = _mode(dev)
    path = _base_path(mode)
    if mode.is_development:
        return path / f".bft-{network}" / f"worker-{mode.dev}-{worker_id}"
    return path / "storage" / f"bft-{network}" / f"worker-{worker_id}"


def aleo_prover_dir(network: int, dev: ModeLike = None) -> Path:
    mode = _mode(dev)
    path = _base_path(mode)
    if mode.is_development:
        return path / f".prover-{network}-{mode.dev}"
    return path / "storage" / f"prover-{network}"
