"""Persistence port for the outlet repository."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ..core.types import Outlet


class StorageError(RuntimeError):
    """Raised when a store cannot read or write outlets."""


class OutletStore(ABC):
    """Backend interface for loading and persisting outlets."""

    @abstractmethod
    def load_all(self) -> list[Outlet]:
        """Return every stored outlet in storage order."""
        raise NotImplementedError

    @abstractmethod
    def save_many(self, outlets: Iterable[Outlet]) -> None:
        """Insert or replace outlets by id."""
        raise NotImplementedError

    @abstractmethod
    def delete_many(self, ids: Iterable[str]) -> None:
        """Delete outlets by id; unknown ids are ignored."""
        raise NotImplementedError
