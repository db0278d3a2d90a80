"""Abstract repository for the ad-hoc withdrawal log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from armory.domain.model.withdrawal import Withdrawal


class WithdrawalRepository(ABC):

    @abstractmethod
    def add(self, withdrawal: Withdrawal) -> None:
        """Append a withdrawal record, assigning its ID."""

    @abstractmethod
    def list_all(self) -> list[Withdrawal]:
        """Return every withdrawal, newest first."""
