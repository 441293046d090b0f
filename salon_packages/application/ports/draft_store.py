from __future__ import annotations

from abc import ABC, abstractmethod

from salon_packages.domain.entities.appointment import AppointmentDraft


class AppointmentDraftStorePort(ABC):
    @abstractmethod
    def get_draft(self, draft_id: str) -> AppointmentDraft | None:
        raise NotImplementedError

    @abstractmethod
    def save_draft(self, draft: AppointmentDraft) -> AppointmentDraft:
        """Store draft, assigning an id when it has none."""
        raise NotImplementedError

    @abstractmethod
    def delete_draft(self, draft_id: str) -> None:
        raise NotImplementedError
