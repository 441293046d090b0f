from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from salon_packages.domain.entities.selection_outcome import PendingConfirmation
from salon_packages.domain.entities.selection_state import SelectableService


@dataclass(frozen=True)
class AppointmentDraft:
    client_id: int | None = None
    package_id: int | None = None
    selected_services: tuple[SelectableService, ...] = ()
    total_amount: float = 0  # derived, see compute_total
    is_package_appointment: bool = False
    appointment_date: date | None = None
    appointment_time: str | None = None  # HH:MM
    notes: str | None = None
    pending: PendingConfirmation | None = None
    id: str | None = None

    @property
    def is_locked(self) -> bool:
        return self.pending is not None
