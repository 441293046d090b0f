from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Sequence

from salon_packages.application.exceptions import (
    DraftLockedError,
    DraftNotFoundError,
    NoPendingConfirmationError,
    PackageNotFoundError,
)
from salon_packages.application.ports.catalog import CatalogPort
from salon_packages.application.ports.draft_store import AppointmentDraftStorePort
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.application.use_cases.selection import ServiceSelectionEngine, get_selected_count
from salon_packages.domain.entities.appointment import AppointmentDraft
from salon_packages.domain.entities.catalog import Gender
from salon_packages.domain.entities.errors import (
    FieldError,
    FieldErrorKind,
    SelectionError,
    SelectionErrorKind,
)
from salon_packages.domain.entities.package import AvailableFor, PackageDefinition
from salon_packages.domain.entities.selection_outcome import Applied, Outcome, PendingConfirmation
from salon_packages.domain.entities.selection_state import SelectableService, join_selection

DEFAULT_MIN_SELECTION = 1
DEFAULT_MAX_SELECTION = 999


def compute_total(entries: Iterable[SelectableService]) -> float:
    return sum(entry.rate for entry in entries if entry.is_selected)


def select_package(draft: AppointmentDraft, package: PackageDefinition) -> AppointmentDraft:
    """Fixed packages start fully selected, customizable ones start empty."""
    rows = join_selection(package.services, default=package.is_fixed)
    return replace(
        draft,
        package_id=package.id,
        selected_services=rows,
        total_amount=compute_total(rows),
        is_package_appointment=True,
        pending=None,
    )


def clear_package(draft: AppointmentDraft) -> AppointmentDraft:
    return replace(
        draft,
        package_id=None,
        selected_services=(),
        total_amount=0,
        is_package_appointment=False,
        pending=None,
    )


def with_entries(draft: AppointmentDraft, entries: Sequence[SelectableService]) -> AppointmentDraft:
    rows = tuple(entries)
    return replace(draft, selected_services=rows, total_amount=compute_total(rows), pending=None)


def filter_packages_for_client(
    packages: Iterable[PackageDefinition],
    client_gender: Gender | None,
) -> list[PackageDefinition]:
    if client_gender is None:
        return list(packages)
    return [
        pkg
        for pkg in packages
        if pkg.available_for == AvailableFor.all
        or (pkg.available_for == AvailableFor.males and client_gender == Gender.male)
        or (pkg.available_for == AvailableFor.females and client_gender == Gender.female)
    ]


def validate_submission(
    draft: AppointmentDraft,
    package: PackageDefinition | None,
) -> frozenset[SelectionError]:
    if package is None:
        return frozenset()

    selected = get_selected_count(draft.selected_services)
    if selected == 0:
        return frozenset(
            {SelectionError(SelectionErrorKind.no_service_selected, "Please select at least one service.")}
        )

    if package.is_customizable:
        low = package.min_selectable_services or DEFAULT_MIN_SELECTION
        high = package.max_selectable_services or DEFAULT_MAX_SELECTION
        if selected < low or selected > high:
            return frozenset(
                {
                    SelectionError(
                        SelectionErrorKind.selection_out_of_bounds,
                        f"Please select between {low} and {high} services.",
                    )
                }
            )
    return frozenset()


@dataclass(frozen=True)
class ToggleResult:
    draft: AppointmentDraft
    outcome: Outcome


@dataclass(frozen=True)
class SubmissionResult:
    accepted: bool
    draft: AppointmentDraft
    field_errors: frozenset[FieldError] = field(default_factory=frozenset)
    selection_errors: frozenset[SelectionError] = field(default_factory=frozenset)


class AppointmentService:
    """Appointment drafts held in a draft store, one workflow per draft."""

    def __init__(
        self,
        packages: PackageStorePort,
        catalog: CatalogPort,
        drafts: AppointmentDraftStorePort,
        engine: ServiceSelectionEngine | None = None,
    ) -> None:
        self._packages = packages
        self._catalog = catalog
        self._drafts = drafts
        self._engine = engine or ServiceSelectionEngine()
        self._logger = logging.getLogger(__name__)

    def start_draft(self, client_id: int | None = None) -> AppointmentDraft:
        if client_id is not None:
            self._require_client(client_id)
        return self._drafts.save_draft(AppointmentDraft(client_id=client_id))

    def get_draft(self, draft_id: str) -> AppointmentDraft:
        draft = self._drafts.get_draft(draft_id)
        if draft is None:
            raise DraftNotFoundError(draft_id)
        return draft

    def set_client(self, draft_id: str, client_id: int) -> AppointmentDraft:
        draft = self._unlocked(draft_id)
        self._require_client(client_id)
        return self._drafts.save_draft(replace(draft, client_id=client_id))

    def available_packages(self, draft_id: str) -> list[PackageDefinition]:
        """Active packages offered to the draft's client."""
        draft = self.get_draft(draft_id)
        active = [p for p in self._packages.list_packages() if p.is_active]
        client = self._catalog.get_client(draft.client_id) if draft.client_id is not None else None
        return filter_packages_for_client(active, client.gender if client else None)

    def select_package(self, draft_id: str, package_id: int) -> AppointmentDraft:
        draft = self._unlocked(draft_id)
        package = self._require_package(package_id)
        updated = self._drafts.save_draft(select_package(draft, package))
        self._logger.info(
            "Package selected for appointment",
            extra={"draft_id": draft_id, "package_id": package_id},
        )
        return updated

    def clear_package(self, draft_id: str) -> AppointmentDraft:
        draft = self._unlocked(draft_id)
        return self._drafts.save_draft(clear_package(draft))

    def toggle_service(self, draft_id: str, index: int) -> ToggleResult:
        draft = self._unlocked(draft_id)
        package = self._draft_package(draft)
        outcome = self._engine.toggle(draft.selected_services, index, package)
        return ToggleResult(draft=self._store_outcome(draft, outcome), outcome=outcome)

    def is_toggle_disabled(self, draft_id: str, index: int) -> bool:
        draft = self.get_draft(draft_id)
        if draft.package_id is None:
            return False
        package = self._require_package(draft.package_id)
        return self._engine.is_toggle_disabled(draft.selected_services, index, package)

    def resolve_confirmation(self, draft_id: str, accepted: bool) -> ToggleResult:
        draft = self.get_draft(draft_id)
        if draft.pending is None:
            raise NoPendingConfirmationError(f"Draft {draft_id} has no pending confirmation")
        package = self._draft_package(draft)
        outcome = self._engine.resolve(draft.pending, accepted, package)
        self._logger.info(
            "Confirmation resolved",
            extra={"draft_id": draft_id, "outcome": type(outcome).__name__, "reason": "accepted" if accepted else "declined"},
        )
        return ToggleResult(draft=self._store_outcome(draft, outcome), outcome=outcome)

    def abandon_confirmation(self, draft_id: str) -> AppointmentDraft:
        draft = self.get_draft(draft_id)
        return self._drafts.save_draft(replace(draft, pending=None))

    def submit(
        self,
        draft_id: str,
        appointment_date: date | None = None,
        appointment_time: str | None = None,
        notes: str | None = None,
    ) -> SubmissionResult:
        draft = self._unlocked(draft_id)
        draft = replace(
            draft,
            appointment_date=appointment_date or draft.appointment_date,
            appointment_time=appointment_time or draft.appointment_time,
            notes=notes if notes is not None else draft.notes,
        )

        field_errors = frozenset(
            FieldError(field=name, kind=FieldErrorKind.required, message=f"{name} is required")
            for name, value in (
                ("client_id", draft.client_id),
                ("appointment_date", draft.appointment_date),
                ("appointment_time", draft.appointment_time),
            )
            if value in (None, "")
        )
        package = self._require_package(draft.package_id) if draft.package_id is not None else None
        selection_errors = validate_submission(draft, package)

        if field_errors or selection_errors:
            self._drafts.save_draft(draft)
            return SubmissionResult(
                accepted=False,
                draft=draft,
                field_errors=field_errors,
                selection_errors=selection_errors,
            )

        self._drafts.delete_draft(draft_id)
        self._logger.info(
            "Appointment booked",
            extra={"draft_id": draft_id, "package_id": draft.package_id, "outcome": "booked"},
        )
        return SubmissionResult(accepted=True, draft=draft)

    def _store_outcome(self, draft: AppointmentDraft, outcome: Outcome) -> AppointmentDraft:
        if isinstance(outcome, Applied):
            updated = with_entries(draft, outcome.entries)
        elif isinstance(outcome, PendingConfirmation):
            updated = replace(draft, pending=outcome)
        else:
            updated = replace(draft, pending=None)
        return self._drafts.save_draft(updated)

    def _unlocked(self, draft_id: str) -> AppointmentDraft:
        draft = self.get_draft(draft_id)
        if draft.is_locked:
            raise DraftLockedError(f"Draft {draft_id} is waiting for a confirmation")
        return draft

    def _draft_package(self, draft: AppointmentDraft) -> PackageDefinition:
        if draft.package_id is None:
            raise ValueError("No package selected for this appointment")
        return self._require_package(draft.package_id)

    def _require_package(self, package_id: int) -> PackageDefinition:
        package = self._packages.get_package(package_id)
        if package is None:
            raise PackageNotFoundError(package_id)
        return package

    def _require_client(self, client_id: int) -> None:
        if self._catalog.get_client(client_id) is None:
            raise ValueError(f"Unknown client {client_id}")
