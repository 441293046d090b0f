from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from salon_packages.domain.entities.errors import SelectionError, SelectionErrorKind
from salon_packages.domain.entities.package import PackageDefinition
from salon_packages.domain.entities.selection_outcome import (
    Applied,
    Outcome,
    PendingConfirmation,
    Rejected,
)
from salon_packages.domain.entities.selection_state import SelectableService

PARALLEL_BOOKING_PROMPT = "Remaining services will lapse if not availed in this appointment."


def get_selected_count(entries: Sequence[SelectableService]) -> int:
    return sum(1 for entry in entries if entry.is_selected)


def _flip(entries: Sequence[SelectableService], index: int) -> tuple[SelectableService, ...]:
    rows = list(entries)
    rows[index] = replace(rows[index], is_selected=not rows[index].is_selected)
    return tuple(rows)


class ServiceSelectionEngine:
    """
    Select/deselect services of a package draft or appointment draft.

    toggle() never mutates its input. A parallel-booking deselection comes back as
    PendingConfirmation and only changes state once passed to resolve().
    """

    def __init__(self, parallel_booking_prompt: str = PARALLEL_BOOKING_PROMPT) -> None:
        self._parallel_booking_prompt = parallel_booking_prompt
        self._logger = logging.getLogger(__name__)

    def toggle(
        self,
        entries: Sequence[SelectableService],
        index: int,
        package: PackageDefinition,
        guard_minimum: bool = True,
    ) -> Outcome:
        """guard_minimum=False is for package editing, where any subset may be picked."""
        current = tuple(entries)
        if not 0 <= index < len(current):
            raise IndexError(f"No service at position {index}")
        selecting = not current[index].is_selected

        if package.is_customizable and selecting:
            max_selectable = package.max_selectable_services or 0
            if get_selected_count(current) >= max_selectable:
                return self._reject(
                    current,
                    SelectionErrorKind.max_services_reached,
                    "Maximum number of services are availed, you cannot select more.",
                )

        if package.is_booked_in_parallel and not selecting and get_selected_count(current) > 1:
            self._logger.info(
                "Deselection needs confirmation",
                extra={"package_id": package.id, "outcome": "pending_confirmation"},
            )
            return PendingConfirmation(
                prompt=self._parallel_booking_prompt,
                entries=current,
                index=index,
            )

        return self._apply(current, index, package, guard_minimum)

    def resolve(
        self,
        pending: PendingConfirmation,
        accepted: bool,
        package: PackageDefinition,
    ) -> Outcome:
        """Second phase of a confirmation-gated toggle."""
        if not accepted:
            return self._reject(
                pending.entries,
                SelectionErrorKind.confirmation_declined,
                "Selection left unchanged.",
            )
        return self._apply(pending.entries, pending.index, package)

    def is_toggle_disabled(
        self,
        entries: Sequence[SelectableService],
        index: int,
        package: PackageDefinition,
    ) -> bool:
        if not 0 <= index < len(entries):
            raise IndexError(f"No service at position {index}")
        if entries[index].is_selected or not package.is_customizable:
            return False
        return get_selected_count(entries) >= (package.max_selectable_services or 0)

    def _apply(
        self,
        current: tuple[SelectableService, ...],
        index: int,
        package: PackageDefinition,
        guard_minimum: bool = True,
    ) -> Outcome:
        deselecting = current[index].is_selected
        updated = _flip(current, index)

        # the minimum guard runs after every accepted flip, confirmed or not
        if guard_minimum and package.is_customizable and deselecting:
            min_selectable = package.min_selectable_services or 1
            if get_selected_count(updated) < min_selectable:
                return self._reject(
                    current,
                    SelectionErrorKind.min_services_required,
                    f"Minimum {min_selectable} services must be selected.",
                )

        return Applied(entries=updated)

    def _reject(
        self,
        current: tuple[SelectableService, ...],
        kind: SelectionErrorKind,
        message: str,
    ) -> Rejected:
        self._logger.info("Toggle rejected", extra={"outcome": "rejected", "reason": kind.value})
        return Rejected(reason=SelectionError(kind=kind, message=message), entries=current)
