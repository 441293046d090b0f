from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any

from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.application.ports.catalog import CatalogPort
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.application.use_cases.selection import ServiceSelectionEngine
from salon_packages.application.validation.package_validator import PackageValidator, diff_errors
from salon_packages.domain.entities.errors import FieldError, SelectionError, SelectionErrorKind
from salon_packages.domain.entities.package import PackageDefinition, ServiceEntry
from salon_packages.domain.entities.selection_outcome import Applied, Outcome
from salon_packages.domain.entities.selection_state import (
    SelectableService,
    join_selection,
    selected_entries,
)

# Fields a caller may change through update(); services go through the row helpers.
EDITABLE_FIELDS = frozenset(
    f.name for f in fields(PackageDefinition) if f.name not in {"id", "created_date", "services"}
)


@dataclass(frozen=True)
class PackageDraft:
    definition: PackageDefinition
    rows: tuple[SelectableService, ...] = ()
    errors: frozenset[FieldError] = frozenset()

    @property
    def is_edit(self) -> bool:
        return self.definition.id is not None

    def candidate(self) -> PackageDefinition:
        """The definition with every row attached, as validated while editing."""
        return replace(self.definition, services=tuple(row.entry for row in self.rows))


@dataclass(frozen=True)
class DraftChange:
    draft: PackageDraft
    added: frozenset[FieldError] = frozenset()
    cleared: frozenset[FieldError] = frozenset()


@dataclass(frozen=True)
class PackageSubmitResult:
    package: PackageDefinition | None
    errors: frozenset[FieldError] = frozenset()
    selection_errors: frozenset[SelectionError] = field(default_factory=frozenset)

    @property
    def accepted(self) -> bool:
        return self.package is not None


class PackageEditorUseCase:
    """Create and edit package definitions field by field, revalidating on every change."""

    def __init__(
        self,
        store: PackageStorePort,
        catalog: CatalogPort,
        validator: PackageValidator | None = None,
        engine: ServiceSelectionEngine | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._validator = validator or PackageValidator()
        self._engine = engine or ServiceSelectionEngine()
        self._logger = logging.getLogger(__name__)

    def new_draft(self) -> PackageDraft:
        services = [s for s in self._catalog.list_services() if s.is_active]
        rows = join_selection(
            ServiceEntry(
                service_id=s.id,
                service_name=s.name,
                sequence_number=i + 1,
                rate=s.base_rate,
            )
            for i, s in enumerate(services)
        )
        return self._revalidate(PackageDraft(definition=PackageDefinition(), rows=rows))

    def edit_draft(self, package_id: int) -> PackageDraft:
        package = self._store.get_package(package_id)
        if package is None:
            raise PackageNotFoundError(package_id)
        rows = join_selection(package.services, default=True)
        return self._revalidate(PackageDraft(definition=replace(package, services=()), rows=rows))

    def update(self, draft: PackageDraft, **changes: Any) -> DraftChange:
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown package fields: {', '.join(sorted(unknown))}")

        if "available_durations" in changes:
            changes["available_durations"] = tuple(sorted(set(changes["available_durations"] or ())))
        if "outlets" in changes:
            changes["outlets"] = tuple(changes["outlets"] or ())

        definition = replace(draft.definition, **changes)
        if changes.get("is_complimentary_extension"):
            definition = replace(definition, extension_fee=0)

        return self._change(draft, replace(draft, definition=definition))

    def update_service(
        self,
        draft: PackageDraft,
        index: int,
        sequence_number: int | None = None,
        rate: float | None = None,
    ) -> DraftChange:
        row = draft.rows[index]
        entry = row.entry
        if sequence_number is not None:
            entry = replace(entry, sequence_number=sequence_number)
        if rate is not None:
            entry = replace(entry, rate=rate)
        rows = list(draft.rows)
        rows[index] = replace(row, entry=entry)
        return self._change(draft, replace(draft, rows=tuple(rows)))

    def toggle_service(self, draft: PackageDraft, index: int) -> tuple[PackageDraft, Outcome]:
        # parallel booking only matters once the package is being consumed
        package = replace(draft.definition, is_booked_in_parallel=False)
        outcome = self._engine.toggle(draft.rows, index, package, guard_minimum=False)
        if isinstance(outcome, Applied):
            draft = self._revalidate(replace(draft, rows=outcome.entries))
        return draft, outcome

    def is_service_disabled(self, draft: PackageDraft, index: int) -> bool:
        return self._engine.is_toggle_disabled(draft.rows, index, draft.definition)

    def toggle_duration(self, draft: PackageDraft, minutes: int) -> PackageDraft:
        if minutes < 1:
            raise ValueError(f"Duration must be a positive number of minutes, got {minutes}")
        durations = set(draft.definition.available_durations)
        durations.symmetric_difference_update({minutes})
        definition = replace(draft.definition, available_durations=tuple(sorted(durations)))
        return replace(draft, definition=definition)

    def check(self, draft: PackageDraft) -> tuple[frozenset[FieldError], frozenset[SelectionError]]:
        """Everything submit() would refuse, without persisting."""
        errors = self._validator.validate(draft.candidate())
        selection_errors: frozenset[SelectionError] = frozenset()
        if not selected_entries(draft.rows):
            selection_errors = frozenset(
                {SelectionError(SelectionErrorKind.no_service_selected, "Please select at least one service.")}
            )
        return errors, selection_errors

    def submit(self, draft: PackageDraft) -> PackageSubmitResult:
        errors, selection_errors = self.check(draft)
        if errors or selection_errors:
            return PackageSubmitResult(package=None, errors=errors, selection_errors=selection_errors)

        package = replace(draft.definition, services=selected_entries(draft.rows))
        if draft.is_edit:
            saved = self._store.update_package(draft.definition.id, package)
            self._logger.info("Package updated", extra={"package_id": saved.id})
        else:
            saved = self._store.create_package(package)
            self._logger.info("Package created", extra={"package_id": saved.id})
        return PackageSubmitResult(package=saved)

    def _revalidate(self, draft: PackageDraft) -> PackageDraft:
        return replace(draft, errors=self._validator.validate(draft.candidate()))

    def _change(self, previous: PackageDraft, draft: PackageDraft) -> DraftChange:
        draft = self._revalidate(draft)
        added, cleared = diff_errors(previous.errors, draft.errors)
        return DraftChange(draft=draft, added=added, cleared=cleared)
