from __future__ import annotations

from dataclasses import asdict
from typing import Iterable

from salon_packages.api.v1.schemas import (
    AppointmentDraftSchema,
    FieldErrorSchema,
    PackagePayloadSchema,
    PackageSchema,
    PackageSummarySchema,
    PendingConfirmationSchema,
    SelectionErrorSchema,
    ServiceEntrySchema,
    ToggleResponseSchema,
)
from salon_packages.application.use_cases.package_editor import PackageDraft
from salon_packages.application.use_cases.package_listing import PackageSummary
from salon_packages.domain.entities.appointment import AppointmentDraft
from salon_packages.domain.entities.errors import FieldError, SelectionError
from salon_packages.domain.entities.package import PackageDefinition, ServiceEntry
from salon_packages.domain.entities.selection_outcome import Applied, Outcome, PendingConfirmation
from salon_packages.domain.entities.selection_state import SelectableService


def field_errors_to_schema(errors: Iterable[FieldError]) -> list[FieldErrorSchema]:
    return [
        FieldErrorSchema(field=e.field, kind=e.kind.value, message=e.message)
        for e in sorted(errors, key=lambda e: (e.field, e.kind.value))
    ]


def selection_errors_to_schema(errors: Iterable[SelectionError]) -> list[SelectionErrorSchema]:
    return [SelectionErrorSchema(kind=e.kind.value, message=e.message) for e in errors]


def package_to_schema(package: PackageDefinition) -> PackageSchema:
    return PackageSchema(
        id=package.id,
        created_date=package.created_date,
        name=package.name,
        description=package.description,
        validity=package.validity,
        package_type=package.package_type,
        min_selectable_services=package.min_selectable_services,
        max_selectable_services=package.max_selectable_services,
        extension_fee=package.extension_fee,
        is_complimentary_extension=package.is_complimentary_extension,
        max_extensions=package.max_extensions,
        available_durations=list(package.available_durations),
        renewal_type=package.renewal_type,
        payment_type=package.payment_type,
        available_for=package.available_for,
        apply_for_all_outlets=package.apply_for_all_outlets,
        is_booked_in_parallel=package.is_booked_in_parallel,
        is_sharer_package=package.is_sharer_package,
        follow_sequence=package.follow_sequence,
        services=[
            ServiceEntrySchema(
                service_id=s.service_id,
                service_name=s.service_name,
                sequence_number=s.sequence_number,
                rate=s.rate,
            )
            for s in package.services
        ],
        outlets=[dict(o) for o in package.outlets],
        is_active=package.is_active,
    )


def payload_to_rows(payload: PackagePayloadSchema) -> tuple[SelectableService, ...]:
    return tuple(
        SelectableService(
            entry=ServiceEntry(
                service_id=s.service_id,
                service_name=s.service_name,
                sequence_number=s.sequence_number,
                rate=s.rate,
            ),
            is_selected=s.is_selected,
        )
        for s in payload.services
    )


def empty_draft(package_id: int | None, payload: PackagePayloadSchema) -> PackageDraft:
    return PackageDraft(definition=PackageDefinition(id=package_id), rows=payload_to_rows(payload))


def summary_to_schema(summary: PackageSummary) -> PackageSummarySchema:
    return PackageSummarySchema(**asdict(summary))


def rows_to_schema(rows: Iterable[SelectableService]) -> list[ServiceEntrySchema]:
    return [
        ServiceEntrySchema(
            service_id=r.service_id,
            service_name=r.service_name,
            sequence_number=r.sequence_number,
            rate=r.rate,
            is_selected=r.is_selected,
        )
        for r in rows
    ]


def draft_to_schema(draft: AppointmentDraft) -> AppointmentDraftSchema:
    return AppointmentDraftSchema(
        id=draft.id,
        client_id=draft.client_id,
        package_id=draft.package_id,
        selected_services=rows_to_schema(draft.selected_services),
        total_amount=draft.total_amount,
        is_package_appointment=draft.is_package_appointment,
        appointment_date=draft.appointment_date,
        appointment_time=draft.appointment_time,
        notes=draft.notes,
        pending=(
            PendingConfirmationSchema(prompt=draft.pending.prompt, index=draft.pending.index)
            if draft.pending else None
        ),
    )


def toggle_to_schema(draft: AppointmentDraft, outcome: Outcome) -> ToggleResponseSchema:
    if isinstance(outcome, Applied):
        return ToggleResponseSchema(outcome="applied", draft=draft_to_schema(draft))
    if isinstance(outcome, PendingConfirmation):
        return ToggleResponseSchema(
            outcome="pending_confirmation",
            draft=draft_to_schema(draft),
            prompt=outcome.prompt,
        )
    return ToggleResponseSchema(
        outcome="rejected",
        draft=draft_to_schema(draft),
        reason=SelectionErrorSchema(kind=outcome.reason.kind.value, message=outcome.reason.message),
    )
