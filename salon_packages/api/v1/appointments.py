from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from salon_packages.api.v1.mappers import (
    draft_to_schema,
    field_errors_to_schema,
    selection_errors_to_schema,
    summary_to_schema,
    toggle_to_schema,
)
from salon_packages.api.v1.schemas import (
    AppointmentDraftSchema,
    ClientChoiceSchema,
    ConfirmationSchema,
    DraftCreateSchema,
    PackageChoiceSchema,
    PackageSummarySchema,
    SubmitRequestSchema,
    SubmitResponseSchema,
    ToggleResponseSchema,
)
from salon_packages.application.exceptions import (
    DraftLockedError,
    DraftNotFoundError,
    NoPendingConfirmationError,
    PackageNotFoundError,
)
from salon_packages.application.use_cases.appointment import AppointmentService
from salon_packages.application.use_cases.package_listing import summarize
from salon_packages.core.config import settings
from salon_packages.wiring.dependencies import get_appointment_service

router = APIRouter()


@router.post("/appointments/drafts", response_model=AppointmentDraftSchema, status_code=201)
def start_draft(
    req: DraftCreateSchema,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        return draft_to_schema(svc.start_draft(req.client_id))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/appointments/drafts/{draft_id}", response_model=AppointmentDraftSchema)
def get_draft(draft_id: str, svc: AppointmentService = Depends(get_appointment_service)):
    try:
        return draft_to_schema(svc.get_draft(draft_id))
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/appointments/drafts/{draft_id}/packages", response_model=list[PackageSummarySchema])
def available_packages(draft_id: str, svc: AppointmentService = Depends(get_appointment_service)):
    try:
        packages = svc.available_packages(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [summary_to_schema(summarize(p, settings.CURRENCY_SYMBOL)) for p in packages]


@router.put("/appointments/drafts/{draft_id}/client", response_model=AppointmentDraftSchema)
def set_client(
    draft_id: str,
    req: ClientChoiceSchema,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        return draft_to_schema(svc.set_client(draft_id, req.client_id))
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftLockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/appointments/drafts/{draft_id}/package", response_model=AppointmentDraftSchema)
def choose_package(
    draft_id: str,
    req: PackageChoiceSchema,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        if req.package_id is None:
            draft = svc.clear_package(draft_id)
        else:
            draft = svc.select_package(draft_id, req.package_id)
    except (DraftNotFoundError, PackageNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftLockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return draft_to_schema(draft)


@router.post(
    "/appointments/drafts/{draft_id}/services/{index}/toggle",
    response_model=ToggleResponseSchema,
)
def toggle_service(
    draft_id: str,
    index: int,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        result = svc.toggle_service(draft_id, index)
    except (DraftNotFoundError, PackageNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftLockedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (ValueError, IndexError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return toggle_to_schema(result.draft, result.outcome)


@router.post("/appointments/drafts/{draft_id}/confirmation", response_model=ToggleResponseSchema)
def resolve_confirmation(
    draft_id: str,
    req: ConfirmationSchema,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        result = svc.resolve_confirmation(draft_id, req.accepted)
    except (DraftNotFoundError, PackageNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoPendingConfirmationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return toggle_to_schema(result.draft, result.outcome)


@router.delete("/appointments/drafts/{draft_id}/confirmation", response_model=AppointmentDraftSchema)
def abandon_confirmation(draft_id: str, svc: AppointmentService = Depends(get_appointment_service)):
    try:
        return draft_to_schema(svc.abandon_confirmation(draft_id))
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/appointments/drafts/{draft_id}/submit", response_model=SubmitResponseSchema)
def submit_draft(
    draft_id: str,
    req: SubmitRequestSchema,
    svc: AppointmentService = Depends(get_appointment_service),
):
    try:
        result = svc.submit(
            draft_id,
            appointment_date=req.appointment_date,
            appointment_time=req.appointment_time,
            notes=req.notes,
        )
    except (DraftNotFoundError, PackageNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DraftLockedError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return SubmitResponseSchema(
        accepted=result.accepted,
        draft=draft_to_schema(result.draft),
        errors=field_errors_to_schema(result.field_errors),
        selection_errors=selection_errors_to_schema(result.selection_errors),
    )
