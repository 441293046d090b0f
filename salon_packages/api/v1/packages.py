from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from salon_packages.api.v1.mappers import (
    empty_draft,
    field_errors_to_schema,
    package_to_schema,
    selection_errors_to_schema,
    summary_to_schema,
)
from salon_packages.api.v1.schemas import (
    PackagePayloadSchema,
    PackageSchema,
    PackageSummarySchema,
    ValidationResponseSchema,
)
from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.application.use_cases.package_editor import PackageEditorUseCase
from salon_packages.application.use_cases.package_listing import PackageListingUseCase
from salon_packages.domain.entities.package import PaymentType
from salon_packages.wiring.dependencies import (
    get_package_editor,
    get_package_listing,
    get_package_store,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/packages", response_model=list[PackageSummarySchema])
def list_packages(
    q: str | None = Query(None, description="Search text"),
    listing: PackageListingUseCase = Depends(get_package_listing),
):
    return [summary_to_schema(s) for s in listing.list_summaries(q)]


@router.get("/packages/prepaid", response_model=list[PackageSchema])
def list_prepaid_packages(listing: PackageListingUseCase = Depends(get_package_listing)):
    return [package_to_schema(p) for p in listing.packages_by_payment(PaymentType.pre_paid)]


@router.get("/packages/postpaid", response_model=list[PackageSchema])
def list_postpaid_packages(listing: PackageListingUseCase = Depends(get_package_listing)):
    return [package_to_schema(p) for p in listing.packages_by_payment(PaymentType.post_paid)]


@router.post("/packages/validate", response_model=ValidationResponseSchema)
def validate_package(
    payload: PackagePayloadSchema,
    editor: PackageEditorUseCase = Depends(get_package_editor),
):
    try:
        change = editor.update(empty_draft(None, payload), **payload.definition_fields())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    errors, selection_errors = editor.check(change.draft)
    return ValidationResponseSchema(
        valid=not errors and not selection_errors,
        errors=field_errors_to_schema(errors),
        selection_errors=selection_errors_to_schema(selection_errors),
    )


@router.get("/packages/{package_id}", response_model=PackageSchema)
def get_package(package_id: int, store: PackageStorePort = Depends(get_package_store)):
    package = store.get_package(package_id)
    if package is None:
        raise HTTPException(status_code=404, detail=f"Package {package_id} not found")
    return package_to_schema(package)


@router.post("/packages", response_model=PackageSchema, status_code=201)
def create_package(
    payload: PackagePayloadSchema,
    editor: PackageEditorUseCase = Depends(get_package_editor),
):
    return _save(editor, None, payload)


@router.put("/packages/{package_id}", response_model=PackageSchema)
def update_package(
    package_id: int,
    payload: PackagePayloadSchema,
    editor: PackageEditorUseCase = Depends(get_package_editor),
):
    return _save(editor, package_id, payload)


@router.post("/packages/{package_id}/toggle-status", response_model=PackageSchema)
def toggle_package_status(
    package_id: int,
    listing: PackageListingUseCase = Depends(get_package_listing),
):
    try:
        return package_to_schema(listing.toggle_status(package_id))
    except PackageNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/packages/{package_id}", status_code=204)
def delete_package(
    package_id: int,
    listing: PackageListingUseCase = Depends(get_package_listing),
) -> Response:
    if not listing.delete(package_id):
        raise HTTPException(status_code=404, detail=f"Package {package_id} not found")
    return Response(status_code=204)


def _save(editor: PackageEditorUseCase, package_id: int | None, payload: PackagePayloadSchema):
    try:
        change = editor.update(empty_draft(package_id, payload), **payload.definition_fields())
        result = editor.submit(change.draft)
    except PackageNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not result.accepted:
        logger.info("Package rejected", extra={"package_id": package_id, "outcome": "invalid"})
        body = ValidationResponseSchema(
            valid=False,
            errors=field_errors_to_schema(result.errors),
            selection_errors=selection_errors_to_schema(result.selection_errors),
        )
        return JSONResponse(status_code=422, content=body.model_dump())
    return package_to_schema(result.package)
