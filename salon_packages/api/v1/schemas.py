from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from salon_packages.domain.entities.catalog import Gender
from salon_packages.domain.entities.package import (
    AvailableFor,
    PackageType,
    PaymentType,
    RenewalType,
)

# Range and cross-field checks belong to the package validator and come back as
# field errors; these schemas only fix the wire types.


class ServiceEntrySchema(BaseModel):
    service_id: int
    service_name: str = ""
    sequence_number: int | None = 1
    rate: float = 0
    is_selected: bool = True


class PackagePayloadSchema(BaseModel):
    name: str | None = None
    description: str | None = None
    validity: int | None = 30
    package_type: PackageType | None = PackageType.fixed
    min_selectable_services: int | None = 1
    max_selectable_services: int | None = 5
    extension_fee: float | None = 0
    is_complimentary_extension: bool = False
    max_extensions: int | None = 1
    available_durations: list[int] = Field(default_factory=list)
    renewal_type: RenewalType | None = RenewalType.manual
    payment_type: PaymentType | None = PaymentType.pre_paid
    available_for: AvailableFor | None = AvailableFor.all
    apply_for_all_outlets: bool = True
    is_booked_in_parallel: bool = False
    is_sharer_package: bool = False
    follow_sequence: bool = False
    services: list[ServiceEntrySchema] = Field(default_factory=list)
    outlets: list[dict[str, Any]] = Field(default_factory=list)
    is_active: bool = True

    def definition_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude={"services"})


class PackageSchema(PackagePayloadSchema):
    id: int
    created_date: datetime | None = None


class FieldErrorSchema(BaseModel):
    field: str
    kind: str
    message: str


class SelectionErrorSchema(BaseModel):
    kind: str
    message: str


class ValidationResponseSchema(BaseModel):
    valid: bool
    errors: list[FieldErrorSchema] = Field(default_factory=list)
    selection_errors: list[SelectionErrorSchema] = Field(default_factory=list)


class PackageSummarySchema(BaseModel):
    id: int | None
    name: str
    services: str
    validity: int | None
    extension_rule: str
    is_sharer_package: bool
    package_type: str
    is_booked_in_parallel: bool
    available_for: str
    rate: float
    payment_type: str
    follow_sequence: bool
    status: str


class CatalogServiceSchema(BaseModel):
    id: int
    name: str
    base_rate: float
    category: str
    is_active: bool


class OutletSchema(BaseModel):
    id: int
    name: str
    location: str
    is_active: bool


class ClientSchema(BaseModel):
    id: int
    name: str
    phone: str
    gender: Gender
    email: str | None = None


class DraftCreateSchema(BaseModel):
    client_id: int | None = None


class ClientChoiceSchema(BaseModel):
    client_id: int


class PackageChoiceSchema(BaseModel):
    package_id: int | None = None


class ConfirmationSchema(BaseModel):
    accepted: bool


class PendingConfirmationSchema(BaseModel):
    prompt: str
    index: int


class AppointmentDraftSchema(BaseModel):
    id: str
    client_id: int | None = None
    package_id: int | None = None
    selected_services: list[ServiceEntrySchema] = Field(default_factory=list)
    total_amount: float = 0
    is_package_appointment: bool = False
    appointment_date: date | None = None
    appointment_time: str | None = None
    notes: str | None = None
    pending: PendingConfirmationSchema | None = None


class ToggleResponseSchema(BaseModel):
    outcome: str  # "applied" | "pending_confirmation" | "rejected"
    draft: AppointmentDraftSchema
    prompt: str | None = None
    reason: SelectionErrorSchema | None = None


class SubmitRequestSchema(BaseModel):
    appointment_date: date | None = None
    appointment_time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    notes: str | None = None


class SubmitResponseSchema(BaseModel):
    accepted: bool
    draft: AppointmentDraftSchema
    errors: list[FieldErrorSchema] = Field(default_factory=list)
    selection_errors: list[SelectionErrorSchema] = Field(default_factory=list)
