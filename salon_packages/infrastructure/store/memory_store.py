from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from salon_packages.application.exceptions import PackageNotFoundError
from salon_packages.application.ports.draft_store import AppointmentDraftStorePort
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.domain.entities.appointment import AppointmentDraft
from salon_packages.domain.entities.package import PackageDefinition


class MemoryPackageStore(PackageStorePort):
    def __init__(self, packages: Iterable[PackageDefinition] = ()) -> None:
        self._packages: dict[int, PackageDefinition] = {}
        for package in packages:
            if package.id is None:
                self.create_package(package)
            else:
                self._packages[package.id] = replace(
                    package, created_date=package.created_date or datetime.now()
                )

    def list_packages(self) -> list[PackageDefinition]:
        return list(self._packages.values())

    def get_package(self, package_id: int) -> PackageDefinition | None:
        return self._packages.get(package_id)

    def create_package(self, package: PackageDefinition) -> PackageDefinition:
        new_id = max(self._packages, default=0) + 1
        created = replace(package, id=new_id, created_date=datetime.now())
        self._packages[new_id] = created
        return created

    def update_package(self, package_id: int, package: PackageDefinition) -> PackageDefinition:
        existing = self._packages.get(package_id)
        if existing is None:
            raise PackageNotFoundError(package_id)
        updated = replace(package, id=package_id, created_date=existing.created_date)
        self._packages[package_id] = updated
        return updated

    def delete_package(self, package_id: int) -> bool:
        return self._packages.pop(package_id, None) is not None


class MemoryAppointmentDraftStore(AppointmentDraftStorePort):
    def __init__(self) -> None:
        self._drafts: dict[str, AppointmentDraft] = {}

    def get_draft(self, draft_id: str) -> AppointmentDraft | None:
        return self._drafts.get(draft_id)

    def save_draft(self, draft: AppointmentDraft) -> AppointmentDraft:
        if draft.id is None:
            draft = replace(draft, id=uuid.uuid4().hex)
        self._drafts[draft.id] = draft
        return draft

    def delete_draft(self, draft_id: str) -> None:
        self._drafts.pop(draft_id, None)
