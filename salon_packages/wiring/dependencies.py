import logging
from functools import lru_cache

from salon_packages.application.ports.catalog import CatalogPort
from salon_packages.application.ports.package_store import PackageStorePort
from salon_packages.application.use_cases.appointment import AppointmentService
from salon_packages.application.use_cases.package_editor import PackageEditorUseCase
from salon_packages.application.use_cases.package_listing import PackageListingUseCase
from salon_packages.application.use_cases.selection import ServiceSelectionEngine
from salon_packages.application.validation.package_validator import PackageValidator
from salon_packages.core.config import settings
from salon_packages.infrastructure.catalog.catalog_store import CatalogStore
from salon_packages.infrastructure.store.json_store import JsonPackageStore
from salon_packages.infrastructure.store.memory_store import (
    MemoryAppointmentDraftStore,
    MemoryPackageStore,
)
from salon_packages.infrastructure.store.seed_packages import DEMO_PACKAGES

logger = logging.getLogger(__name__)


@lru_cache
def get_package_store() -> PackageStorePort:
    seed = DEMO_PACKAGES if settings.SEED_DEMO_DATA else ()
    if settings.STORE_PROVIDER.lower() == "json":
        logger.info("Using JsonPackageStore", extra={"reason": settings.DATA_DIR})
        return JsonPackageStore(data_dir=settings.DATA_DIR, seed=seed)
    logger.info("Using MemoryPackageStore")
    return MemoryPackageStore(seed)


@lru_cache
def get_draft_store() -> MemoryAppointmentDraftStore:
    return MemoryAppointmentDraftStore()


@lru_cache
def get_catalog() -> CatalogPort:
    return CatalogStore()


def get_selection_engine() -> ServiceSelectionEngine:
    return ServiceSelectionEngine(parallel_booking_prompt=settings.PARALLEL_BOOKING_PROMPT)


def get_package_editor() -> PackageEditorUseCase:
    return PackageEditorUseCase(
        store=get_package_store(),
        catalog=get_catalog(),
        validator=PackageValidator(),
        engine=get_selection_engine(),
    )


def get_package_listing() -> PackageListingUseCase:
    return PackageListingUseCase(store=get_package_store(), currency=settings.CURRENCY_SYMBOL)


def get_appointment_service() -> AppointmentService:
    return AppointmentService(
        packages=get_package_store(),
        catalog=get_catalog(),
        drafts=get_draft_store(),
        engine=get_selection_engine(),
    )
