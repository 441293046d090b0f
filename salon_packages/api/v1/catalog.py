from fastapi import APIRouter, Depends

from salon_packages.api.v1.schemas import CatalogServiceSchema, ClientSchema, OutletSchema
from salon_packages.application.ports.catalog import CatalogPort
from salon_packages.wiring.dependencies import get_catalog

router = APIRouter()


@router.get("/services", response_model=list[CatalogServiceSchema])
def list_services(catalog: CatalogPort = Depends(get_catalog)):
    return [
        CatalogServiceSchema(id=s.id, name=s.name, base_rate=s.base_rate, category=s.category, is_active=s.is_active)
        for s in catalog.list_services()
    ]


@router.get("/outlets", response_model=list[OutletSchema])
def list_outlets(catalog: CatalogPort = Depends(get_catalog)):
    return [
        OutletSchema(id=o.id, name=o.name, location=o.location, is_active=o.is_active)
        for o in catalog.list_outlets()
    ]


@router.get("/clients", response_model=list[ClientSchema])
def list_clients(catalog: CatalogPort = Depends(get_catalog)):
    return [
        ClientSchema(id=c.id, name=c.name, phone=c.phone, gender=c.gender, email=c.email)
        for c in catalog.list_clients()
    ]
