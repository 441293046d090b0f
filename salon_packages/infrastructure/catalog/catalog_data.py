from __future__ import annotations

from salon_packages.domain.entities.catalog import CatalogService, Client, Gender, Outlet

SERVICES: dict[int, CatalogService] = {
    s.id: s
    for s in (
        CatalogService(id=1, name="Full Body Massage", base_rate=2500, category="Massage"),
        CatalogService(id=2, name="Facial Treatment", base_rate=1500, category="Facial"),
        CatalogService(id=3, name="Body Scrub", base_rate=1200, category="Body Treatment"),
        CatalogService(id=4, name="Manicure", base_rate=800, category="Hand Care"),
        CatalogService(id=5, name="Pedicure", base_rate=900, category="Foot Care"),
        CatalogService(id=6, name="Hair Spa", base_rate=2000, category="Hair Care"),
        CatalogService(id=7, name="Aromatherapy", base_rate=3000, category="Therapy"),
        CatalogService(id=8, name="Steam Bath", base_rate=500, category="Bath"),
    )
}

OUTLETS: dict[int, Outlet] = {
    o.id: o
    for o in (
        Outlet(id=1, name="Downtown Spa", location="Downtown"),
        Outlet(id=2, name="Mall Branch", location="Shopping Mall"),
        Outlet(id=3, name="Airport Branch", location="Airport"),
    )
}

CLIENTS: dict[int, Client] = {
    c.id: c
    for c in (
        Client(id=1, name="John Doe", phone="9876543210", gender=Gender.male, email="john@example.com"),
        Client(id=2, name="Jane Smith", phone="9876543211", gender=Gender.female, email="jane@example.com"),
        Client(id=3, name="Alice Johnson", phone="9876543212", gender=Gender.female, email="alice@example.com"),
        Client(id=4, name="Bob Wilson", phone="9876543213", gender=Gender.male, email="bob@example.com"),
    )
}
