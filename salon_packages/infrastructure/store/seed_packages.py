from __future__ import annotations

from salon_packages.domain.entities.package import (
    AvailableFor,
    PackageDefinition,
    PackageType,
    PaymentType,
    RenewalType,
    ServiceEntry,
)

DEMO_PACKAGES: tuple[PackageDefinition, ...] = (
    PackageDefinition(
        id=1,
        name="Premium Spa Package",
        description="Complete spa experience",
        validity=90,
        available_for=AvailableFor.all,
        apply_for_all_outlets=True,
        package_type=PackageType.fixed,
        min_selectable_services=None,
        max_selectable_services=None,
        extension_fee=500,
        max_extensions=2,
        available_durations=(15, 30, 60),
        renewal_type=RenewalType.manual,
        payment_type=PaymentType.pre_paid,
        follow_sequence=True,
        services=(
            ServiceEntry(service_id=1, service_name="Full Body Massage", sequence_number=1, rate=2500),
            ServiceEntry(service_id=2, service_name="Facial Treatment", sequence_number=2, rate=1500),
            ServiceEntry(service_id=3, service_name="Body Scrub", sequence_number=3, rate=1200),
        ),
    ),
    PackageDefinition(
        id=2,
        name="Customizable Wellness Package",
        description="Choose your own services",
        validity=60,
        available_for=AvailableFor.females,
        apply_for_all_outlets=False,
        package_type=PackageType.customizable,
        min_selectable_services=3,
        max_selectable_services=5,
        extension_fee=0,
        is_complimentary_extension=True,
        max_extensions=1,
        available_durations=(30, 60),
        renewal_type=RenewalType.auto,
        payment_type=PaymentType.post_paid,
        is_sharer_package=True,
        services=(
            ServiceEntry(service_id=1, service_name="Full Body Massage", sequence_number=1, rate=2200),
            ServiceEntry(service_id=2, service_name="Facial Treatment", sequence_number=2, rate=1300),
            ServiceEntry(service_id=4, service_name="Manicure", sequence_number=3, rate=700),
            ServiceEntry(service_id=5, service_name="Pedicure", sequence_number=4, rate=800),
            ServiceEntry(service_id=6, service_name="Hair Spa", sequence_number=5, rate=1800),
        ),
    ),
)
