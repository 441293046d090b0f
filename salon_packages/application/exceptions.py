class PackageNotFoundError(LookupError):
    """Raised when a package id is absent from the package store."""

    def __init__(self, package_id: int) -> None:
        super().__init__(f"Package {package_id} not found")
        self.package_id = package_id


class DraftNotFoundError(LookupError):
    """Raised when an appointment draft id is unknown."""

    def __init__(self, draft_id: str) -> None:
        super().__init__(f"Appointment draft {draft_id} not found")
        self.draft_id = draft_id


class DraftLockedError(RuntimeError):
    """Raised when a draft with an unresolved confirmation is mutated."""
    pass


class NoPendingConfirmationError(RuntimeError):
    """Raised when resolving a confirmation on a draft that has none."""
    pass
