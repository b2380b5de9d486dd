# === exceptions.py ===


class PlannerError(Exception):
    """Base class for catalog and planning failures."""


class CatalogConsistencyError(PlannerError):
    """A relation or plan names a course the catalog does not hold."""

    def __init__(self, name, context="catalog"):
        super().__init__(f"{context}: course {name!r} is not in the catalog")
        self.name = name


class UnsatisfiableConstraintsError(PlannerError):
    """Planning stopped making progress before every course was placed."""

    def __init__(self, remaining):
        self.remaining = sorted(remaining)
        super().__init__(
            f"Cannot schedule {len(self.remaining)} course(s): {', '.join(self.remaining)}"
        )
