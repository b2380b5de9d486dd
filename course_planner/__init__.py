from course_planner.catalog import CourseCatalog
from course_planner.course import Availability, Course, Term
from course_planner.exceptions import (
    CatalogConsistencyError,
    PlannerError,
    UnsatisfiableConstraintsError,
)
from course_planner.planner import PlannedTerm, Planner

__version__ = "0.1.0"

__all__ = [
    "Availability",
    "CatalogConsistencyError",
    "Course",
    "CourseCatalog",
    "PlannedTerm",
    "Planner",
    "PlannerError",
    "Term",
    "UnsatisfiableConstraintsError",
]
