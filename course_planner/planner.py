# === planner.py ===
import logging
from collections.abc import Mapping

from course_planner.course import Term
from course_planner.exceptions import CatalogConsistencyError, UnsatisfiableConstraintsError

logger = logging.getLogger(__name__)


class PlannedTerm:
    def __init__(self, kind, capacity, slot=0):
        self.kind = kind
        self.capacity = capacity
        self.slot = slot  # term slots visited before this one, empty ones included
        self.assigned = []  # [(code, credits)] in placement order

    @property
    def used_credits(self):
        return sum(credits for _, credits in self.assigned)

    @property
    def remaining(self):
        return self.capacity - self.used_credits

    @property
    def course_names(self):
        return {code for code, _ in self.assigned}

    def is_full(self):
        return self.used_credits >= self.capacity

    def fits(self, credits):
        return credits <= self.remaining

    def add(self, course):
        self.assigned.append((course.name, course.credits))

    def __bool__(self):
        return bool(self.assigned)

    def __repr__(self):
        return f"PlannedTerm({self.kind.label}, {self.used_credits}/{self.capacity}, {self.assigned})"


def normalize_capacities(capacities):
    if isinstance(capacities, Mapping):
        missing = [t.label for t in Term if t not in capacities]
        if missing:
            raise ValueError(f"Missing credit limit for: {', '.join(missing)}")
        limits = [capacities[t] for t in Term]
    else:
        limits = list(capacities)
        if len(limits) != len(Term):
            raise ValueError(f"Expected {len(Term)} term credit limits, got {len(limits)}")

    for limit in limits:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValueError(f"Term credit limits must be positive integers, got {limit!r}")
    return {term: limit for term, limit in zip(Term, limits)}


class Planner:
    def __init__(self, catalog, capacities):
        self.catalog = catalog
        self.capacities = normalize_capacities(capacities)

    def lookup(self, code):
        course = self.catalog.get_course(code)
        if course is None:
            raise CatalogConsistencyError(code, context="planner")
        return course

    def group_for(self, code, term, pending, scheduled):
        """Courses that must join `code` this term, or None if they can't."""
        group = self.catalog.get_concurrency_group(code)
        if group is None:
            return [self.lookup(code)]

        members = [self.lookup(member) for member in sorted(group)]
        for member in members:
            if member.name in scheduled or not member.is_available(term):
                return None
            if pending.get(member.name):
                return None
        return members

    def plan(self):
        if len(self.catalog) == 0:
            return None

        dangling = self.catalog.dangling_names()
        if dangling:
            raise CatalogConsistencyError(dangling[0], context="planner")

        candidates = {term: self.catalog.get_term_courses_for(term) for term in Term}
        pending = self.catalog.prereqs.copy()
        total = len(self.catalog)

        scheduled = set()
        plan = []
        term = Term.FALL
        slot = 0
        idle_slots = 0

        while len(scheduled) < total:
            semester = PlannedTerm(term, self.capacities[term], slot)

            for code in candidates[term]:
                if semester.is_full():
                    break
                if code in scheduled:
                    continue
                if pending.get(code):
                    continue

                course = self.lookup(code)
                if not semester.fits(course.credits):
                    continue

                members = self.group_for(code, term, pending, scheduled)
                if members is None:
                    continue
                if not semester.fits(sum(m.credits for m in members)):
                    continue

                for member in members:
                    semester.add(member)
                    scheduled.add(member.name)

            placed = semester.course_names
            for term_kind in Term:
                candidates[term_kind] = [c for c in candidates[term_kind] if c not in placed]
            for code in placed:
                pending.remove_all(code)

            if semester:
                plan.append(semester)
                idle_slots = 0
                logger.info("%s (slot %d): %d courses, %d/%d credits", term.label, slot,
                            len(semester.assigned), semester.used_credits, semester.capacity)
            else:
                idle_slots += 1
                # a full cycle without placements repeats forever
                if idle_slots >= len(Term):
                    raise UnsatisfiableConstraintsError(set(self.catalog.courses) - scheduled)

            term = term.next()
            slot += 1

        logger.info("Planned %d courses over %d terms", total, len(plan))
        return plan or None
