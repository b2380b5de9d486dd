# === catalog.py ===
import logging

from course_planner.course import Availability, Course, Term
from course_planner.exceptions import CatalogConsistencyError
from course_planner.relations import MultiMap

logger = logging.getLogger(__name__)

OFFERING_TERMS = (Term.FALL, Term.WINTER, Term.SPRING, Term.SUMMER)
STRICT_RELATION = -1
DEFAULT_CREDITS = 3


class CourseCatalog:
    def __init__(self):
        self.courses = {}  # code -> Course
        self.prereqs = MultiMap()  # course -> courses that must come earlier
        self.concurrencies = MultiMap()  # symmetric: same-term partners

    # --- courses ---

    def add_course(self, course):
        # last write wins
        self.courses[course.name] = course

    def remove_course(self, name):
        course = self.courses.pop(name, None)
        if course is not None:
            self.prereqs.remove_all(name)
            self.concurrencies.remove_all(name)
        return course

    def get_course(self, name):
        return self.courses.get(name)

    def get_term_courses_for(self, term):
        return [code for code, course in self.courses.items() if course.is_available(term)]

    def __len__(self):
        return len(self.courses)

    def __contains__(self, name):
        return name in self.courses

    # --- prerequisites ---

    def add_prerequisite(self, course, depends_on):
        group = self.get_concurrency_group(course)
        if group is None:
            self.prereqs.insert(course, depends_on)
            return

        # every member of the group gets the edge, once
        for member in sorted(group):
            self.prereqs.insert(member, depends_on)
        logger.debug("Propagated prerequisite %s -> %s to %d grouped courses",
                     course, depends_on, len(group))

    def remove_prerequisite(self, course, depends_on):
        return self.prereqs.remove_one(course, depends_on)

    def get_prerequisites(self, course):
        if course not in self.prereqs:
            return None
        return set(self.prereqs.get(course))

    def _ordered_prereqs(self, course):
        seen = []
        for prereq in self.prereqs.get(course):
            if prereq not in seen:
                seen.append(prereq)
        return seen

    # --- concurrencies ---

    def add_concurrency(self, course, depends_on):
        if course in self.prereqs or depends_on in self.prereqs:
            self._merge_prerequisites(course, depends_on)

        self.concurrencies.insert(course, depends_on)
        self.concurrencies.insert(depends_on, course)

    def _merge_prerequisites(self, course, depends_on):
        course_prereqs = self._ordered_prereqs(course)
        partner_prereqs = self._ordered_prereqs(depends_on)

        missing_on_partner = [p for p in course_prereqs if p not in partner_prereqs]
        missing_on_course = [p for p in partner_prereqs if p not in course_prereqs]

        for prereq in missing_on_partner:
            self.add_prerequisite(depends_on, prereq)
        for prereq in missing_on_course:
            self.add_prerequisite(course, prereq)

        if missing_on_partner or missing_on_course:
            logger.debug("Merged prerequisites of %s and %s: +%s / +%s",
                         course, depends_on, missing_on_course, missing_on_partner)

    def remove_concurrency(self, course, depends_on):
        if course not in self.concurrencies or depends_on not in self.concurrencies:
            return None

        needed = 2 if course == depends_on else 1
        if self.concurrencies.get(course).count(depends_on) < needed:
            return None
        if course not in self.concurrencies.get(depends_on):
            return None

        self.concurrencies.remove_one(course, depends_on)
        self.concurrencies.remove_one(depends_on, course)
        return course, depends_on

    def get_concurrency_group(self, course):
        if course not in self.concurrencies:
            return None

        seen = {course}
        stack = [course]
        while stack:
            current = stack.pop()
            for partner in self.concurrencies.get(current):
                if partner not in seen:
                    seen.add(partner)
                    stack.append(partner)
        return seen

    def get_concurrents_for(self, course):
        group = self.get_concurrency_group(course)
        if group is None:
            return None

        total = 0
        for member in group:
            found = self.courses.get(member)
            if found is None:
                raise CatalogConsistencyError(member, context=f"concurrency group of {course}")
            total += found.credits
        return group, total

    def dangling_names(self):
        """Names used in either relation that are not courses."""
        used = self.prereqs.names() | self.concurrencies.names()
        return sorted(name for name in used if name not in self.courses)

    # --- loading ---

    def load_credits(self, path):
        with open(path) as f:
            for line in f:
                parts = line.strip().split("\t")
                if len(parts) != 2:
                    if line.strip():
                        logger.warning("Skipping credits line: %r", line.strip())
                    continue
                code, credit_str = parts
                try:
                    credits = max(int(c) for c in credit_str.split(","))
                except ValueError:
                    logger.warning("Skipping %s: unreadable credits %r", code, credit_str)
                    continue
                if credits <= 0:
                    logger.warning("Skipping %s: credits must be positive, got %d", code, credits)
                    continue

                existing = self.courses.get(code)
                availability = existing.availability if existing else None
                self.add_course(Course(code, credits, availability))

    def load_offerings(self, path):
        with open(path) as f:
            for line in f:
                parts = line.strip().split("\t")
                if len(parts) != 1 + len(OFFERING_TERMS):
                    if line.strip():
                        logger.warning("Skipping offering line: %r", line.strip())
                    continue
                code, flags = parts[0], parts[1:]
                offered = {term for term, flag in zip(OFFERING_TERMS, flags) if flag == "1"}
                if code not in self.courses:
                    self.add_course(Course(code, DEFAULT_CREDITS))
                self.courses[code].availability = Availability.restricted_to(offered)

    def load_prereqs(self, path):
        with open(path) as f:
            for line in f:
                parts = line.strip().split("\t")
                if len(parts) != 3:
                    if line.strip():
                        logger.warning("Skipping prerequisite line: %r", line.strip())
                    continue
                prereq, target, relation = parts
                try:
                    relation = int(relation)
                except ValueError:
                    logger.warning("Skipping %s -> %s: bad relation %r", prereq, target, relation)
                    continue
                if relation == STRICT_RELATION:
                    self.add_prerequisite(target, prereq)
                else:
                    self.add_concurrency(target, prereq)

    def load_all_data(self, prereq_path, offerings_path, credits_path):
        self.load_credits(credits_path)
        self.load_offerings(offerings_path)
        self.load_prereqs(prereq_path)
        logger.info("Loaded %d courses, %d with prerequisites, %d with concurrencies",
                    len(self.courses), len(self.prereqs), len(self.concurrencies))
