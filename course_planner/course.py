# === course.py ===
from enum import Enum


class Term(Enum):
    FALL = 0
    WINTER = 1
    SPRING = 2
    SUMMER = 3

    def next(self):
        return Term((self.value + 1) % len(Term))

    @property
    def label(self):
        return self.name.capitalize()

    @classmethod
    def parse(cls, text):
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown term: {text!r}") from None


# A restriction naming no terms or every term is the same as no restriction.
# Removing one term from an unrestricted course therefore restricts it to the
# other three, and removing the last offered term lifts the restriction.
EMPTY_OR_FULL_IS_UNRESTRICTED = True


class Availability:
    def __init__(self, terms=None):
        self.terms = None if terms is None else frozenset(terms)  # None -> every term

    @classmethod
    def unrestricted(cls):
        return cls(None)

    @classmethod
    def restricted_to(cls, terms):
        terms = frozenset(terms)
        if EMPTY_OR_FULL_IS_UNRESTRICTED and (not terms or len(terms) == len(Term)):
            return cls.unrestricted()
        return cls(terms)

    @property
    def is_restricted(self):
        return self.terms is not None

    def allows(self, term):
        return self.terms is None or term in self.terms

    def __eq__(self, other):
        return isinstance(other, Availability) and self.terms == other.terms

    def __repr__(self):
        if self.terms is None:
            return "Availability.unrestricted()"
        names = sorted(t.label for t in self.terms)
        return f"Availability.restricted_to({names})"


class Course:
    def __init__(self, name, credits, availability=None):
        if credits <= 0:
            raise ValueError(f"{name}: credits must be positive, got {credits}")
        self.name = name
        self.credits = credits
        self.availability = availability or Availability.unrestricted()

    @property
    def offerings(self):
        # terms explicitly offered; empty when unrestricted
        return set(self.availability.terms or ())

    def available_by(self, term):
        self.availability = Availability.restricted_to(self.offerings | {term})
        return self

    def not_available_by(self, term):
        offered = self.offerings if self.availability.is_restricted else set(Term)
        self.availability = Availability.restricted_to(offered - {term})
        return self

    def is_available(self, term):
        return self.availability.allows(term)

    def __repr__(self):
        return f"Course({self.name!r}, {self.credits}, {self.availability!r})"
