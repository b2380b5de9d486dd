import pytest

from course_planner.catalog import CourseCatalog
from course_planner.course import Course, Term
from course_planner.exceptions import CatalogConsistencyError, UnsatisfiableConstraintsError
from course_planner.planner import PlannedTerm, Planner


def make_catalog(*specs):
    catalog = CourseCatalog()
    for name, credits in specs:
        catalog.add_course(Course(name, credits))
    return catalog


def term_index(plan):
    return {code: i for i, term in enumerate(plan) for code, _ in term.assigned}


def degree_catalog():
    catalog = make_catalog(
        ("MATH 1", 4), ("MATH 2", 4), ("CS 1", 3), ("CS 1L", 1),
        ("CS 2", 3), ("CS 2L", 1), ("ENG", 3),
    )
    catalog.add_course(Course("PHYS", 4).available_by(Term.SPRING))
    catalog.add_prerequisite("MATH 2", "MATH 1")
    catalog.add_prerequisite("CS 2", "CS 1")
    catalog.add_prerequisite("PHYS", "MATH 1")
    catalog.add_concurrency("CS 1", "CS 1L")
    catalog.add_concurrency("CS 2", "CS 2L")
    return catalog


def test_three_courses_one_per_term():
    catalog = make_catalog(("CS 10", 4), ("CS 11", 4), ("CS 12", 4))

    plan = Planner(catalog, [4, 4, 4, 4]).plan()

    assert len(plan) == 3
    assert [term.assigned for term in plan] == [[("CS 10", 4)], [("CS 11", 4)], [("CS 12", 4)]]
    assert [term.kind for term in plan] == [Term.FALL, Term.WINTER, Term.SPRING]


def test_prerequisites_push_courses_to_later_term():
    catalog = make_catalog(("CS 10", 4), ("CS 11", 4), ("CS 12", 4))
    catalog.add_prerequisite("CS 11", "CS 10")
    catalog.add_prerequisite("CS 12", "CS 10")

    plan = Planner(catalog, [8, 8, 8, 8]).plan()

    assert len(plan) == 2
    assert plan[0].course_names == {"CS 10"}
    assert plan[1].course_names == {"CS 11", "CS 12"}
    assert plan[1].used_credits == 8


def test_empty_catalog_has_no_plan():
    assert Planner(CourseCatalog(), [18, 18, 18, 18]).plan() is None


def test_group_waits_until_it_fits():
    catalog = make_catalog(("A", 4), ("LEC", 4), ("LAB", 1))
    catalog.add_concurrency("LEC", "LAB")

    plan = Planner(catalog, [8, 8, 8, 8]).plan()

    assert plan[0].course_names == {"A"}
    assert plan[1].course_names == {"LEC", "LAB"}
    assert plan[1].used_credits == 5


def test_availability_respected():
    catalog = CourseCatalog()
    catalog.add_course(Course("SUMMER ONLY", 3).available_by(Term.SUMMER))

    plan = Planner(catalog, [18, 18, 18, 18]).plan()

    assert len(plan) == 1
    assert plan[0].kind == Term.SUMMER
    assert plan[0].slot == 3


def test_plan_invariants():
    catalog = degree_catalog()
    edges = [(code, dep) for code, deps in catalog.prereqs.items() for dep in deps]
    groups = [catalog.get_concurrency_group(code) for code in ("CS 1", "CS 2")]

    plan = Planner(catalog, [8, 8, 8, 8]).plan()
    index = term_index(plan)

    for term in plan:
        assert term.used_credits <= term.capacity
        for code, _ in term.assigned:
            assert catalog.get_course(code).is_available(term.kind)
        for group in groups:
            present = group & term.course_names
            assert not present or present == group

    for code, dep in edges:
        assert index[dep] < index[code]

    placed = [code for term in plan for code, _ in term.assigned]
    assert sorted(placed) == sorted(catalog.courses)


def test_planning_leaves_catalog_untouched():
    catalog = degree_catalog()
    before = {code: list(deps) for code, deps in catalog.prereqs.items()}

    Planner(catalog, [8, 8, 8, 8]).plan()
    second = Planner(catalog, [8, 8, 8, 8]).plan()

    assert {code: list(deps) for code, deps in catalog.prereqs.items()} == before
    assert second is not None


def test_prerequisite_cycle_raises():
    catalog = make_catalog(("A", 3), ("B", 3), ("C", 3))
    catalog.add_prerequisite("A", "B")
    catalog.add_prerequisite("B", "A")

    with pytest.raises(UnsatisfiableConstraintsError) as excinfo:
        Planner(catalog, [18, 18, 18, 18]).plan()

    assert excinfo.value.remaining == ["A", "B"]


def test_course_larger_than_every_term_raises():
    catalog = make_catalog(("HUGE", 20))

    with pytest.raises(UnsatisfiableConstraintsError):
        Planner(catalog, [18, 18, 18, 18]).plan()


def test_dangling_prerequisite_is_fatal():
    catalog = make_catalog(("A", 3))
    catalog.add_prerequisite("A", "GHOST")

    with pytest.raises(CatalogConsistencyError):
        Planner(catalog, [18, 18, 18, 18]).plan()


def test_capacities_by_term():
    catalog = make_catalog(("A", 6), ("B", 6))
    limits = {Term.FALL: 6, Term.WINTER: 12, Term.SPRING: 6, Term.SUMMER: 6}

    plan = Planner(catalog, limits).plan()

    assert len(plan) == 2
    assert plan[0].capacity == 6
    assert plan[1].capacity == 12


@pytest.mark.parametrize("limits", [[4, 4, 4], [4, 0, 4, 4], [4, 4, 4, 2.5], {Term.FALL: 4}])
def test_bad_capacities(limits):
    with pytest.raises(ValueError):
        Planner(CourseCatalog(), limits)


def test_planned_term_accounting():
    term = PlannedTerm(Term.WINTER, 10)
    term.add(Course("A", 4))
    term.add(Course("B", 3))

    assert term.used_credits == 7
    assert term.remaining == 3
    assert term.fits(3)
    assert not term.fits(4)
    assert not term.is_full()


def test_group_waits_for_term_every_member_is_offered():
    catalog = make_catalog(("LEC", 4))
    catalog.add_course(Course("LAB", 1).available_by(Term.SPRING))
    catalog.add_concurrency("LEC", "LAB")

    plan = Planner(catalog, [18, 18, 18, 18]).plan()

    assert len(plan) == 1
    assert plan[0].kind == Term.SPRING
    assert plan[0].course_names == {"LEC", "LAB"}


def test_group_waits_for_every_member_prerequisite():
    catalog = make_catalog(("P", 3), ("A", 3), ("B", 3))
    catalog.add_concurrency("A", "B")
    catalog.add_prerequisite("A", "P")
    catalog.remove_prerequisite("A", "P")

    assert catalog.get_prerequisites("A") is None
    assert catalog.get_prerequisites("B") == {"P"}

    plan = Planner(catalog, [18, 18, 18, 18]).plan()
    index = term_index(plan)

    assert index["A"] == index["B"]
    assert index["P"] < index["B"]


def test_group_larger_than_every_term_raises():
    catalog = make_catalog(("X", 10), ("Y", 10))
    catalog.add_concurrency("X", "Y")

    with pytest.raises(UnsatisfiableConstraintsError) as excinfo:
        Planner(catalog, [18, 18, 18, 18]).plan()

    assert excinfo.value.remaining == ["X", "Y"]
