# === storage.py ===
import logging
import os

import duckdb

from course_planner.catalog import STRICT_RELATION, CourseCatalog
from course_planner.course import Availability, Course, Term

logger = logging.getLogger(__name__)

CONCURRENT_RELATION = 0


def _create_tables(con):
    con.execute("""
    CREATE TABLE courses (
      course_id TEXT PRIMARY KEY,
      credits INT,
      offered_fall BOOLEAN,
      offered_winter BOOLEAN,
      offered_spring BOOLEAN,
      offered_summer BOOLEAN
    )""")

    con.execute("""
    CREATE TABLE prerequisites (
      course_id TEXT,
      prereq_id TEXT,
      type INT
    )""")


def save_catalog(catalog, db_path):
    """Recreate db_path from the catalog's courses and both relations."""
    if os.path.exists(db_path):
        os.remove(db_path)

    con = duckdb.connect(db_path)
    try:
        _create_tables(con)

        for code, course in catalog.courses.items():
            # an unrestricted course is stored as offered every term
            offered = [course.is_available(term) for term in Term]
            con.execute("INSERT INTO courses VALUES (?, ?, ?, ?, ?, ?)",
                        (code, course.credits, *offered))

        for code, prereqs in catalog.prereqs.items():
            for prereq in prereqs:
                con.execute("INSERT INTO prerequisites VALUES (?, ?, ?)",
                            (code, prereq, STRICT_RELATION))

        # each undirected pair once; the other side is implied
        stored = {}
        for code, partners in catalog.concurrencies.items():
            for partner in partners:
                key = tuple(sorted((code, partner)))
                stored[key] = stored.get(key, 0) + 1
        for (code, partner), count in stored.items():
            # every insertion recorded two directed edges
            for _ in range(count // 2):
                con.execute("INSERT INTO prerequisites VALUES (?, ?, ?)",
                            (code, partner, CONCURRENT_RELATION))
    finally:
        con.close()

    logger.info("Saved %d courses to %s", len(catalog), db_path)


def load_catalog(db_path):
    if not os.path.exists(db_path):
        raise FileNotFoundError(db_path)

    catalog = CourseCatalog()
    con = duckdb.connect(db_path, read_only=True)
    try:
        rows = con.execute("""
            SELECT course_id, credits, offered_fall, offered_winter, offered_spring, offered_summer
            FROM courses ORDER BY rowid""").fetchall()
        for code, credits, *flags in rows:
            offered = {term for term, flag in zip(Term, flags) if flag}
            catalog.add_course(Course(code, int(credits), Availability.restricted_to(offered)))

        relations = con.execute(
            "SELECT course_id, prereq_id, type FROM prerequisites ORDER BY rowid").fetchall()
    finally:
        con.close()

    # stored relations are already coherent, so replay them edge for edge
    for code, other, relation in relations:
        if relation == STRICT_RELATION:
            catalog.prereqs.insert(code, other)
        else:
            catalog.concurrencies.insert(code, other)
            catalog.concurrencies.insert(other, code)

    logger.info("Loaded %d courses from %s", len(catalog), db_path)
    return catalog


def build_from_tsv(prereq_path, offerings_path, credits_path, db_path):
    catalog = CourseCatalog()
    catalog.load_all_data(prereq_path, offerings_path, credits_path)
    save_catalog(catalog, db_path)
    return catalog
