# === config.py ===
import json
import os
from typing import Any, Dict

from course_planner.course import Term

DEFAULT_TERM_CREDIT_LIMIT = 18


def parse_term_credit_limits(raw):
    """Accept a 4-list or {"fall": 18, ...} and return {Term: limit}."""
    if raw is None:
        return {term: DEFAULT_TERM_CREDIT_LIMIT for term in Term}

    if isinstance(raw, dict):
        limits = {Term.parse(name): value for name, value in raw.items()}
        missing = [t.label for t in Term if t not in limits]
        if missing:
            raise ValueError(f"term_credit_limits missing: {', '.join(missing)}")
    elif isinstance(raw, list) and len(raw) == len(Term):
        limits = dict(zip(Term, raw))
    else:
        raise ValueError(f"term_credit_limits must be a list of {len(Term)} or an object, got {raw!r}")

    for term, value in limits.items():
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{term.label} credit limit must be a positive integer, got {value!r}")
    return limits


def load_major_config(path):
    with open(path) as f:
        config = json.load(f)

    base_dir = os.path.dirname(os.path.abspath(path))
    data_paths = {
        key: value if os.path.isabs(value) else os.path.join(base_dir, value)
        for key, value in config.get("data_paths", {}).items()
    }

    config["data_paths"] = data_paths
    config["term_credit_limits"] = parse_term_credit_limits(config.get("term_credit_limits"))
    config["completed_courses"] = list(config.get("completed_courses", []))
    return config


def get_app_config() -> Dict[str, Any]:
    """Get application configuration from environment variables"""
    return {
        "debug": os.getenv("DEBUG", "False").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }
