# === main.py ===
import argparse
import logging
import sys

import duckdb
from dotenv import load_dotenv

from course_planner.catalog import CourseCatalog
from course_planner.config import get_app_config, load_major_config
from course_planner.exceptions import PlannerError
from course_planner.planner import Planner
from course_planner.report import format_plan
from course_planner.storage import load_catalog

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Plan courses term by term under credit limits.")
    ap.add_argument("config", help="Path to the JSON plan configuration")
    ap.add_argument("--completed", default="",
                    help="Comma-separated course codes already taken (overrides the config)")
    ap.add_argument("--log-level", dest="log_level", default=None,
                    help="Logging level (default: LOG_LEVEL or INFO)")
    return ap.parse_args(argv)


def build_catalog(data_paths):
    if "duckdb" in data_paths:
        return load_catalog(data_paths["duckdb"])

    catalog = CourseCatalog()
    catalog.load_all_data(data_paths["prereqs"], data_paths["offerings"], data_paths["credits"])
    return catalog


def main(argv=None):
    load_dotenv()
    args = parse_args(argv)
    app_config = get_app_config()

    logging.basicConfig(
        level=(args.log_level or app_config["log_level"]).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_major_config(args.config)
        catalog = build_catalog(config["data_paths"])

        if args.completed.strip():
            completed = [code.strip() for code in args.completed.split(",") if code.strip()]
        else:
            completed = config["completed_courses"]
        for code in completed:
            if catalog.remove_course(code) is None:
                logger.warning("Completed course %s is not in the catalog", code)

        plan = Planner(catalog, config["term_credit_limits"]).plan()
    except (OSError, ValueError, KeyError, duckdb.Error) as e:
        logger.error(f"Could not load plan configuration: {e}", exc_info=app_config["debug"])
        return 1
    except PlannerError as e:
        logger.error(f"Planning failed: {e}")
        return 1

    print(format_plan(plan))
    return 0


if __name__ == "__main__":
    sys.exit(main())
