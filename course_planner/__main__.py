import sys

from course_planner.main import main

sys.exit(main())
