# validation.py
# ---------------------------------------------------
# Shared validation helpers (used by server and client)
# ---------------------------------------------------

DEFAULT_COURSES = ("CS158A", "CS158B")

# student IDs are valid in [STUDENT_ID_MIN, STUDENT_ID_MAX)
STUDENT_ID_MIN = 100000
STUDENT_ID_MAX = 90000000


def canonical_course(course, courses=DEFAULT_COURSES):
    """Return the whitelisted spelling of `course`, or None if it isn't one."""
    if not course:
        return None
    wanted = course.upper()
    for c in courses:
        if c.upper() == wanted:
            return c
    return None


def is_valid_course(course, courses=DEFAULT_COURSES) -> bool:
    return canonical_course(course, courses) is not None


def is_valid_student_id(student_id, low=STUDENT_ID_MIN, high=STUDENT_ID_MAX) -> bool:
    if not isinstance(student_id, int) or isinstance(student_id, bool):
        return False
    return low <= student_id < high
