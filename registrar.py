# registrar.py
# ---------------------------------------------------
# In-memory registration state: draft codes + committed roster
# ---------------------------------------------------
#   request_code:  rc 0 = add code issued, 1 = invalid course, 2 = invalid ID
#   register:      rc 0 = success, 1 = invalid code, 2 = code does not match ID
#   list_roster:   rc 0 = success, 1 = invalid course
import threading
from dataclasses import dataclass

from log_setup import get_logger
from validation import (
    DEFAULT_COURSES,
    STUDENT_ID_MAX,
    STUDENT_ID_MIN,
    canonical_course,
    is_valid_student_id,
)

logger = get_logger("registrar")

OK = 0

CODE_INVALID_COURSE = 1
CODE_INVALID_ID = 2

REGISTER_UNKNOWN_CODE = 1
REGISTER_CODE_MISMATCH = 2

LIST_INVALID_COURSE = 1


@dataclass(frozen=True)
class Draft:
    code: int
    student_id: int
    course: str


@dataclass(frozen=True)
class Registration:
    code: int
    student_id: int
    name: str


class Registrar:
    """Owns the draft table, the roster and the code counter.

    Drafts are keyed by student ID, so a student has at most one live draft.
    The roster is keyed by student ID too: registering again overwrites the
    previous entry, which is how "one course at a time" is enforced.

    ``_draft_lock`` serializes every read-modify-write on drafts, and the
    register path takes ``_roster_lock`` while still holding it (always in
    that order). The counter has its own lock.
    """

    def __init__(self, courses=DEFAULT_COURSES,
                 student_id_min=STUDENT_ID_MIN, student_id_max=STUDENT_ID_MAX):
        self.courses = tuple(courses)
        self.student_id_min = student_id_min
        self.student_id_max = student_id_max

        self._drafts = {}   # student_id -> Draft
        self._roster = {}   # student_id -> Registration
        self._next_code = 1

        self._counter_lock = threading.Lock()
        self._draft_lock = threading.Lock()
        self._roster_lock = threading.Lock()

    # ---- atomic primitives ----
    def allocate_code(self) -> int:
        with self._counter_lock:
            code = self._next_code
            self._next_code += 1
        return code

    def upsert_draft(self, student_id, course) -> Draft:
        """Issue a fresh code for `student_id`, superseding any older draft."""
        with self._draft_lock:
            old = self._drafts.pop(student_id, None)
            draft = Draft(code=self.allocate_code(), student_id=student_id, course=course)
            self._drafts[student_id] = draft
        if old is not None:
            logger.info("draft %d for student %d superseded by %d", old.code, student_id, draft.code)
        return draft

    def find_draft_by_student(self, student_id):
        with self._draft_lock:
            return self._drafts.get(student_id)

    def upsert_registration(self, registration: Registration):
        with self._roster_lock:
            self._roster[registration.student_id] = registration

    def snapshot_roster(self):
        with self._roster_lock:
            return list(self._roster.values())

    # ---- operations ----
    def request_code(self, course, student_id):
        """Returns (rc, code); code is None unless rc == 0."""
        canonical = canonical_course(course, self.courses)
        if canonical is None:
            logger.info("request_code rejected: invalid course %r", course)
            return CODE_INVALID_COURSE, None
        if not is_valid_student_id(student_id, self.student_id_min, self.student_id_max):
            logger.info("request_code rejected: invalid student id %r", student_id)
            return CODE_INVALID_ID, None

        draft = self.upsert_draft(student_id, canonical)
        logger.info("issued add code %d to student %d for %s", draft.code, student_id, canonical)
        return OK, draft.code

    def register(self, code, student_id, name):
        """Returns rc. The matching draft is kept after a successful register."""
        with self._draft_lock:
            draft = self._drafts.get(student_id)
            if draft is None:
                rc = REGISTER_UNKNOWN_CODE
            elif draft.code != code:
                rc = REGISTER_CODE_MISMATCH
            else:
                rc = OK
                self.upsert_registration(Registration(code=code, student_id=student_id, name=name))

        if rc == OK:
            logger.info("student %d (%s) registered with code %d", student_id, name, code)
        else:
            logger.info("register rejected for student %r, code %r: rc=%d", student_id, code, rc)
        return rc

    def list_roster(self, course):
        """Returns (rc, registrations).

        The roster isn't partitioned by course: any valid course name gets
        the whole roster.
        """
        if canonical_course(course, self.courses) is None:
            return LIST_INVALID_COURSE, []
        return OK, self.snapshot_roster()
