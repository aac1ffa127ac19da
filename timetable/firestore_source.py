"""Firestore access for lecture schedules and student records.

The collections mirror the CourseForge web app:

* ``lectures`` - recurring weekly lectures (``courseName``, ``location``,
  ``lecturerId``, ``schedule`` list of ``{day, startTime, endTime}``)
* ``students`` - registered students (``uid``, ``indexNumber``,
  ``department``, ``program``)
* ``courses/{courseId}/enrolledStudents`` - per-course enrollment copies
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1 import FieldFilter

from . import config
from .level import calculate_student_level, program_for
from .models import RecurringSchedule


logger = logging.getLogger(__name__)

LECTURES_COL = "lectures"
STUDENTS_COL = "students"
COURSES_COL = "courses"
ENROLLED_SUBCOL = "enrolledStudents"


def get_client() -> Any:
    """Initialise the default Firebase app if needed and return a Firestore client.

    Raises:
        RuntimeError: If Firebase cannot be initialised.
    """
    try:
        if not firebase_admin._apps:  # guard against re-init
            cred_path = config.get_credentials_path()
            cred = credentials.Certificate(cred_path) if cred_path else None
            firebase_admin.initialize_app(cred)
        return firestore.client()
    except Exception as e:
        logger.exception("Firebase initialisation failed")
        raise RuntimeError("Firebase initialization failed") from e


class FirestoreSource:
    """Reads schedules and students from Firestore.

    A client can be injected (tests pass a stand-in); otherwise the default
    Firebase app is initialised on first use.
    """

    def __init__(self, client: Optional[Any] = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_client()
        return self._client

    def fetch_schedules(self, lecturer_id: Optional[str] = None) -> list[RecurringSchedule]:
        """Fetch recurring lecture schedules ordered by course name.

        Args:
            lecturer_id: Only return lectures taught by this lecturer.

        Returns:
            List of RecurringSchedule objects.

        Raises:
            InvalidScheduleError: If a stored lecture has a malformed slot.
        """
        query = self.client.collection(LECTURES_COL)
        if lecturer_id:
            query = query.where(filter=FieldFilter("lecturerId", "==", lecturer_id))
        query = query.order_by("courseName")

        try:
            snapshots = list(query.stream())
        except Exception:
            logger.exception("Error fetching lectures")
            raise

        schedules = [
            RecurringSchedule.from_document(snap.id, snap.to_dict() or {})
            for snap in snapshots
        ]
        if not schedules:
            logger.warning("No lectures found%s", f" for lecturer {lecturer_id}" if lecturer_id else "")
        return schedules

    def fetch_enrolled_students(
        self,
        course_id: str,
        today: Optional[date] = None
    ) -> list[dict[str, Any]]:
        """Fetch the students enrolled in a course, with their current level."""
        ref = (
            self.client.collection(COURSES_COL)
            .document(course_id)
            .collection(ENROLLED_SUBCOL)
        )
        try:
            snapshots = list(ref.stream())
        except Exception:
            logger.exception("Error fetching enrolled students for course %s", course_id)
            raise

        students = []
        for snap in snapshots:
            data = snap.to_dict() or {}
            students.append({
                "id": snap.id,
                **data,
                "level": calculate_student_level(data.get("indexNumber"), today),
            })
        return students

    def search_students(
        self,
        department: Optional[str] = None,
        program: Optional[str] = None,
        level: Optional[int] = None,
        exclude_uids: Iterable[str] = (),
        today: Optional[date] = None
    ) -> list[dict[str, Any]]:
        """Search students by department, program and level.

        Department and program are matched upper-cased in Firestore; level is
        computed from each index number and filtered locally. Students whose
        ``uid`` is in ``exclude_uids`` (typically those already enrolled)
        are skipped.

        Raises:
            ValueError: If no search criterion is given.
        """
        if not department and not program and not level:
            raise ValueError("Provide at least one search filter")

        query = self.client.collection(STUDENTS_COL)
        if department:
            query = query.where(filter=FieldFilter("department", "==", department.upper()))
        if program:
            query = query.where(filter=FieldFilter("program", "==", program.upper()))

        try:
            snapshots = list(query.stream())
        except Exception:
            logger.exception("Error searching for students")
            raise

        excluded = set(exclude_uids)
        results = []
        for snap in snapshots:
            data = snap.to_dict() or {}
            if data.get("uid") in excluded:
                continue
            student_level = calculate_student_level(data.get("indexNumber"), today)
            if level and student_level != level:
                continue
            results.append({
                "id": snap.id,
                **data,
                "program": program_for(data),
                "level": student_level,
            })

        logger.debug("Student search matched %d records", len(results))
        return results
