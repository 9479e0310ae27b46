from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from cgpacalc.domain.logic.gpa import CourseResult, calc_cgpa, calc_sgpa, total_credits
from cgpacalc.domain.logic.grading import grade_point
from cgpacalc.domain.logic.reports import (
    SemesterReport,
    Transcript,
    build_semester_report,
    build_transcript,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Course:
    name: str
    code: str
    credit_hours: int
    grade: str

    @property
    def grade_point(self) -> float:
        return grade_point(self.grade)

    def to_result(self) -> CourseResult:
        return CourseResult(credits=self.credit_hours, grade_point=self.grade_point)


class CourseMatch(NamedTuple):
    course: Course
    semester_name: str


@dataclass
class Semester:
    name: str
    courses: list[Course] = field(default_factory=list)

    def add_course(self, course: Course) -> None:
        self.courses.append(course)

    def calculate_sgpa(self) -> float:
        return calc_sgpa(c.to_result() for c in self.courses)

    def get_total_credits(self) -> int:
        return total_credits(c.to_result() for c in self.courses)


@dataclass
class StudentRecord:
    """
    A student's identity and ordered semesters.

    Semester names are not required to be unique. Lookups by name return the
    first match; iterate ``semesters`` to reach the rest.
    """

    student_name: str
    register_number: str
    program: str
    department: str
    semesters: list[Semester] = field(default_factory=list)

    def add_semester(self, semester: Semester) -> None:
        self.semesters.append(semester)

    def find_semester(self, name: str) -> Semester | None:
        for semester in self.semesters:
            if semester.name == name:
                return semester
        return None

    def calculate_cgpa(self) -> float:
        return calc_cgpa([c.to_result() for c in s.courses] for s in self.semesters)

    def search_course(self, code: str) -> list[CourseMatch]:
        return [
            CourseMatch(course, semester.name)
            for semester in self.semesters
            for course in semester.courses
            if course.code == code
        ]

    def get_semester_names(self) -> list[str]:
        return [s.name for s in self.semesters]

    def display_semester_results(self, name: str) -> SemesterReport | None:
        semester = self.find_semester(name)
        if semester is None:
            logger.info("Semester %r not found", name)
            return None
        return build_semester_report(semester)

    def display_transcript(self) -> Transcript:
        return build_transcript(self)

    def replace_with(self, other: StudentRecord) -> None:
        self.student_name = other.student_name
        self.register_number = other.register_number
        self.program = other.program
        self.department = other.department
        self.semesters = list(other.semesters)

    def save_to_file(self, path: str | Path) -> bool:
        from cgpacalc.services.storage import RecordStorage, RecordStorageError

        try:
            RecordStorage().save(self, path)
        except RecordStorageError as exc:
            logger.error("Could not save record: %s", exc)
            return False
        return True

    def load_from_file(self, path: str | Path) -> bool:
        from cgpacalc.services.storage import RecordStorage, RecordStorageError

        try:
            loaded = RecordStorage().load(path)
        except RecordStorageError as exc:
            logger.error("Could not load record: %s", exc)
            return False
        self.replace_with(loaded)
        return True
