from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from cgpacalc.config.settings import settings
from cgpacalc.domain.logic.grading import is_valid_grade, normalize_grade
from cgpacalc.domain.models.entities import Course, Semester, StudentRecord

logger = logging.getLogger(__name__)


@dataclass
class CourseInput:
    code: str
    name: str
    credit_hours: int
    grade: str


def parse_credit_hours(raw: str) -> int:
    value = (raw or "").strip()
    if not (value.isascii() and value.isdigit()) or int(value) <= 0:
        raise ValueError("Credit hours must be a positive number")
    return int(value)


@dataclass
class AppState:
    """Sole owner of the live record; adapters mutate it only through here."""

    record: StudentRecord = field(default_factory=lambda: StudentRecord("", "", "", ""))
    has_profile: bool = False

    def start_record(self, student_name: str, register_number: str, program: str, department: str) -> StudentRecord:
        self.record = StudentRecord(
            student_name=student_name.strip(),
            register_number=register_number.strip(),
            program=program.strip(),
            department=department.strip(),
        )
        self.has_profile = True
        return self.record

    def add_semester(self, name: str, courses: Iterable[CourseInput]) -> Semester:
        semester = Semester(name)
        for c in courses:
            if not is_valid_grade(c.grade):
                logger.warning("Invalid grade %r for %s; using 'F'", c.grade, c.code)
            semester.add_course(
                Course(
                    name=c.name.strip(),
                    code=c.code.strip(),
                    credit_hours=c.credit_hours,
                    grade=normalize_grade(c.grade),
                )
            )
        self.record.add_semester(semester)
        return semester

    def resolve_path(self, path: str | None) -> Path:
        if path and path.strip():
            return Path(path.strip())
        return settings.default_record_path

    def save(self, path: str | None = None) -> tuple[bool, Path]:
        target = self.resolve_path(path)
        if not (path and path.strip()):
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.error("Could not create data directory %s: %s", target.parent, exc)
                return False, target
        return self.record.save_to_file(target), target

    def load(self, path: str | None = None) -> tuple[bool, Path]:
        source = self.resolve_path(path)
        ok = self.record.load_from_file(source)
        if ok:
            self.has_profile = True
        return ok, source


app_state = AppState()
