"""
Plain-text persistence for student records.

File layout, one item per line::

    <student name>
    <register number>
    <program>
    <department>
    SEMESTER:<semester name>
    <code>,<name>,<credit hours>,<grade>
    ENDSEMESTER

Course fields are comma separated with no escaping, so a comma inside a
course code or name cannot round-trip. The grade takes everything after the
third comma.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from cgpacalc.domain.models.entities import Course, Semester, StudentRecord

logger = logging.getLogger(__name__)

SEMESTER_PREFIX = "SEMESTER:"
SEMESTER_END = "ENDSEMESTER"
FIELD_SEPARATOR = ","
IDENTITY_FIELDS = ("student_name", "register_number", "program", "department")


class RecordStorageError(Exception):
    pass


def format_course_line(course: Course) -> str:
    return FIELD_SEPARATOR.join([course.code, course.name, str(course.credit_hours), course.grade])


def parse_course_line(line: str) -> Course | None:
    parts = line.split(FIELD_SEPARATOR, 3)
    if len(parts) < 4:
        return None
    code, name, credits, grade = parts
    credits = credits.strip()
    if not (credits.isascii() and credits.isdigit()):
        return None
    credit_hours = int(credits)
    if credit_hours <= 0:
        return None
    return Course(name=name, code=code, credit_hours=credit_hours, grade=grade)


def write_record(record: StudentRecord) -> list[str]:
    lines = [getattr(record, attr) for attr in IDENTITY_FIELDS]
    for semester in record.semesters:
        lines.append(f"{SEMESTER_PREFIX}{semester.name}")
        for course in semester.courses:
            if FIELD_SEPARATOR in course.code or FIELD_SEPARATOR in course.name:
                logger.warning(
                    "Course %r in %r contains a comma and will not load back intact",
                    course.code,
                    semester.name,
                )
            lines.append(format_course_line(course))
        lines.append(SEMESTER_END)
    return lines


def parse_record(lines: Iterable[str]) -> StudentRecord:
    it = iter(lines)
    identity = {attr: next(it, "") for attr in IDENTITY_FIELDS}
    record = StudentRecord(**identity)

    current: Semester | None = None
    for lineno, line in enumerate(it, start=len(IDENTITY_FIELDS) + 1):
        if line.startswith(SEMESTER_PREFIX):
            current = Semester(line[len(SEMESTER_PREFIX):])
            record.add_semester(current)
        elif line == SEMESTER_END:
            current = None
        elif current is not None:
            course = parse_course_line(line)
            if course is None:
                if line:
                    logger.warning("Skipping malformed course line %d: %r", lineno, line)
                continue
            current.add_course(course)
    return record


class RecordStorage:
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def save(self, record: StudentRecord, path: str | Path) -> None:
        content = "".join(f"{line}\n" for line in write_record(record))
        try:
            with open(path, "w", encoding=self.encoding, newline="\n") as fh:
                fh.write(content)
        except (OSError, UnicodeError) as exc:
            raise RecordStorageError(f"Cannot write {path}: {exc}") from exc
        logger.info("Saved %d semester(s) to %s", len(record.semesters), path)

    def load(self, path: str | Path) -> StudentRecord:
        try:
            with open(path, "r", encoding=self.encoding) as fh:
                content = fh.read()
        except (OSError, UnicodeError) as exc:
            raise RecordStorageError(f"Cannot read {path}: {exc}") from exc

        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        record = parse_record(lines)
        logger.info("Loaded %d semester(s) from %s", len(record.semesters), path)
        return record
