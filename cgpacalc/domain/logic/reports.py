"""
Read-only projections of a student record for display.

Adapters (the flet UI, the HTTP API) render these; nothing here prints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cgpacalc.domain.models.entities import Semester, StudentRecord


@dataclass(frozen=True)
class CourseRow:
    code: str
    name: str
    credit_hours: int
    grade: str
    grade_point: float


@dataclass(frozen=True)
class SemesterReport:
    name: str
    rows: list[CourseRow]
    sgpa: float
    total_credits: int


@dataclass(frozen=True)
class Transcript:
    student_name: str
    register_number: str
    program: str
    department: str
    semesters: list[SemesterReport] = field(default_factory=list)
    cgpa: float = 0.0


def build_semester_report(semester: Semester) -> SemesterReport:
    rows = [
        CourseRow(
            code=c.code,
            name=c.name,
            credit_hours=c.credit_hours,
            grade=c.grade,
            grade_point=c.grade_point,
        )
        for c in semester.courses
    ]
    return SemesterReport(
        name=semester.name,
        rows=rows,
        sgpa=semester.calculate_sgpa(),
        total_credits=semester.get_total_credits(),
    )


def build_transcript(record: StudentRecord) -> Transcript:
    # Iterates by position so semesters sharing a name all appear.
    return Transcript(
        student_name=record.student_name,
        register_number=record.register_number,
        program=record.program,
        department=record.department,
        semesters=[build_semester_report(s) for s in record.semesters],
        cgpa=record.calculate_cgpa(),
    )
