from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Iterable


@dataclass(frozen=True)
class CourseResult:
    credits: int
    grade_point: float


def total_credits(courses: Iterable[CourseResult]) -> int:
    return sum(c.credits for c in courses)


def calc_sgpa(courses: Iterable[CourseResult]) -> float:
    courses = list(courses)
    credits = total_credits(courses)
    if credits == 0:
        return 0.0
    return sum(c.credits * c.grade_point for c in courses) / credits


def calc_cgpa(semester_courses: Iterable[Iterable[CourseResult]]) -> float:
    # Weighted over every course, not an average of semester SGPAs.
    return calc_sgpa(chain.from_iterable(semester_courses))
