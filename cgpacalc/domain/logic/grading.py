from __future__ import annotations

GRADE_SCALE: list[tuple[str, float, str]] = [
    ("O", 10.0, "Outstanding"),
    ("A+", 9.0, "Excellent"),
    ("A", 8.0, "Very Good"),
    ("B+", 7.0, "Good"),
    ("B", 6.0, "Above Average"),
    ("C", 5.0, "Average"),
    ("P", 4.0, "Pass"),
    ("F", 0.0, "Fail"),
]

GRADE_POINTS: dict[str, float] = {letter: points for letter, points, _ in GRADE_SCALE}

VALID_GRADES: tuple[str, ...] = tuple(letter for letter, _, _ in GRADE_SCALE)

FAILING_GRADE = "F"

CLASSIFICATION_BANDS: list[tuple[float, str]] = [
    (9.0, "First Class with Distinction"),
    (8.0, "First Class"),
    (7.0, "Second Class"),
    (6.0, "Third Class"),
]


def grade_point(letter: str) -> float:
    """Points for a letter grade; unknown letters count as a fail."""
    return GRADE_POINTS.get(letter.upper(), 0.0)


def normalize_grade(raw: str) -> str:
    letter = (raw or "").strip().upper()
    if letter not in GRADE_POINTS:
        return FAILING_GRADE
    return letter


def is_valid_grade(raw: str) -> bool:
    return (raw or "").strip().upper() in GRADE_POINTS


def classify_cgpa(cgpa: float) -> str:
    for threshold, label in CLASSIFICATION_BANDS:
        if cgpa >= threshold:
            return label
    return "Need Improvement"
