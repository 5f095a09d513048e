from __future__ import annotations

import dataclasses

# (exclusive upper bound, grade, ring percent), ascending.
GRADE_BANDS: tuple[tuple[int, str, int], ...] = (
    (50, "C", 30),
    (100, "C+", 40),
    (200, "B", 50),
    (500, "B+", 60),
    (1000, "A", 70),
    (2000, "A+", 80),
    (5000, "S", 90),
)
TOP_GRADE = ("S+", 100)

GRADE_ORDER = tuple([g for _, g, _ in GRADE_BANDS] + [TOP_GRADE[0]])


@dataclasses.dataclass(frozen=True)
class Grade:
    grade: str
    percent: int


def classify_grade(score: int) -> Grade:
    """Map a composite score to its band; the ring percent is fixed per band."""
    for upper, grade, percent in GRADE_BANDS:
        if score < upper:
            return Grade(grade=grade, percent=percent)
    return Grade(grade=TOP_GRADE[0], percent=TOP_GRADE[1])
