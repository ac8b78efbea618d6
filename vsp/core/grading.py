"""
Grading scale and the value objects passed to and from the grading engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .enums import LetterGrade


CA_MAX_SCORE = 40
EXAM_MAX_SCORE = 60


@dataclass(frozen=True)
class GradeBand:
    """One row of a grading scale; both score bounds are inclusive."""
    grade: LetterGrade
    min_score: float
    max_score: float
    grade_point: float
    remark: str


DEFAULT_GRADING_SCALE: Tuple[GradeBand, ...] = (
    GradeBand(LetterGrade.A, 70, 100, 4.0, "Excellent"),
    GradeBand(LetterGrade.B, 60, 69, 3.5, "Very Good"),
    GradeBand(LetterGrade.C, 50, 59, 3.0, "Good"),
    GradeBand(LetterGrade.D, 45, 49, 2.5, "Fair"),
    GradeBand(LetterGrade.E, 40, 44, 2.0, "Pass"),
    GradeBand(LetterGrade.F, 0, 39, 0.0, "Fail"),
)


@dataclass(frozen=True)
class GradeResult:
    grade: LetterGrade
    grade_point: float
    remark: str

    def to_dict(self) -> Dict[str, Any]:
        return {"grade": self.grade.value, "grade_point": self.grade_point, "remark": self.remark}


@dataclass(frozen=True)
class SubjectResult:
    """A subject's total score and the credit units it carries."""
    score: float
    credit_units: float


@dataclass(frozen=True)
class TermResult:
    """A term's GPA and the credits it was computed over."""
    gpa: float
    credits: float


@dataclass(frozen=True)
class SubjectGrade:
    """A graded subject entry built from its CA and exam scores."""
    ca_score: float
    exam_score: float
    total_score: float
    grade: LetterGrade
    grade_point: float
    remark: str
    credit_units: float

    @property
    def weighted_points(self) -> float:
        return self.grade_point * self.credit_units

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ca_score": self.ca_score,
            "exam_score": self.exam_score,
            "total_score": self.total_score,
            "grade": self.grade.value,
            "grade_point": self.grade_point,
            "remark": self.remark,
            "credit_units": self.credit_units,
        }


@dataclass
class TermSummary:
    """Totals shown at the foot of a student's term result."""
    subjects: List[SubjectGrade] = field(default_factory=list)
    total_credits: float = 0
    total_grade_points: float = 0
    gpa: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subjects": [subject.to_dict() for subject in self.subjects],
            "total_credits": self.total_credits,
            "total_grade_points": self.total_grade_points,
            "gpa": self.gpa,
        }
