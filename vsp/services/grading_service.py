"""
Grading engine: score banding, result entry scoring and GPA/CGPA aggregation.
"""

import logging
import math
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any, Iterable, Optional, Sequence

from ..core.exceptions import ConfigurationError, ValidationError
from ..core.grading import (
    GradeBand, GradeResult, TermResult, SubjectGrade, TermSummary,
    DEFAULT_GRADING_SCALE, CA_MAX_SCORE, EXAM_MAX_SCORE,
)


logger = logging.getLogger(__name__)


def round2(value: float) -> float:
    """Round half up to 2 decimal places, as report sheets print them."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {value!r}",
                              error_code="invalid_number", details={"field": name})
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{name} must be a finite number, got {value!r}",
                              error_code="invalid_number", details={"field": name})
    return value


def _weight(value: Any, name: str) -> float:
    value = _number(value, name)
    if value < 0:
        raise ValidationError(f"{name} cannot be negative, got {value!r}",
                              error_code="negative_weight", details={"field": name})
    return value


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        if name not in item:
            raise ValidationError(f"Missing {name}", error_code="missing_field",
                                  details={"field": name})
        return item[name]
    try:
        return getattr(item, name)
    except AttributeError:
        raise ValidationError(f"Missing {name}", error_code="missing_field",
                              details={"field": name})


class GradingEngine:
    """Turns scores into grades and grade points into GPA and CGPA."""

    def __init__(self, scale: Optional[Sequence[GradeBand]] = None):
        self._scale = tuple(scale) if scale is not None else DEFAULT_GRADING_SCALE
        self._validate_scale()

    def _validate_scale(self) -> None:
        if not self._scale:
            raise ConfigurationError("Grading scale must have at least one band")
        previous = None
        for band in self._scale:
            if band.min_score > band.max_score:
                raise ConfigurationError(f"Band {band.grade.value} has min_score above max_score")
            if previous is not None and band.max_score >= previous.min_score:
                raise ConfigurationError("Grading bands must be ordered from highest to lowest "
                                         "without overlapping")
            previous = band

    @property
    def scale(self):
        return self._scale

    def band_for(self, score: float) -> GradeBand:
        """Get the band a score falls in.

        Bands are walked from the top and the first whose ``[min_score, max_score]``
        range holds the score wins. Scores above the top band's maximum stay in
        the top band; anything else outside every range, such as 69.5 between
        B and A or a negative score, falls back to the last band.
        """
        score = _number(score, "score")
        for band in self._scale:
            if band.min_score <= score <= band.max_score:
                return band
        if score > self._scale[0].max_score:
            return self._scale[0]
        return self._scale[-1]

    def grade_for(self, score: float) -> GradeResult:
        band = self.band_for(score)
        return GradeResult(grade=band.grade, grade_point=band.grade_point, remark=band.remark)

    def aggregate(self, results: Iterable[Any]) -> float:
        """GPA: credit-weighted mean grade point, 0 for empty input or zero credit.

        ``results`` holds SubjectResult objects or mappings with ``score`` and
        ``credit_units``.
        """
        total_points = 0.0
        total_credits = 0.0
        for result in results:
            credit_units = _weight(_field(result, "credit_units"), "credit_units")
            total_points += self.grade_for(_field(result, "score")).grade_point * credit_units
            total_credits += credit_units
        if total_credits <= 0:
            return 0.0
        return round2(total_points / total_credits)

    def aggregate_across_terms(self, terms: Iterable[Any]) -> float:
        """CGPA: credit-weighted mean of term GPAs, 0 for empty input or zero credit."""
        total_points = 0.0
        total_credits = 0.0
        for term in terms:
            credits = _weight(_field(term, "credits"), "credits")
            total_points += _number(_field(term, "gpa"), "gpa") * credits
            total_credits += credits
        if total_credits <= 0:
            return 0.0
        return round2(total_points / total_credits)

    def score_subject(self, ca_score: float, exam_score: float, credit_units: float = 1) -> SubjectGrade:
        """Grade one subject from its continuous assessment and exam scores."""
        ca_score = _number(ca_score, "ca_score")
        exam_score = _number(exam_score, "exam_score")
        credit_units = _weight(credit_units, "credit_units")
        if not 0 <= ca_score <= CA_MAX_SCORE:
            raise ValidationError(f"CA score must be between 0 and {CA_MAX_SCORE}, got {ca_score}",
                                  error_code="score_out_of_range", details={"field": "ca_score"})
        if not 0 <= exam_score <= EXAM_MAX_SCORE:
            raise ValidationError(f"Exam score must be between 0 and {EXAM_MAX_SCORE}, got {exam_score}",
                                  error_code="score_out_of_range", details={"field": "exam_score"})
        total = ca_score + exam_score
        result = self.grade_for(total)
        return SubjectGrade(
            ca_score=ca_score,
            exam_score=exam_score,
            total_score=total,
            grade=result.grade,
            grade_point=result.grade_point,
            remark=result.remark,
            credit_units=credit_units,
        )

    def summarize_term(self, subjects: Iterable[Any]) -> TermSummary:
        """Grade a term's subject entries and total them into a GPA.

        Entries are SubjectGrade objects or mappings with ``ca_score``,
        ``exam_score`` and optionally ``credit_units`` (default 1).
        """
        summary = TermSummary()
        for entry in subjects:
            if not isinstance(entry, SubjectGrade):
                if isinstance(entry, Mapping):
                    credit_units = entry.get("credit_units", 1)
                else:
                    credit_units = getattr(entry, "credit_units", 1)
                entry = self.score_subject(_field(entry, "ca_score"), _field(entry, "exam_score"),
                                           credit_units)
            summary.subjects.append(entry)
            summary.total_credits += entry.credit_units
            summary.total_grade_points += entry.weighted_points
        if summary.total_credits > 0:
            summary.gpa = round2(summary.total_grade_points / summary.total_credits)
        logger.debug("Summarised %d subjects: GPA %.2f", len(summary.subjects), summary.gpa)
        return summary

    @staticmethod
    def term_result(summary: TermSummary) -> TermResult:
        """Get a summary as a CGPA input."""
        return TermResult(gpa=summary.gpa, credits=summary.total_credits)
