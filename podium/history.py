"""
Append-only evaluation history.

One EvaluationReport per finished session, in session order. Reports are
frozen pydantic models, so once appended nothing can change them; the
history itself only ever grows.
"""

from typing import Iterator

import numpy as np

from podium.constants import DIMENSIONS
from podium.scoring import EvaluationReport


class EvaluationHistory:
    def __init__(self, reports: list[EvaluationReport] | None = None):
        self._reports: list[EvaluationReport] = []
        for r in reports or []:
            self.append(r)

    def append(self, report: EvaluationReport) -> int:
        """Add a report; returns its index."""
        if not isinstance(report, EvaluationReport):
            raise TypeError(f"expected EvaluationReport, got {type(report).__name__}")
        self._reports.append(report)
        return len(self._reports) - 1

    def all(self) -> tuple[EvaluationReport, ...]:
        return tuple(self._reports)

    def latest(self) -> EvaluationReport | None:
        return self._reports[-1] if self._reports else None

    def __getitem__(self, index: int) -> EvaluationReport:
        return self._reports[index]

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[EvaluationReport]:
        return iter(tuple(self._reports))

    def dimension_averages(self) -> dict[str, float]:
        """Mean sub-score per dimension across all sessions (empty history → {})."""
        if not self._reports:
            return {}
        matrix = np.array([[r.scores()[d] for d in DIMENSIONS] for r in self._reports])
        means = matrix.mean(axis=0)
        return {d: round(float(m), 2) for d, m in zip(DIMENSIONS, means)}

    def overall_trend(self) -> float | None:
        """Latest overall score minus the previous one; None with fewer than two sessions."""
        if len(self._reports) < 2:
            return None
        return round(self._reports[-1].overall_score - self._reports[-2].overall_score, 2)
