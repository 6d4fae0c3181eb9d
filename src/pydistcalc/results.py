"""
Result value types returned by the distribution library.

All results are frozen Pydantic models so they can be compared, hashed,
serialized with ``model_dump()`` and handed to any presentation layer.
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field, model_validator


class EvaluationResult(BaseModel):
    """
    Pointwise evaluation of a continuous distribution.

    Attributes:
        pdf: Density at the evaluation point.
        cdf: Cumulative probability at the evaluation point, ``None`` when the
            distribution has no CDF implementation (gamma).
        mean: Mean of the distribution.
        variance: Variance of the distribution.
    """

    model_config = ConfigDict(frozen=True)

    pdf: float
    cdf: float | None = None
    mean: float
    variance: float

    @property
    def std_dev(self) -> float:
        """Standard deviation, the square root of the variance."""
        return math.sqrt(self.variance)


class DiscreteResult(BaseModel):
    """
    Pointwise evaluation of a discrete distribution.

    Attributes:
        probability: Probability mass at the evaluation point.
        mean: Mean of the distribution.
        variance: Variance of the distribution.
    """

    model_config = ConfigDict(frozen=True)

    probability: float
    mean: float
    variance: float


class CurvePoint(BaseModel):
    """A single sample of a curve."""

    model_config = ConfigDict(frozen=True)

    x: float
    pdf: float
    cdf: float | None = None


class Curve(BaseModel):
    """
    Ordered samples of a distribution over its plotting range.

    Attributes:
        points: Samples ordered by increasing ``x``.
    """

    model_config = ConfigDict(frozen=True)

    points: tuple[CurvePoint, ...] = Field(..., repr=False)

    @model_validator(mode="after")
    def check_cdf_column(self) -> Curve:
        """Validate that the CDF column is either present on every point or on none."""
        present = {point.cdf is not None for point in self.points}
        if len(present) > 1:
            msg = "Curve points must either all carry a CDF value or none of them"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.points)

    @property
    def has_cdf(self) -> bool:
        """Whether the CDF column is populated."""
        return bool(self.points) and self.points[0].cdf is not None

    @property
    def x(self) -> npt.NDArray[np.float64]:
        """Sample coordinates."""
        return np.array([point.x for point in self.points], dtype=np.float64)

    @property
    def pdf(self) -> npt.NDArray[np.float64]:
        """Density values aligned with :attr:`x`."""
        return np.array([point.pdf for point in self.points], dtype=np.float64)

    @property
    def cdf(self) -> npt.NDArray[np.float64] | None:
        """Cumulative values aligned with :attr:`x`, or ``None`` without a CDF column."""
        if not self.has_cdf:
            return None
        return np.array([point.cdf for point in self.points], dtype=np.float64)

    @property
    def labels(self) -> list[str]:
        """Axis labels with two decimals."""
        return [f"{point.x:.2f}" for point in self.points]


__all__ = ["Curve", "CurvePoint", "DiscreteResult", "EvaluationResult"]
