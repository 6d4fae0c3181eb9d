"""
Core distribution classes and utilities.

Provides the base Distribution class shared by the continuous and discrete
implementations, including parameter validation and curve sampling.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator

from pydistcalc.exceptions import InvalidParameterError
from pydistcalc.results import Curve, CurvePoint, DiscreteResult, EvaluationResult

log = logging.getLogger(__name__)

#: Number of intervals a curve is sampled with.
CURVE_STEPS = 100


class Distribution(BaseModel, ABC):
    """
    Base class for probability distributions.

    Distributions are immutable value objects: the parameters are validated
    once at construction and every method is a pure function of them and its
    arguments. Subclasses declare a ``type`` literal used as the discriminator
    of the :data:`~pydistcalc.distributions.DistributionType` union.

    Raises:
        InvalidParameterError: If a numeric parameter is not finite, or if a
            subclass validator finds a parameter outside its domain.
    """

    model_config = ConfigDict(frozen=True)

    type: str

    @model_validator(mode="after")
    def check_finite_parameters(self) -> Distribution:
        """Reject NaN and infinite parameters."""
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, float) and not math.isfinite(value):
                msg = f"{self.type}: parameter '{name}' must be finite, got {value}"
                raise InvalidParameterError(msg)
        return self

    @property
    @abstractmethod
    def mean(self) -> float:
        """Mean of the distribution."""

    @property
    @abstractmethod
    def variance(self) -> float:
        """Variance of the distribution."""

    @property
    def std_dev(self) -> float:
        """Standard deviation of the distribution."""
        return math.sqrt(self.variance)


class ContinuousDistribution(Distribution):
    """
    Base class for continuous distributions.

    Subclasses implement :meth:`pdf`, :meth:`plot_range` and the moments, and
    optionally :meth:`cdf`. A distribution without a CDF implementation
    returns ``None`` from :meth:`cdf`, which propagates into
    :class:`~pydistcalc.results.EvaluationResult` and
    :class:`~pydistcalc.results.Curve`.
    """

    @abstractmethod
    def pdf(self, x: float) -> float:
        """Probability density at ``x``."""

    def cdf(self, x: float) -> float | None:  # noqa: ARG002
        """Cumulative probability ``P(X <= x)``, ``None`` if not available."""
        return None

    @abstractmethod
    def plot_range(self) -> tuple[float, float]:
        """Interval showing the meaningful support of the distribution."""

    def evaluate(self, x: float) -> EvaluationResult:
        """
        Evaluate density, cumulative probability and moments at ``x``.

        Args:
            x: Evaluation point.

        Returns:
            EvaluationResult: pdf, cdf (possibly ``None``), mean and variance.
        """
        return EvaluationResult(
            pdf=self.pdf(x), cdf=self.cdf(x), mean=self.mean, variance=self.variance
        )

    def curve(self, steps: int = CURVE_STEPS) -> Curve:
        """
        Sample the distribution over :meth:`plot_range`.

        Args:
            steps: Number of equal intervals; the curve has ``steps + 1``
                points including both ends of the range.

        Returns:
            Curve: The sampled points.
        """
        if steps < 1:
            msg = f"Curve needs at least one step, got {steps}"
            raise InvalidParameterError(msg)
        lower, upper = self.plot_range()
        log.debug("sampling %s on [%g, %g] with %d steps", self.type, lower, upper, steps)
        points = []
        for value in np.linspace(lower, upper, steps + 1):
            x = float(value)
            points.append(CurvePoint(x=x, pdf=self.pdf(x), cdf=self.cdf(x)))
        return Curve(points=tuple(points))


class DiscreteDistribution(Distribution):
    """
    Base class for discrete distributions over the integers.

    Values of ``k`` outside the support have probability zero.
    """

    @abstractmethod
    def pmf(self, k: int) -> float:
        """Probability mass at ``k``."""

    def evaluate(self, k: int) -> DiscreteResult:
        """
        Evaluate probability mass and moments at ``k``.

        Args:
            k: Evaluation point.

        Returns:
            DiscreteResult: probability, mean and variance.
        """
        return DiscreteResult(
            probability=self.pmf(k), mean=self.mean, variance=self.variance
        )


__all__ = [
    "CURVE_STEPS",
    "ContinuousDistribution",
    "DiscreteDistribution",
    "Distribution",
]
