"""
Descriptive statistics of raw sample sets.

Moments use the population convention (divide by ``n``). Every function is
defined on empty input and returns zero there instead of NaN.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from typing import TypeAlias

import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field, model_validator

from pydistcalc.distributions.continuous import NormalDist
from pydistcalc.exceptions import InvalidParameterError


class SampleSet(BaseModel):
    """
    Immutable ordered sequence of raw numeric observations.

    Attributes:
        values: The observations, in the order they were collected.
    """

    model_config = ConfigDict(frozen=True)

    values: tuple[float, ...] = Field(default=(), repr=False)

    @model_validator(mode="after")
    def check_finite(self) -> SampleSet:
        """Reject NaN and infinite observations."""
        for index, value in enumerate(self.values):
            if not math.isfinite(value):
                msg = f"SampleSet: sample {index} must be finite, got {value}"
                raise InvalidParameterError(msg)
        return self

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> SampleSet:
        """Create a SampleSet from any iterable of numbers."""
        return cls(values=tuple(float(value) for value in values))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:  # type: ignore[override]
        return iter(self.values)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Observations as a float array."""
        return np.asarray(self.values, dtype=np.float64)


class SummaryStatistics(BaseModel):
    """
    Summary of a sample set.

    Attributes:
        count: Number of observations.
        mean: Arithmetic mean.
        variance: Population variance.
        std_dev: Population standard deviation.
        median: Midpoint of the sorted observations.
        min: Smallest observation.
        max: Largest observation.
        range: ``max - min``.
    """

    model_config = ConfigDict(frozen=True)

    count: int = 0
    mean: float = 0.0
    variance: float = 0.0
    std_dev: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    range: float = 0.0


SampleLike: TypeAlias = SampleSet | Iterable[float]


def as_sample_set(samples: SampleLike) -> SampleSet:
    """Coerce a sequence of numbers into a validated :class:`SampleSet`."""
    if isinstance(samples, SampleSet):
        return samples
    return SampleSet.from_iterable(samples)


def mean(samples: SampleLike) -> float:
    """Arithmetic mean, 0.0 for empty input."""
    data = as_sample_set(samples).to_numpy()
    if data.size == 0:
        return 0.0
    return float(np.mean(data))


def population_variance(samples: SampleLike) -> float:
    """Sum of squared deviations from the mean divided by ``n``, 0.0 for empty input."""
    data = as_sample_set(samples).to_numpy()
    if data.size == 0:
        return 0.0
    return float(np.var(data, ddof=0))


def std_dev(samples: SampleLike) -> float:
    """Population standard deviation, 0.0 for empty input."""
    return math.sqrt(population_variance(samples))


def median(samples: SampleLike) -> float:
    """
    Median of the observations.

    The observations are sorted; for an odd count the middle value is
    returned, for an even count the mean of the two middle values.
    Empty input gives 0.0.
    """
    ordered = sorted(as_sample_set(samples).values)
    n = len(ordered)
    if n == 0:
        return 0.0
    if n % 2 == 0:
        return (ordered[n // 2 - 1] + ordered[n // 2]) / 2
    return ordered[n // 2]


def describe(samples: SampleLike) -> SummaryStatistics:
    """
    Compute all summary statistics of a sample set.

    Args:
        samples: Observations.

    Returns:
        SummaryStatistics: Count, moments, median and extent. All fields are
        zero for an empty sample set.
    """
    sample_set = as_sample_set(samples)
    if len(sample_set) == 0:
        return SummaryStatistics()

    data = sample_set.to_numpy()
    variance = float(np.var(data, ddof=0))
    lowest = float(np.min(data))
    highest = float(np.max(data))
    return SummaryStatistics(
        count=int(data.size),
        mean=float(np.mean(data)),
        variance=variance,
        std_dev=math.sqrt(variance),
        median=median(sample_set),
        min=lowest,
        max=highest,
        range=highest - lowest,
    )


def fit_normal(samples: SampleLike) -> NormalDist:
    """
    Normal distribution with the population mean and standard deviation of the samples.

    Raises:
        InvalidParameterError: If there are no samples or they have no spread.
    """
    summary = describe(samples)
    if summary.count == 0:
        msg = "Cannot fit a normal distribution to an empty sample set"
        raise InvalidParameterError(msg)
    return NormalDist(mu=summary.mean, sigma=summary.std_dev)


__all__ = [
    "SampleSet",
    "SummaryStatistics",
    "as_sample_set",
    "describe",
    "fit_normal",
    "mean",
    "median",
    "population_variance",
    "std_dev",
]
