"""
Discrete distribution implementations.

Provides the binomial, geometric, negative binomial and Poisson distributions.
Geometric and negative binomial count trials, so their support starts at one
success (geometric) or ``r`` successes (negative binomial).

Binomial, negative binomial and Poisson masses are computed in log space, so
large counts give probabilities that underflow to zero instead of overflowing
intermediate factorials.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import model_validator

from pydistcalc.distributions.core import DiscreteDistribution
from pydistcalc.exceptions import InvalidParameterError
from pydistcalc.special import log_combination, log_factorial


def _check_probability(owner: str, p: float) -> None:
    if not 0 < p <= 1:
        msg = f"{owner}: success probability p must be in (0, 1], got {p}"
        raise InvalidParameterError(msg)


def _log_power(count: int, probability: float) -> float:
    """``count * log(probability)`` with ``0 * log(0) == 0``."""
    if count == 0:
        return 0.0
    if probability == 0:
        return -math.inf
    return count * math.log(probability)


class BinomialDist(DiscreteDistribution):
    r"""
    Binomial distribution: successes in ``n`` independent trials.

    .. math::

        P(k; n, p) = \binom{n}{k} p^k (1-p)^{n-k}

    Parameters:
        n (int): Number of trials, non-negative.
        p (float): Success probability in (0, 1].
    """

    type: Literal["binomial_dist"] = "binomial_dist"
    n: int
    p: float

    @model_validator(mode="after")
    def check_parameters(self) -> BinomialDist:
        """Validate that n >= 0 and 0 < p <= 1."""
        if self.n < 0:
            msg = f"BinomialDist: n must be >= 0, got {self.n}"
            raise InvalidParameterError(msg)
        _check_probability("BinomialDist", self.p)
        return self

    def pmf(self, k: int) -> float:
        if not 0 <= k <= self.n:
            return 0.0
        return math.exp(
            log_combination(self.n, k)
            + _log_power(k, self.p)
            + _log_power(self.n - k, 1 - self.p)
        )

    @property
    def mean(self) -> float:
        return self.n * self.p

    @property
    def variance(self) -> float:
        return self.n * self.p * (1 - self.p)


class GeometricDist(DiscreteDistribution):
    r"""
    Geometric distribution: number of trials up to and including the first success.

    .. math::

        P(k; p) = (1-p)^{k-1} p, \qquad k \ge 1

    Parameters:
        p (float): Success probability in (0, 1].
    """

    type: Literal["geometric_dist"] = "geometric_dist"
    p: float

    @model_validator(mode="after")
    def check_parameters(self) -> GeometricDist:
        """Validate that 0 < p <= 1."""
        _check_probability("GeometricDist", self.p)
        return self

    def pmf(self, k: int) -> float:
        if k < 1:
            return 0.0
        return (1 - self.p) ** (k - 1) * self.p

    @property
    def mean(self) -> float:
        return 1 / self.p

    @property
    def variance(self) -> float:
        return (1 - self.p) / self.p**2


class NegativeBinomialDist(DiscreteDistribution):
    r"""
    Negative binomial distribution: number of trials needed for ``r`` successes.

    .. math::

        P(k; r, p) = \binom{k-1}{r-1} p^r (1-p)^{k-r}, \qquad k \ge r

    Parameters:
        r (int): Required number of successes, at least one.
        p (float): Success probability in (0, 1].
    """

    type: Literal["negative_binomial_dist"] = "negative_binomial_dist"
    r: int
    p: float

    @model_validator(mode="after")
    def check_parameters(self) -> NegativeBinomialDist:
        """Validate that r >= 1 and 0 < p <= 1."""
        if self.r < 1:
            msg = f"NegativeBinomialDist: r must be >= 1, got {self.r}"
            raise InvalidParameterError(msg)
        _check_probability("NegativeBinomialDist", self.p)
        return self

    def pmf(self, k: int) -> float:
        if k < self.r:
            return 0.0
        return math.exp(
            log_combination(k - 1, self.r - 1)
            + _log_power(self.r, self.p)
            + _log_power(k - self.r, 1 - self.p)
        )

    @property
    def mean(self) -> float:
        return self.r / self.p

    @property
    def variance(self) -> float:
        return self.r * (1 - self.p) / self.p**2


class PoissonDist(DiscreteDistribution):
    r"""
    Poisson distribution.

    .. math::

        P(k; \lambda) = \frac{\lambda^k e^{-\lambda}}{k!}

    Parameters:
        rate (float): Expected count (λ), strictly positive.
    """

    type: Literal["poisson_dist"] = "poisson_dist"
    rate: float

    @model_validator(mode="after")
    def check_rate(self) -> PoissonDist:
        """Validate that rate > 0."""
        if not self.rate > 0:
            msg = f"PoissonDist: rate must be > 0, got {self.rate}"
            raise InvalidParameterError(msg)
        return self

    def pmf(self, k: int) -> float:
        if k < 0:
            return 0.0
        return math.exp(k * math.log(self.rate) - self.rate - log_factorial(k))

    @property
    def mean(self) -> float:
        return self.rate

    @property
    def variance(self) -> float:
        return self.rate


def binomial_pmf(n: int, p: float, k: int) -> float:
    """Probability of ``k`` successes in ``n`` trials."""
    return BinomialDist(n=n, p=p).pmf(k)


def geometric_pmf(p: float, k: int) -> float:
    """Probability that the first success happens on trial ``k``."""
    return GeometricDist(p=p).pmf(k)


def negative_binomial_pmf(r: int, p: float, k: int) -> float:
    """Probability that the ``r``-th success happens on trial ``k``."""
    return NegativeBinomialDist(r=r, p=p).pmf(k)


def poisson_pmf(rate: float, k: int) -> float:
    """Probability of exactly ``k`` events at the given rate."""
    return PoissonDist(rate=rate).pmf(k)


# Registry of discrete distributions
distributions: dict[str, type[DiscreteDistribution]] = {
    "binomial_dist": BinomialDist,
    "geometric_dist": GeometricDist,
    "negative_binomial_dist": NegativeBinomialDist,
    "poisson_dist": PoissonDist,
}

__all__ = [
    "BinomialDist",
    "GeometricDist",
    "NegativeBinomialDist",
    "PoissonDist",
    "binomial_pmf",
    "distributions",
    "geometric_pmf",
    "negative_binomial_pmf",
    "poisson_pmf",
]
