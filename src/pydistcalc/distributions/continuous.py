"""
Continuous distribution implementations.

Provides the normal, exponential, uniform and gamma distributions together
with their standard parameterizations and function-style shortcuts.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import model_validator

from pydistcalc.distributions.core import ContinuousDistribution
from pydistcalc.exceptions import InvalidParameterError
from pydistcalc.special import erf, exp_or_inf, log_gamma


class NormalDist(ContinuousDistribution):
    r"""
    Normal (Gaussian) probability distribution.

    .. math::

        f(x; \mu, \sigma) = \frac{1}{\sigma\sqrt{2\pi}} \exp\left(-\frac{1}{2}\left(\frac{x-\mu}{\sigma}\right)^2\right)

    .. math::

        F(x; \mu, \sigma) = \frac{1}{2}\left(1 + \mathrm{erf}\left(\frac{x-\mu}{\sigma\sqrt{2}}\right)\right)

    Parameters:
        mu (float): Mean.
        sigma (float): Standard deviation, strictly positive.
    """

    type: Literal["normal_dist"] = "normal_dist"
    mu: float
    sigma: float

    @model_validator(mode="after")
    def check_sigma(self) -> NormalDist:
        """Validate that sigma > 0."""
        if not self.sigma > 0:
            msg = f"NormalDist: sigma must be > 0, got {self.sigma}"
            raise InvalidParameterError(msg)
        return self

    def pdf(self, x: float) -> float:
        norm_const = 1.0 / (self.sigma * math.sqrt(2 * math.pi))
        return norm_const * math.exp(-0.5 * ((x - self.mu) / self.sigma) ** 2)

    def cdf(self, x: float) -> float:
        z = (x - self.mu) / self.sigma
        return 0.5 * (1 + erf(z / math.sqrt(2)))

    @property
    def mean(self) -> float:
        return self.mu

    @property
    def variance(self) -> float:
        return self.sigma * self.sigma

    def plot_range(self) -> tuple[float, float]:
        """Four standard deviations on each side of the mean."""
        return self.mu - 4 * self.sigma, self.mu + 4 * self.sigma


class ExponentialDist(ContinuousDistribution):
    r"""
    Exponential probability distribution.

    .. math::

        f(x; \lambda) = \lambda e^{-\lambda x}, \qquad F(x; \lambda) = 1 - e^{-\lambda x}

    for :math:`x \ge 0`; both are zero for negative ``x``.

    Parameters:
        rate (float): Rate parameter (λ), strictly positive.
    """

    type: Literal["exponential_dist"] = "exponential_dist"
    rate: float

    @model_validator(mode="after")
    def check_rate(self) -> ExponentialDist:
        """Validate that rate > 0."""
        if not self.rate > 0:
            msg = f"ExponentialDist: rate must be > 0, got {self.rate}"
            raise InvalidParameterError(msg)
        return self

    def pdf(self, x: float) -> float:
        return self.rate * math.exp(-self.rate * x) if x >= 0 else 0.0

    def cdf(self, x: float) -> float:
        return 1 - math.exp(-self.rate * x) if x >= 0 else 0.0

    @property
    def mean(self) -> float:
        return 1 / self.rate

    @property
    def variance(self) -> float:
        return 1 / (self.rate * self.rate)

    def plot_range(self) -> tuple[float, float]:
        """From zero to five mean lifetimes."""
        return 0.0, 5 / self.rate


class UniformDist(ContinuousDistribution):
    r"""
    Continuous uniform (rectangular) probability distribution on :math:`[a, b]`.

    .. math::

        f(x; a, b) = \frac{1}{b - a}, \qquad F(x; a, b) = \frac{x - a}{b - a}

    inside the interval; outside it the density is zero and the CDF is 0 below
    ``a`` and 1 above ``b``.

    Parameters:
        a (float): Lower bound.
        b (float): Upper bound, strictly greater than ``a``.
    """

    type: Literal["uniform_dist"] = "uniform_dist"
    a: float
    b: float

    @model_validator(mode="after")
    def check_bounds(self) -> UniformDist:
        """Validate that a < b."""
        if not self.a < self.b:
            msg = f"UniformDist: a ({self.a}) must be < b ({self.b})"
            raise InvalidParameterError(msg)
        return self

    def pdf(self, x: float) -> float:
        return 1 / (self.b - self.a) if self.a <= x <= self.b else 0.0

    def cdf(self, x: float) -> float:
        if x < self.a:
            return 0.0
        if x > self.b:
            return 1.0
        return (x - self.a) / (self.b - self.a)

    @property
    def mean(self) -> float:
        return (self.a + self.b) / 2

    @property
    def variance(self) -> float:
        return (self.b - self.a) ** 2 / 12

    def plot_range(self) -> tuple[float, float]:
        """
        The support padded by one unit on each side.

        Standard uniform is a plain parameterization and so plots over
        ``[-1, 2]``, wider than the ``[-0.5, 1.5]`` window the calculator used
        for it.
        """
        return self.a - 1, self.b + 1


class GammaDist(ContinuousDistribution):
    r"""
    Gamma probability distribution in the shape/scale parameterization.

    .. math::

        f(x; k, \theta) = \frac{x^{k-1} e^{-x/\theta}}{\theta^k \Gamma(k)}

    for :math:`x > 0`, zero otherwise. The density is evaluated in log space,
    so large shapes stay finite even where :math:`x^{k-1}` and
    :math:`\theta^k \Gamma(k)` alone exceed the float range. The CDF needs the
    lower incomplete gamma function and is not provided, so :meth:`cdf`
    returns ``None``.

    Parameters:
        k (float): Shape, strictly positive.
        theta (float): Scale, strictly positive.
    """

    type: Literal["gamma_dist"] = "gamma_dist"
    k: float
    theta: float

    @model_validator(mode="after")
    def check_shape_scale(self) -> GammaDist:
        """Validate that k > 0 and theta > 0."""
        if not self.k > 0:
            msg = f"GammaDist: shape k must be > 0, got {self.k}"
            raise InvalidParameterError(msg)
        if not self.theta > 0:
            msg = f"GammaDist: scale theta must be > 0, got {self.theta}"
            raise InvalidParameterError(msg)
        return self

    def pdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        log_density = (
            (self.k - 1) * math.log(x)
            - x / self.theta
            - self.k * math.log(self.theta)
            - log_gamma(self.k)
        )
        return exp_or_inf(log_density)

    @property
    def mean(self) -> float:
        return self.k * self.theta

    @property
    def variance(self) -> float:
        return self.k * self.theta * self.theta

    def plot_range(self) -> tuple[float, float]:
        """From zero to four standard deviations above the mean."""
        return 0.0, self.k * self.theta + 4 * math.sqrt(self.k) * self.theta


def standard_normal() -> NormalDist:
    """Normal distribution with mu=0 and sigma=1."""
    return NormalDist(mu=0.0, sigma=1.0)


def standard_exponential() -> ExponentialDist:
    """Exponential distribution with rate=1."""
    return ExponentialDist(rate=1.0)


def standard_uniform() -> UniformDist:
    """Uniform distribution on [0, 1], plotted over [-1, 2] like any other uniform."""
    return UniformDist(a=0.0, b=1.0)


def normal_pdf(x: float, mu: float, sigma: float) -> float:
    """Normal density at ``x``; see :class:`NormalDist`."""
    return NormalDist(mu=mu, sigma=sigma).pdf(x)


def normal_cdf(x: float, mu: float, sigma: float) -> float:
    """Normal cumulative probability at ``x``."""
    return NormalDist(mu=mu, sigma=sigma).cdf(x)


def exponential_pdf(x: float, rate: float) -> float:
    """Exponential density at ``x``; zero for negative ``x``."""
    return ExponentialDist(rate=rate).pdf(x)


def exponential_cdf(x: float, rate: float) -> float:
    """Exponential cumulative probability at ``x``."""
    return ExponentialDist(rate=rate).cdf(x)


def uniform_pdf(x: float, a: float, b: float) -> float:
    """Uniform density on ``[a, b]`` at ``x``."""
    return UniformDist(a=a, b=b).pdf(x)


def uniform_cdf(x: float, a: float, b: float) -> float:
    """Uniform cumulative probability at ``x``, clamped to 0 and 1 outside ``[a, b]``."""
    return UniformDist(a=a, b=b).cdf(x)


def gamma_pdf(x: float, k: float, theta: float) -> float:
    """Gamma density with shape ``k`` and scale ``theta`` at ``x``."""
    return GammaDist(k=k, theta=theta).pdf(x)


# Registry of continuous distributions
distributions: dict[str, type[ContinuousDistribution]] = {
    "normal_dist": NormalDist,
    "exponential_dist": ExponentialDist,
    "uniform_dist": UniformDist,
    "gamma_dist": GammaDist,
}

__all__ = [
    "ExponentialDist",
    "GammaDist",
    "NormalDist",
    "UniformDist",
    "distributions",
    "exponential_cdf",
    "exponential_pdf",
    "gamma_pdf",
    "normal_cdf",
    "normal_pdf",
    "standard_exponential",
    "standard_normal",
    "standard_uniform",
    "uniform_cdf",
    "uniform_pdf",
]
