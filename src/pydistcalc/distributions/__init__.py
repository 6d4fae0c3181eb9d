"""
Distribution implementations.

Provides the continuous variants offered by the calculator (normal, standard
normal, exponential, standard exponential, uniform, standard uniform, gamma)
and the discrete ones (binomial, geometric, negative binomial, Poisson), a
discriminated union over all of them and generic entry points dispatching on
the variant.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Annotated, Any, overload

from pydantic import Field, TypeAdapter

from pydistcalc.distributions import continuous, discrete
from pydistcalc.distributions.core import (
    CURVE_STEPS,
    ContinuousDistribution,
    DiscreteDistribution,
    Distribution,
)
from pydistcalc.exceptions import UnknownDistributionError, custom_error_msg
from pydistcalc.results import Curve, DiscreteResult, EvaluationResult


# Continuous distributions
NormalDist = continuous.NormalDist
ExponentialDist = continuous.ExponentialDist
UniformDist = continuous.UniformDist
GammaDist = continuous.GammaDist

standard_normal = continuous.standard_normal
standard_exponential = continuous.standard_exponential
standard_uniform = continuous.standard_uniform

normal_pdf = continuous.normal_pdf
normal_cdf = continuous.normal_cdf
exponential_pdf = continuous.exponential_pdf
exponential_cdf = continuous.exponential_cdf
uniform_pdf = continuous.uniform_pdf
uniform_cdf = continuous.uniform_cdf
gamma_pdf = continuous.gamma_pdf

# Discrete distributions
BinomialDist = discrete.BinomialDist
GeometricDist = discrete.GeometricDist
NegativeBinomialDist = discrete.NegativeBinomialDist
PoissonDist = discrete.PoissonDist

binomial_pmf = discrete.binomial_pmf
geometric_pmf = discrete.geometric_pmf
negative_binomial_pmf = discrete.negative_binomial_pmf
poisson_pmf = discrete.poisson_pmf

__all__ = [
    "CURVE_STEPS",
    "BinomialDist",
    "ContinuousDistribution",
    "ContinuousDistributionType",
    "DiscreteDistribution",
    "Distribution",
    "DistributionType",
    "ExponentialDist",
    "GammaDist",
    "GeometricDist",
    "NegativeBinomialDist",
    "NormalDist",
    "PoissonDist",
    "UniformDist",
    "binomial_pmf",
    "evaluate",
    "exponential_cdf",
    "exponential_pdf",
    "gamma_pdf",
    "generate_curve",
    "geometric_pmf",
    "get_distribution",
    "negative_binomial_pmf",
    "normal_cdf",
    "normal_pdf",
    "parse_distribution",
    "poisson_pmf",
    "registered_distributions",
    "standard_exponential",
    "standard_normal",
    "standard_uniform",
    "uniform_cdf",
    "uniform_pdf",
    "variants",
]

# Combine all distribution registries
registered_distributions: dict[str, type[Distribution]] = {
    **continuous.distributions,
    **discrete.distributions,
}

# Variants selectable by name, standard ones as fixed parameterizations
variants: Mapping[str, Callable[..., ContinuousDistribution]] = {
    "normal": NormalDist,
    "standard_normal": standard_normal,
    "exponential": ExponentialDist,
    "standard_exponential": standard_exponential,
    "uniform": UniformDist,
    "standard_uniform": standard_uniform,
    "gamma": GammaDist,
}

# Type alias for the continuous variants using discriminated union
ContinuousDistributionType = Annotated[
    continuous.NormalDist
    | continuous.ExponentialDist
    | continuous.UniformDist
    | continuous.GammaDist,
    Field(discriminator="type"),
]

# Type alias for all distribution types using discriminated union
DistributionType = Annotated[
    continuous.NormalDist
    | continuous.ExponentialDist
    | continuous.UniformDist
    | continuous.GammaDist
    | discrete.BinomialDist
    | discrete.GeometricDist
    | discrete.NegativeBinomialDist
    | discrete.PoissonDist,
    Field(discriminator="type"),
]

_distribution_adapter: TypeAdapter[Distribution] = TypeAdapter(
    Annotated[
        DistributionType,
        custom_error_msg(
            {
                "union_tag_invalid": "Unknown distribution type '{tag}' does not match any of the expected distributions: {expected_tags}"
            }
        ),
    ]
)


def parse_distribution(config: Mapping[str, Any]) -> Distribution:
    """
    Create a distribution from a tagged dictionary.

    Args:
        config: Mapping with a ``type`` key naming the distribution (for
            example ``"normal_dist"``) and its parameters.

    Returns:
        Distribution: The validated distribution.

    Raises:
        pydantic.ValidationError: If the type tag is missing or unknown, or a
            parameter has the wrong type.
        InvalidParameterError: If a parameter is outside its domain.
    """
    return _distribution_adapter.validate_python(dict(config))


def get_distribution(name: str, **params: float) -> ContinuousDistribution:
    """
    Look up one of the calculator's continuous variants by name.

    Args:
        name: One of ``normal``, ``standard_normal``, ``exponential``,
            ``standard_exponential``, ``uniform``, ``standard_uniform``, ``gamma``.
        params: Parameters of the variant; standard variants take none.

    Returns:
        ContinuousDistribution: The configured distribution.

    Raises:
        UnknownDistributionError: If ``name`` is not a known variant.
    """
    try:
        factory = variants[name]
    except KeyError:
        msg = f"Unknown distribution variant '{name}', expected one of {sorted(variants)}"
        raise UnknownDistributionError(msg) from None
    return factory(**params)


@overload
def evaluate(dist: ContinuousDistribution, x: float) -> EvaluationResult: ...


@overload
def evaluate(dist: DiscreteDistribution, x: int) -> DiscreteResult: ...


def evaluate(
    dist: ContinuousDistribution | DiscreteDistribution, x: Any
) -> EvaluationResult | DiscreteResult:
    """
    Evaluate any distribution at a point.

    Args:
        dist: The distribution.
        x: Evaluation point, an integer for discrete distributions.

    Returns:
        EvaluationResult for continuous distributions, DiscreteResult for
        discrete ones.
    """
    return dist.evaluate(x)


def generate_curve(dist: ContinuousDistribution, steps: int = CURVE_STEPS) -> Curve:
    """
    Sample a continuous distribution over its plotting range.

    Args:
        dist: The distribution.
        steps: Number of equal intervals, the curve has ``steps + 1`` points.

    Returns:
        Curve: PDF samples, plus CDF samples when the distribution has a CDF.
    """
    return dist.curve(steps)
