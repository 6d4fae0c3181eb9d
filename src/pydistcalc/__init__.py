"""
Copyright (c) 2025 pydistcalc developers. All rights reserved.

pydistcalc: probability distributions, descriptive statistics and histogram binning
"""

from __future__ import annotations

from pydistcalc._version import version as __version__
from pydistcalc.distributions import (
    ExponentialDist,
    GammaDist,
    NormalDist,
    UniformDist,
    evaluate,
    generate_curve,
    get_distribution,
    parse_distribution,
)
from pydistcalc.exceptions import (
    DistCalcException,
    InvalidParameterError,
    UnknownDistributionError,
)
from pydistcalc.histogram import Histogram, bin_samples
from pydistcalc.results import Curve, EvaluationResult
from pydistcalc.stats import SampleSet, SummaryStatistics, describe

__all__ = [
    "Curve",
    "DistCalcException",
    "EvaluationResult",
    "ExponentialDist",
    "GammaDist",
    "Histogram",
    "InvalidParameterError",
    "NormalDist",
    "SampleSet",
    "SummaryStatistics",
    "UniformDist",
    "UnknownDistributionError",
    "__version__",
    "bin_samples",
    "describe",
    "evaluate",
    "generate_curve",
    "get_distribution",
    "parse_distribution",
]
