"""
Histogram binning of raw sample sets.

Turns a sample set into equal-width bins whose count follows Sturges' rule or
the square-root rule, clamped to a configurable range, and optionally overlays
a normal density scaled to the count axis.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Final

import hist
import numpy as np
import numpy.typing as npt
from pydantic import BaseModel, ConfigDict, Field, model_validator

from pydistcalc.distributions.continuous import NormalDist
from pydistcalc.exceptions import InvalidParameterError
from pydistcalc.stats import SampleLike, as_sample_set

log = logging.getLogger(__name__)


class BinningRule(str, Enum):
    """Estimator for the number of bins from the sample count."""

    STURGES = "sturges"
    SQUARE_ROOT = "sqrt"

    def bin_count(self, n: int) -> int:
        """
        Unclamped number of bins for ``n`` samples.

        Sturges' rule is ``ceil(log2(n) + 1)``, the square-root rule is
        ``ceil(sqrt(n))``. Both give zero bins for ``n == 0``.
        """
        if n <= 0:
            return 0
        if self is BinningRule.STURGES:
            return math.ceil(math.log2(n) + 1)
        return math.ceil(math.sqrt(n))


class BinningPolicy(BaseModel):
    """
    Bin-count policy for :func:`bin_samples`.

    Parameters:
        min_bins: Lower clamp for the bin count.
        max_bins: Upper clamp for the bin count.
        rule: Estimator for the unclamped bin count.
    """

    model_config = ConfigDict(frozen=True)

    min_bins: int = 5
    max_bins: int = 30
    rule: BinningRule = BinningRule.STURGES

    @model_validator(mode="after")
    def check_bounds(self) -> BinningPolicy:
        """Validate that 1 <= min_bins <= max_bins."""
        if self.min_bins < 1:
            msg = f"BinningPolicy: min_bins must be >= 1, got {self.min_bins}"
            raise InvalidParameterError(msg)
        if self.max_bins < self.min_bins:
            msg = f"BinningPolicy: max_bins ({self.max_bins}) must be >= min_bins ({self.min_bins})"
            raise InvalidParameterError(msg)
        return self

    def bin_count(self, n: int) -> int:
        """Bin count for ``n`` samples, clamped to ``[min_bins, max_bins]``."""
        return max(self.min_bins, min(self.max_bins, self.rule.bin_count(n)))


#: Sturges' rule clamped to [5, 30], for general continuous data.
GENERAL_BINNING: Final = BinningPolicy(
    min_bins=5, max_bins=30, rule=BinningRule.STURGES
)
#: Square-root rule clamped to [5, 20], for small datasets of counts.
COUNT_BINNING: Final = BinningPolicy(
    min_bins=5, max_bins=20, rule=BinningRule.SQUARE_ROOT
)


def label_precision(value_range: float) -> int | None:
    """
    Number of decimals used in bin labels for data spanning ``value_range``.

    Returns:
        3 below 1, 2 below 10, 1 below 1000, and ``None`` (round to integers)
        from 1000 upwards.
    """
    if value_range < 1:
        return 3
    if value_range < 10:
        return 2
    if value_range >= 1000:
        return None
    return 1


def format_bin_label(start: float, end: float, precision: int | None) -> str:
    """Format a bin as ``"start-end"``; a precision of ``None`` rounds to integers."""
    if precision is None:
        return f"{round(start)}-{round(end)}"
    return f"{start:.{precision}f}-{end:.{precision}f}"


class Histogram(BaseModel):
    """
    Equal-width frequency distribution of a sample set.

    Attributes:
        edges: ``(start, end)`` of every bin, in increasing order.
        counts: Number of samples in each bin.
        bin_size: Width of every bin, zero for a single degenerate bin.
        labels: Display label of each bin.
        overlay: Fitted density scaled to the count axis at each bin center,
            if requested.
    """

    model_config = ConfigDict(frozen=True)

    edges: tuple[tuple[float, float], ...] = Field(default=(), repr=False)
    counts: tuple[int, ...] = ()
    bin_size: float = 0.0
    labels: tuple[str, ...] = Field(default=(), repr=False)
    overlay: tuple[float, ...] | None = Field(default=None, repr=False)

    @model_validator(mode="after")
    def check_alignment(self) -> Histogram:
        """Validate that edges, counts, labels and overlay describe the same bins."""
        n_bins = len(self.edges)
        if len(self.counts) != n_bins or len(self.labels) != n_bins:
            msg = (
                f"Histogram: {n_bins} edges, {len(self.counts)} counts and "
                f"{len(self.labels)} labels do not align"
            )
            raise ValueError(msg)
        if self.overlay is not None and len(self.overlay) != n_bins:
            msg = f"Histogram: overlay has {len(self.overlay)} values for {n_bins} bins"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        """Number of binned samples."""
        return sum(self.counts)

    @property
    def centers(self) -> npt.NDArray[np.float64]:
        """Midpoint of every bin."""
        return np.array([(start + end) / 2 for start, end in self.edges], dtype=np.float64)

    def to_hist(self) -> hist.Hist:
        """
        Convert this histogram to a :class:`hist.Hist` with a regular axis.

        A degenerate single bin of zero width is widened to one unit centered
        on the common value.

        Returns:
            hist.Hist: Histogram with integer storage holding :attr:`counts`.

        Raises:
            ValueError: If the histogram has no bins.
        """
        if not self.edges:
            msg = "Cannot convert an empty histogram to hist.Hist"
            raise ValueError(msg)
        lower = self.edges[0][0]
        upper = self.edges[-1][1]
        if upper <= lower:
            lower, upper = lower - 0.5, upper + 0.5
        h = hist.Hist(
            hist.axis.Regular(len(self.counts), lower, upper, name="x"),
            storage=hist.storage.Int64(),
        )
        h[...] = np.asarray(self.counts, dtype=np.int64)
        return h


def bin_samples(
    samples: SampleLike,
    min_bins: int = GENERAL_BINNING.min_bins,
    max_bins: int = GENERAL_BINNING.max_bins,
    *,
    rule: BinningRule | str = GENERAL_BINNING.rule,
    normal: NormalDist | tuple[float, float] | None = None,
) -> Histogram:
    """
    Bin a sample set into equal-width bins.

    The bin count comes from ``rule`` clamped to ``[min_bins, max_bins]``.
    Each sample lands in bin ``floor((value - min) / bin_size)``, clamped to
    the valid index range so that the maximum falls into the last bin. When all
    samples are identical a single bin holds all of them.

    Args:
        samples: Observations.
        min_bins: Lower clamp for the bin count.
        max_bins: Upper clamp for the bin count.
        rule: ``"sturges"`` or ``"sqrt"``.
        normal: Normal distribution, or ``(mean, std_dev)`` pair, to overlay.
            Its density at each bin center is scaled by ``n * bin_size``.

    Returns:
        Histogram: The bins; empty input gives a histogram without bins.

    Raises:
        InvalidParameterError: If the bin bounds are invalid, a sample is not
            finite, the sample range overflows a float, or the overlay
            parameters are outside their domain.
    """
    policy = BinningPolicy(min_bins=min_bins, max_bins=max_bins, rule=BinningRule(rule))
    return _bin(as_sample_set(samples).to_numpy(), policy, _as_normal(normal))


def bin_with_policy(
    samples: SampleLike,
    policy: BinningPolicy = GENERAL_BINNING,
    *,
    normal: NormalDist | tuple[float, float] | None = None,
) -> Histogram:
    """Same as :func:`bin_samples` with the bin-count settings taken from ``policy``."""
    return _bin(as_sample_set(samples).to_numpy(), policy, _as_normal(normal))


def _as_normal(normal: NormalDist | tuple[float, float] | None) -> NormalDist | None:
    if normal is None or isinstance(normal, NormalDist):
        return normal
    mu, sigma = normal
    return NormalDist(mu=mu, sigma=sigma)


def _bin(
    data: npt.NDArray[np.float64], policy: BinningPolicy, normal: NormalDist | None
) -> Histogram:
    n = int(data.size)
    if n == 0:
        return Histogram(overlay=() if normal is not None else None)

    lowest = float(np.min(data))
    highest = float(np.max(data))
    value_range = highest - lowest
    if not math.isfinite(value_range):
        msg = f"Sample range [{lowest:g}, {highest:g}] is too wide to bin, its width overflows"
        raise InvalidParameterError(msg)

    bin_count = policy.bin_count(n)
    bin_size = value_range / bin_count

    if bin_size == 0:
        # also covers a positive range that underflows when split
        log.debug("samples span only [%g, %g], using a single bin", lowest, highest)
        edges: list[tuple[float, float]] = [(lowest, highest)]
        counts = [n]
        bin_size = 0.0
    else:
        log.debug(
            "binning %d samples into %d bins of width %g (%s rule)",
            n,
            bin_count,
            bin_size,
            policy.rule.value,
        )
        indices = np.floor((data - lowest) / bin_size).astype(np.int64)
        indices = np.clip(indices, 0, bin_count - 1)
        counts = np.bincount(indices, minlength=bin_count).tolist()
        edges = []
        for i in range(bin_count):
            start = lowest + i * bin_size
            edges.append((start, start + bin_size))

    precision = label_precision(value_range)
    labels = [format_bin_label(start, end, precision) for start, end in edges]

    overlay = None
    if normal is not None:
        # a zero-width bin carries no density mass
        scale = n * bin_size
        overlay = [normal.pdf((start + end) / 2) * scale for start, end in edges]

    return Histogram(
        edges=tuple(edges),
        counts=tuple(counts),
        bin_size=bin_size,
        labels=tuple(labels),
        overlay=tuple(overlay) if overlay is not None else None,
    )


__all__ = [
    "COUNT_BINNING",
    "GENERAL_BINNING",
    "BinningPolicy",
    "BinningRule",
    "Histogram",
    "bin_samples",
    "bin_with_policy",
    "format_bin_label",
    "label_precision",
]
