"""
Unit tests for histogram binning.

Covers the bin-count rules and their clamping, the max-value and zero-range
edge cases, bin labels, the fitted normal overlay and the hist export.
"""

from __future__ import annotations

import logging

import hist
import numpy as np
import pytest
from pydantic import ValidationError

from pydistcalc import Histogram, InvalidParameterError, bin_samples
from pydistcalc.distributions import NormalDist, normal_pdf
from pydistcalc.histogram import (
    COUNT_BINNING,
    GENERAL_BINNING,
    BinningPolicy,
    BinningRule,
    bin_with_policy,
    format_bin_label,
    label_precision,
)
from pydistcalc.stats import fit_normal


class TestBinningRule:
    """Test the bin-count estimators."""

    @pytest.mark.parametrize(
        ("n", "expected"), [(1, 1), (2, 2), (8, 4), (10, 6), (40, 7), (100, 8)]
    )
    def test_sturges(self, n, expected):
        """Test ceil(log2(n) + 1)."""
        assert BinningRule.STURGES.bin_count(n) == expected

    @pytest.mark.parametrize(
        ("n", "expected"), [(1, 1), (4, 2), (10, 4), (40, 7), (100, 10)]
    )
    def test_square_root(self, n, expected):
        """Test ceil(sqrt(n))."""
        assert BinningRule.SQUARE_ROOT.bin_count(n) == expected

    def test_no_samples(self):
        """Test that zero samples do not reach log2(0)."""
        assert BinningRule.STURGES.bin_count(0) == 0
        assert BinningRule.SQUARE_ROOT.bin_count(0) == 0

    def test_rule_from_string(self):
        """Test rules can be selected by value."""
        assert BinningRule("sturges") is BinningRule.STURGES
        assert BinningRule("sqrt") is BinningRule.SQUARE_ROOT


class TestBinningPolicy:
    """Test clamping and policy validation."""

    def test_general_binning_clamps(self):
        """Test Sturges' rule clamped to [5, 30]."""
        assert GENERAL_BINNING.bin_count(1) == 5
        assert GENERAL_BINNING.bin_count(100) == 8
        assert GENERAL_BINNING.bin_count(10**12) == 30

    def test_count_binning_clamps(self):
        """Test the square-root rule clamped to [5, 20]."""
        assert COUNT_BINNING.bin_count(9) == 5
        assert COUNT_BINNING.bin_count(100) == 10
        assert COUNT_BINNING.bin_count(1000) == 20

    @pytest.mark.parametrize(("min_bins", "max_bins"), [(0, 10), (10, 5)])
    def test_invalid_policy(self, min_bins, max_bins):
        """Test that the clamp range must be non-empty and positive."""
        with pytest.raises(InvalidParameterError):
            BinningPolicy(min_bins=min_bins, max_bins=max_bins)
        with pytest.raises(InvalidParameterError):
            bin_samples([1.0, 2.0], min_bins, max_bins)

    def test_unknown_rule(self):
        """Test an unknown rule name is rejected."""
        with pytest.raises(ValueError, match="scott"):
            bin_samples([1.0, 2.0], rule="scott")


class TestBinSamples:
    """Test the binning algorithm."""

    def test_textbook_samples(self, textbook_samples):
        """Test six bins of width 0.5 over [1, 4]."""
        histogram = bin_samples(textbook_samples)
        assert len(histogram) == 6
        assert histogram.bin_size == 0.5
        assert histogram.counts == (1, 0, 2, 0, 3, 4)
        assert histogram.edges[0] == (1.0, 1.5)
        assert histogram.edges[-1] == pytest.approx((3.5, 4.0))

    def test_cricket_sixes(self, cricket_sixes):
        """Test the sixes dataset in seven bins of width two."""
        histogram = bin_samples(cricket_sixes)
        assert histogram.counts == (4, 7, 10, 9, 6, 3, 1)
        assert histogram.bin_size == 2.0
        assert histogram.labels[0] == "4.0-6.0"
        assert histogram.labels[-1] == "16.0-18.0"

    def test_cricket_sixes_count_binning(self, cricket_sixes):
        """Test the square-root policy on the same data."""
        histogram = bin_with_policy(cricket_sixes, COUNT_BINNING)
        assert len(histogram) == 7
        assert histogram.total == 40

    def test_maximum_lands_in_last_bin(self):
        """Test the sample equal to max is clamped into the last bin."""
        histogram = bin_samples([0.0, 10.0])
        assert histogram.counts == (1, 0, 0, 0, 1)
        assert histogram.total == 2

    def test_all_samples_identical(self):
        """Test zero range produces one bin holding every sample."""
        histogram = bin_samples([7.0, 7.0, 7.0])
        assert histogram.counts == (3,)
        assert histogram.edges == ((7.0, 7.0),)
        assert histogram.bin_size == 0.0
        assert histogram.labels == ("7.000-7.000",)

    def test_single_sample(self):
        """Test a single sample gives a single bin."""
        histogram = bin_samples([3.5])
        assert histogram.counts == (1,)

    def test_empty_samples(self):
        """Test empty input returns an empty histogram, not an error."""
        histogram = bin_samples([])
        assert len(histogram) == 0
        assert histogram.counts == ()
        assert histogram.edges == ()
        assert histogram.total == 0
        assert histogram.overlay is None

    def test_square_root_rule(self):
        """Test the square-root rule on a hundred samples."""
        histogram = bin_samples(range(100), 5, 20, rule="sqrt")
        assert len(histogram) == 10
        assert histogram.total == 100

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    @pytest.mark.parametrize("size", [1, 2, 17, 250, 4096])
    def test_no_sample_lost(self, seed, size):
        """Test every sample is counted exactly once."""
        rng = np.random.default_rng(seed)
        samples = rng.normal(loc=50.0, scale=12.0, size=size)
        histogram = bin_samples(samples)
        assert histogram.total == size
        assert all(count >= 0 for count in histogram.counts)

    def test_bins_are_contiguous(self, cricket_sixes):
        """Test each bin starts where the previous one ends."""
        histogram = bin_samples(cricket_sixes)
        for (_, end), (start, _) in zip(
            histogram.edges, histogram.edges[1:], strict=False
        ):
            assert start == pytest.approx(end)
        np.testing.assert_allclose(histogram.centers, [5, 7, 9, 11, 13, 15, 17])

    def test_non_finite_samples(self):
        """Test NaN samples are rejected before binning."""
        with pytest.raises(InvalidParameterError):
            bin_samples([1.0, float("nan")])

    def test_range_overflow_rejected(self):
        """Test finite samples whose spread overflows a float are rejected."""
        with pytest.raises(InvalidParameterError, match="too wide"):
            bin_samples([-1e308, 1e308])

    def test_range_too_narrow_to_split(self):
        """Test a range that underflows when divided into bins gives one bin."""
        histogram = bin_samples([0.0, 5e-324])
        assert histogram.counts == (2,)
        assert histogram.bin_size == 0.0
        assert histogram.total == 2

    def test_bin_count_is_logged(self, caplog, cricket_sixes):
        """Test the chosen binning is reported at debug level."""
        caplog.set_level(logging.DEBUG, logger="pydistcalc")
        bin_samples(cricket_sixes)
        assert "into 7 bins" in caplog.text


class TestLabels:
    """Test bin label formatting."""

    @pytest.mark.parametrize(
        ("value_range", "expected"),
        [(0.5, 3), (5.0, 2), (50.0, 1), (500.0, 1), (999.9, 1), (1000.0, None)],
    )
    def test_label_precision(self, value_range, expected):
        """Test decimals shrink as the range grows."""
        assert label_precision(value_range) == expected

    def test_format_bin_label(self):
        """Test fixed-point and integer labels."""
        assert format_bin_label(0.1234, 0.5678, 3) == "0.123-0.568"
        assert format_bin_label(1000.2, 2000.7, None) == "1000-2001"

    def test_large_range_labels(self):
        """Test labels are integers for ranges of at least 1000."""
        histogram = bin_samples([0.0, 5000.0])
        assert histogram.labels[0] == "0-1000"


class TestOverlay:
    """Test the fitted normal overlay."""

    def test_overlay_scaling(self, textbook_samples):
        """Test overlay = pdf(center) * n * bin_size."""
        histogram = bin_samples(textbook_samples, normal=(3.0, 1.0))
        assert histogram.overlay is not None
        expected = [
            normal_pdf(center, 3.0, 1.0) * 10 * 0.5 for center in histogram.centers
        ]
        np.testing.assert_allclose(histogram.overlay, expected)

    def test_overlay_from_distribution(self, cricket_sixes):
        """Test a fitted NormalDist can be passed directly."""
        dist = fit_normal(cricket_sixes)
        by_dist = bin_samples(cricket_sixes, normal=dist)
        by_pair = bin_samples(cricket_sixes, normal=(dist.mu, dist.sigma))
        assert by_dist.overlay == by_pair.overlay
        # the expected counts cover most of the data
        assert sum(by_dist.overlay) == pytest.approx(40, rel=0.1)

    def test_overlay_invalid_sigma(self, textbook_samples):
        """Test a degenerate overlay is rejected."""
        with pytest.raises(InvalidParameterError):
            bin_samples(textbook_samples, normal=(3.0, 0.0))

    def test_overlay_single_bin(self):
        """Test a zero-width bin has zero expected count."""
        histogram = bin_samples([2.0, 2.0], normal=NormalDist(mu=2.0, sigma=1.0))
        assert histogram.overlay == (0.0,)


class TestHistogramModel:
    """Test the Histogram value type and its export."""

    def test_misaligned_counts(self):
        """Test edges, counts and labels must align."""
        with pytest.raises(ValidationError, match="do not align"):
            Histogram(edges=((0.0, 1.0),), counts=(1, 2), labels=("0-1",))

    def test_misaligned_overlay(self):
        """Test the overlay must have one value per bin."""
        with pytest.raises(ValidationError, match="overlay"):
            Histogram(
                edges=((0.0, 1.0),), counts=(1,), labels=("0-1",), overlay=(0.1, 0.2)
            )

    def test_to_hist(self, cricket_sixes):
        """Test the export keeps counts and edges."""
        h = bin_samples(cricket_sixes).to_hist()
        assert isinstance(h, hist.Hist)
        np.testing.assert_array_equal(h.values(), [4, 7, 10, 9, 6, 3, 1])
        np.testing.assert_allclose(h.axes[0].edges, np.arange(4, 19, 2))

    def test_to_hist_degenerate(self):
        """Test a zero-width bin is exported one unit wide."""
        h = bin_samples([7.0, 7.0]).to_hist()
        np.testing.assert_allclose(h.axes[0].edges, [6.5, 7.5])
        np.testing.assert_array_equal(h.values(), [2])

    def test_to_hist_empty(self):
        """Test an empty histogram cannot be exported."""
        with pytest.raises(ValueError, match="empty"):
            bin_samples([]).to_hist()
