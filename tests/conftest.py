from __future__ import annotations

import pytest

# Sixes hit per T20I innings, 20 matches with two innings each
CRICKET_SIXES = [
    8, 11, 14, 7, 15, 9, 6, 7, 12, 10,
    4, 5, 8, 9, 18, 11, 7, 5, 13, 10,
    9, 7, 8, 6, 10, 12, 9, 11, 13, 12,
    5, 6, 9, 8, 11, 10, 10, 9, 14, 12,
]  # fmt: skip


@pytest.fixture
def cricket_sixes():
    """Forty innings worth of sixes, integers between 4 and 18."""
    return list(CRICKET_SIXES)


@pytest.fixture
def textbook_samples():
    """Small dataset with mean 3, population variance 1 and median 3."""
    return [1, 2, 2, 3, 3, 3, 4, 4, 4, 4]
