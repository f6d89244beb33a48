"""Shared fixtures: random descriptors and rows with injected missing values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np
import pytest

from forest_data.data import AttributeKind, format_descriptor

NB_ATTRIBUTES = 10
DATASIZE = 100
NB_CATEGORIES = 5
NB_CLASSES = 3


@dataclass
class RandomSource:
    descriptor: str
    kinds: List[AttributeKind]
    data: np.ndarray
    rows: List[str]
    missings: List[int]


def random_kinds(rng: np.random.Generator, nb_attributes: int) -> List[AttributeKind]:
    choices = [AttributeKind.IGNORED, AttributeKind.NUMERICAL, AttributeKind.CATEGORICAL]
    kinds = [choices[idx] for idx in rng.integers(0, len(choices), size=nb_attributes)]
    kinds[int(rng.integers(0, nb_attributes))] = AttributeKind.LABEL
    return kinds


def random_doubles(rng: np.random.Generator, kinds: List[AttributeKind], size: int) -> np.ndarray:
    data = np.empty((size, len(kinds)), dtype=float)
    for col, kind in enumerate(kinds):
        if kind.is_categorical:
            data[:, col] = rng.integers(0, NB_CATEGORIES, size=size)
        elif kind.is_label:
            data[:, col] = rng.integers(0, NB_CLASSES, size=size)
        else:
            data[:, col] = rng.normal(scale=100.0, size=size)
    return data


def prepare_rows(
    rng: np.random.Generator,
    data: np.ndarray,
    kinds: List[AttributeKind],
    missing_rate: float,
) -> tuple:
    """Render rows as CSV text, replacing one non-ignored field by '?' in some rows."""

    candidates = [col for col, kind in enumerate(kinds) if not kind.is_ignored]
    rows: List[str] = []
    missings: List[int] = []
    for index, vector in enumerate(data):
        missing_col = -1
        if rng.random() < missing_rate:
            missings.append(index)
            missing_col = candidates[int(rng.integers(0, len(candidates)))]
        fields = ["?" if col == missing_col else repr(float(value)) for col, value in enumerate(vector)]
        # Trailing delimiter, as written by the original data generator.
        rows.append(",".join(fields) + ",")
    return rows, missings


def make_random_source(seed: int, missing_rate: float = 0.1) -> RandomSource:
    rng = np.random.default_rng(seed)
    kinds = random_kinds(rng, NB_ATTRIBUTES)
    data = random_doubles(rng, kinds, DATASIZE)
    rows, missings = prepare_rows(rng, data, kinds, missing_rate)
    return RandomSource(format_descriptor(kinds), kinds, data, rows, missings)


@pytest.fixture(params=[1, 7, 42])
def random_source(request) -> RandomSource:
    return make_random_source(request.param)


@pytest.fixture
def complete_source() -> RandomSource:
    return make_random_source(42, missing_rate=0.0)


@pytest.fixture
def color_rows() -> List[str]:
    return ["1.0,red,yes", "2.0,blue,no", "?,red,yes"]


@pytest.fixture
def make_source():
    return make_random_source
