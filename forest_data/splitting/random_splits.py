"""Random train/test splitting of loaded data."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from sklearn.model_selection import train_test_split

from forest_data.data import Data


@dataclass(frozen=True)
class SplitConfig:
    """Configuration for random (optionally stratified) splits."""

    test_size: float = 0.2
    random_state: int = 42
    stratify: bool = True


@dataclass
class DataSplits:
    """Container holding TRAIN/TEST data bound to the same dataset."""

    train: Data
    test: Data


def _can_stratify(labels: np.ndarray, test_size: float) -> bool:
    if len(labels) == 0:
        return False
    counts = np.bincount(labels)
    counts = counts[counts > 0]
    n_classes = len(counts)
    if n_classes < 2 or counts.min() < 2:
        return False
    # Each side of the split must be able to hold one row per class.
    n_test = math.ceil(test_size * len(labels))
    n_train = len(labels) - n_test
    return n_test >= n_classes and n_train >= n_classes


def split_data(data: Data, config: SplitConfig = SplitConfig()) -> DataSplits:
    """Split instances at random while preserving label ratios when possible.

    Instance ids are kept as loaded, so each split can be traced back to its rows.
    """

    if data.is_empty():
        raise ValueError("Cannot split empty data.")

    labels = np.asarray(data.labels(), dtype=np.int64)
    stratify = labels if config.stratify and _can_stratify(labels, config.test_size) else None
    positions = np.arange(len(data))
    train_idx, test_idx = train_test_split(
        positions,
        test_size=config.test_size,
        stratify=stratify,
        random_state=config.random_state,
    )

    return DataSplits(
        train=Data(data.dataset, [data.get(int(idx)) for idx in sorted(train_idx)]),
        test=Data(data.dataset, [data.get(int(idx)) for idx in sorted(test_idx)]),
    )
