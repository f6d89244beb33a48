"""Decoded rows and the container holding them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union, overload

import numpy as np
import pandas as pd

from forest_data.data.dataset import Dataset

DEFAULT_RANDOM_STATE = 42


@dataclass(frozen=True)
class Instance:
    """One loaded row: sequential id, dense feature vector and label code."""

    id: int
    values: Tuple[float, ...]
    label: Optional[int] = None

    def get(self, attribute: int) -> float:
        return self.values[attribute]

    def __len__(self) -> int:
        return len(self.values)


class Data(Sequence[Instance]):
    """Ordered instances together with the dataset they were decoded against."""

    def __init__(self, dataset: Dataset, instances: Optional[Sequence[Instance]] = None) -> None:
        self._dataset = dataset
        self._instances: List[Instance] = list(instances or [])

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def size(self) -> int:
        return len(self._instances)

    def is_empty(self) -> bool:
        return not self._instances

    def get(self, index: int) -> Instance:
        return self._instances[index]

    @overload
    def __getitem__(self, index: int) -> Instance: ...

    @overload
    def __getitem__(self, index: slice) -> "Data": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Instance, "Data"]:
        if isinstance(index, slice):
            return Data(self._dataset, self._instances[index])
        return self._instances[index]

    def __iter__(self) -> Iterator[Instance]:
        return iter(self._instances)

    def __len__(self) -> int:
        return len(self._instances)

    def __repr__(self) -> str:
        return f"Data(size={self.size}, dataset={self._dataset!r})"

    def labels(self) -> List[int]:
        return [instance.label for instance in self._instances]

    def count_labels(self) -> np.ndarray:
        """Number of instances per label code."""

        counts = np.zeros(self._dataset.nb_labels, dtype=np.int64)
        for instance in self._instances:
            counts[instance.label] += 1
        return counts

    def majority_label(self, rng: Optional[np.random.Generator] = None) -> int:
        """Most frequent label code; ties are broken at random."""

        if self.is_empty():
            raise ValueError("Cannot compute the majority label of empty data.")
        counts = self.count_labels()
        candidates = np.flatnonzero(counts == counts.max())
        if len(candidates) == 1:
            return int(candidates[0])
        rng = rng or np.random.default_rng(DEFAULT_RANDOM_STATE)
        return int(rng.choice(candidates))

    def identical_label(self) -> bool:
        if self.is_empty():
            return True
        first = self._instances[0].label
        return all(instance.label == first for instance in self._instances)

    def is_identical(self) -> bool:
        """Whether every instance has the same feature vector."""

        if self.is_empty():
            return True
        first = self._instances[0].values
        return all(instance.values == first for instance in self._instances)

    def values(self, attribute: int) -> List[float]:
        """Sorted distinct values taken by ``attribute``."""

        return sorted({instance.get(attribute) for instance in self._instances})

    def subset(self, predicate: Callable[[Instance], bool]) -> "Data":
        return Data(self._dataset, [instance for instance in self._instances if predicate(instance)])

    def bagging(self, rng: np.random.Generator) -> "Data":
        """Bootstrap sample of the same size, drawn with replacement."""

        sampled, _ = self.bagging_with_oob(rng)
        return sampled

    def bagging_with_oob(self, rng: np.random.Generator) -> Tuple["Data", "Data"]:
        """Bootstrap sample and the out-of-bag instances it never drew."""

        size = len(self._instances)
        if size == 0:
            return Data(self._dataset), Data(self._dataset)
        drawn = rng.integers(0, size, size=size)
        sampled = np.zeros(size, dtype=bool)
        sampled[drawn] = True
        bag = Data(self._dataset, [self._instances[idx] for idx in drawn])
        oob = Data(self._dataset, [inst for idx, inst in enumerate(self._instances) if not sampled[idx]])
        return bag, oob

    def rsplit(self, rng: np.random.Generator, subsize: int) -> "Data":
        """Remove ``subsize`` random instances from this data and return them."""

        if not 0 <= subsize <= len(self._instances):
            raise ValueError(f"Cannot split {subsize} instances out of {len(self._instances)}.")
        removed: List[Instance] = []
        for _ in range(subsize):
            idx = int(rng.integers(0, len(self._instances)))
            removed.append(self._instances.pop(idx))
        return Data(self._dataset, removed)

    def to_numpy(self) -> Tuple[np.ndarray, np.ndarray]:
        """Feature matrix ``X`` and label-code vector ``y``."""

        X = np.array([instance.values for instance in self._instances], dtype=float)
        X = X.reshape(len(self._instances), self._dataset.nb_attributes)
        y = np.array(self.labels(), dtype=np.int64)
        return X, y

    def to_frame(self) -> pd.DataFrame:
        columns = [f"f{idx}" for idx in range(self._dataset.nb_attributes)]
        X, y = self.to_numpy()
        frame = pd.DataFrame(X, columns=columns, index=pd.Index([inst.id for inst in self._instances], name="id"))
        frame["label"] = y
        return frame
