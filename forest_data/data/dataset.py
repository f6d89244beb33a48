"""Attribute metadata shared by every decoded instance."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from forest_data.data.descriptor import AttributeKind, format_descriptor, parse_descriptor
from forest_data.data.vocabulary import CodeTable
from forest_data.errors import MalformedDescriptor, UnknownCategoricalValue, UnknownLabelValue


class Dataset:
    """Attribute kinds plus the value-to-code tables built from the data.

    Columns are addressed two ways. Raw column indices follow the descriptor
    and the data rows. Feature indices count only numerical and categorical
    columns, in raw order, skipping ignored columns and the label.
    """

    def __init__(self, kinds: Sequence[AttributeKind], tables: Mapping[int, CodeTable]) -> None:
        self._kinds: List[AttributeKind] = list(kinds)
        label_columns = [col for col, kind in enumerate(self._kinds) if kind.is_label]
        if len(label_columns) != 1:
            raise MalformedDescriptor(f"Dataset requires exactly one label column, found {len(label_columns)}.")
        self._label_column = label_columns[0]
        self._feature_columns = [
            col for col, kind in enumerate(self._kinds) if kind.is_numerical or kind.is_categorical
        ]

        self._tables: Dict[int, CodeTable] = {}
        for col, kind in enumerate(self._kinds):
            if kind.is_coded:
                # Private copies keep the finished dataset read-only.
                self._tables[col] = CodeTable.from_values(tables[col].to_list()) if col in tables else CodeTable()
        extra = set(tables) - set(self._tables)
        if extra:
            raise ValueError(f"Code tables given for non-coded columns: {sorted(extra)}")

    @property
    def kinds(self) -> List[AttributeKind]:
        return list(self._kinds)

    @property
    def nb_columns(self) -> int:
        return len(self._kinds)

    @property
    def descriptor(self) -> str:
        return format_descriptor(self._kinds)

    @property
    def label_column(self) -> int:
        return self._label_column

    @property
    def feature_columns(self) -> List[int]:
        return list(self._feature_columns)

    @property
    def nb_attributes(self) -> int:
        return len(self._feature_columns)

    def _feature_kind(self, attribute: int) -> AttributeKind:
        if not 0 <= attribute < len(self._feature_columns):
            raise IndexError(f"Attribute index {attribute} out of range (0..{len(self._feature_columns) - 1}).")
        return self._kinds[self._feature_columns[attribute]]

    def is_numerical(self, attribute: int) -> bool:
        return self._feature_kind(attribute).is_numerical

    def is_categorical(self, attribute: int) -> bool:
        return self._feature_kind(attribute).is_categorical

    def is_label(self, attribute: int) -> bool:
        # The label never has a feature index; kept for symmetry with the other predicates.
        return self._feature_kind(attribute).is_label

    def _categorical_table(self, attribute: int) -> CodeTable:
        if not self.is_categorical(attribute):
            raise ValueError(f"Attribute {attribute} is numerical and has no values.")
        return self._tables[self._feature_columns[attribute]]

    def value_of(self, attribute: int, value: str) -> int:
        """Code assigned to ``value`` for the categorical attribute."""

        table = self._categorical_table(attribute)
        try:
            return table.code_of(value)
        except KeyError as exc:
            raise UnknownCategoricalValue(attribute, value) from exc

    def nb_values(self, attribute: int) -> int:
        return len(self._categorical_table(attribute))

    def values(self, attribute: int) -> List[str]:
        return self._categorical_table(attribute).to_list()

    @property
    def nb_labels(self) -> int:
        return len(self._tables[self._label_column])

    @property
    def labels(self) -> List[str]:
        return self._tables[self._label_column].to_list()

    def label_code(self, label: str) -> int:
        try:
            return self._tables[self._label_column].code_of(label)
        except KeyError as exc:
            raise UnknownLabelValue(label) from exc

    def label_of(self, code: int) -> str:
        try:
            return self._tables[self._label_column].value_of(code)
        except IndexError as exc:
            raise UnknownLabelValue(code) from exc

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._kinds == other._kinds and self._tables == other._tables

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Dataset(descriptor={self.descriptor!r}, nb_attributes={self.nb_attributes}, nb_labels={self.nb_labels})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "descriptor": self.descriptor,
            "values": {str(col): table.to_list() for col, table in self._tables.items()},
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Dataset":
        try:
            descriptor = payload["descriptor"]
            raw_values = payload.get("values", {})
        except (KeyError, AttributeError) as exc:
            raise ValueError("Dataset payload must contain a 'descriptor' entry.") from exc
        kinds = parse_descriptor(descriptor)
        tables = {int(col): CodeTable.from_values(values) for col, values in raw_values.items()}
        return cls(kinds, tables)

    def save(self, path: Path) -> Path:
        path = Path(path)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(self.to_dict(), fh, indent=2)
        return path

    @classmethod
    def load(cls, path: Path) -> "Dataset":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dataset file not found at {path}.")
        with path.open("r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))

    def summary(self) -> pd.DataFrame:
        """One row per raw column with its kind, feature index and vocabulary size."""

        feature_index: Dict[int, int] = {col: idx for idx, col in enumerate(self._feature_columns)}
        rows = []
        for col, kind in enumerate(self._kinds):
            table: Optional[CodeTable] = self._tables.get(col)
            rows.append(
                {
                    "column": col,
                    "kind": kind.name.lower(),
                    "feature_index": feature_index.get(col),
                    "nb_values": len(table) if table is not None else None,
                }
            )
        summary = pd.DataFrame(rows, columns=["column", "kind", "feature_index", "nb_values"])
        summary["feature_index"] = summary["feature_index"].astype("Int64")
        summary["nb_values"] = summary["nb_values"].astype("Int64")
        return summary
