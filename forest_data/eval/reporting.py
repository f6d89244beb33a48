"""Markdown reporting for generated datasets and loaded data."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from forest_data.data import Data, Dataset

REPORT_FILENAME = "dataset_report.md"
MAX_LISTED_VALUES = 10


def _markdown_table(headers: List[str], rows: Iterable[Iterable]) -> str:
    header_line = "| " + " | ".join(headers) + " |"
    separator = "| " + " | ".join("---" for _ in headers) + " |"
    row_lines = ["| " + " | ".join(str(item) for item in row) + " |" for row in rows]
    return "\n".join([header_line, separator, *row_lines])


def _format_cell(value) -> str:
    if pd.isna(value):
        return "-"
    return str(value)


def _preview_values(values: List[str]) -> str:
    shown = ", ".join(values[:MAX_LISTED_VALUES])
    if len(values) > MAX_LISTED_VALUES:
        shown += f", ... (+{len(values) - MAX_LISTED_VALUES})"
    return shown


def build_attribute_table(dataset: Dataset) -> str:
    summary = dataset.summary()
    rows = []
    for record in summary.itertuples(index=False):
        if record.kind == "label":
            preview = _preview_values(dataset.labels)
        elif record.kind == "categorical":
            preview = _preview_values(dataset.values(int(record.feature_index)))
        else:
            preview = ""
        rows.append(
            [
                record.column,
                record.kind,
                _format_cell(record.feature_index),
                _format_cell(record.nb_values),
                preview,
            ]
        )
    return _markdown_table(["Column", "Kind", "Attribute", "Distinct Values", "Values"], rows)


def build_label_section(data: Data) -> str:
    lines = ["## Label Distribution"]
    if data.is_empty():
        lines.append("_No instances loaded._")
        return "\n".join(lines)

    counts = data.count_labels()
    total = int(counts.sum())
    rows = [
        [code, data.dataset.label_of(code), int(count), f"{count / total:.4f}"]
        for code, count in enumerate(counts)
    ]
    lines.append(_markdown_table(["Code", "Label", "Count", "Share"], rows))
    return "\n".join(lines)


def write_dataset_report(
    dataset: Dataset,
    data: Data,
    output_dir: Path,
    rows_read: Optional[int] = None,
) -> Path:
    """Write ``dataset_report.md`` describing the attributes and loaded instances."""

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    lines = [
        "# Dataset Report",
        "",
        f"- Descriptor: `{dataset.descriptor}`",
        f"- Columns: {dataset.nb_columns}",
        f"- Attributes: {dataset.nb_attributes}",
        f"- Labels: {dataset.nb_labels}",
        f"- Instances loaded: {len(data)}",
    ]
    if rows_read is not None:
        lines.extend(
            [
                f"- Rows read: {rows_read}",
                f"- Rows skipped (missing values): {rows_read - len(data)}",
            ]
        )
    lines.extend(["", "## Attributes", build_attribute_table(dataset), "", build_label_section(data), ""])

    report_path = output_dir / REPORT_FILENAME
    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path
