"""Build a ``Dataset`` from raw rows and decode rows into instances.

Loading is a two-pass process. :func:`generate_dataset` scans every row once
and interns the text of each categorical and label column, codes following
first-occurrence order. :func:`load_data` then decodes each row against that
dataset. Rows holding the missing-value token in any non-ignored column are
skipped and do not consume an instance id.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence

from forest_data.config import LoaderConfig
from forest_data.data.dataset import Dataset
from forest_data.data.descriptor import AttributeKind, parse_descriptor
from forest_data.data.instance import Data, Instance
from forest_data.data.sources import FileSystem, LocalFileSystem, PathLike, iter_rows, read_lines
from forest_data.data.vocabulary import CodeTable
from forest_data.errors import InvalidNumericLiteral, MalformedDescriptor

logger = logging.getLogger(__name__)

CodeTables = Dict[int, CodeTable]


def _split_row(row: str, nb_columns: int, config: LoaderConfig, row_index: Optional[int] = None) -> List[str]:
    fields = row.split(config.delimiter)
    # Rows written with a trailing delimiter carry one extra empty field.
    if len(fields) == nb_columns + 1 and not fields[-1].strip():
        fields.pop()
    if len(fields) != nb_columns:
        raise MalformedDescriptor(
            f"Row has {len(fields)} fields but the descriptor declares {nb_columns} attributes",
            row_index=row_index,
        )
    if config.strip_whitespace:
        fields = [field.strip() for field in fields]
    return fields


def _scan_rows(
    rows: Sequence[str],
    kinds: Sequence[AttributeKind],
    config: LoaderConfig,
    offset: int = 0,
) -> CodeTables:
    coded = [col for col, kind in enumerate(kinds) if kind.is_coded]
    tables: CodeTables = {col: CodeTable() for col in coded}
    for index, row in enumerate(rows, start=offset):
        fields = _split_row(row, len(kinds), config, row_index=index)
        for col in coded:
            value = fields[col]
            if value != config.missing_token:
                tables[col].add(value)
    return tables


def _scan_sharded(rows: Sequence[str], kinds: Sequence[AttributeKind], config: LoaderConfig, n_jobs: int) -> CodeTables:
    shard_size = -(-len(rows) // n_jobs)
    offsets = list(range(0, len(rows), shard_size))
    logger.debug("Scanning %d rows in %d shards of up to %d rows", len(rows), len(offsets), shard_size)

    with ThreadPoolExecutor(max_workers=n_jobs) as pool:
        futures = [
            pool.submit(_scan_rows, rows[start : start + shard_size], kinds, config, start)
            for start in offsets
        ]
        shard_tables = [future.result() for future in futures]

    # Merging in row order reproduces the codes of a sequential scan.
    merged: CodeTables = {col: CodeTable() for col, kind in enumerate(kinds) if kind.is_coded}
    for tables in shard_tables:
        for col, table in tables.items():
            merged[col].merge(table)
    return merged


def generate_dataset(descriptor: str, rows: Iterable[str], config: Optional[LoaderConfig] = None) -> Dataset:
    """Parse ``descriptor`` and build the code tables from ``rows``."""

    config = config or LoaderConfig()
    kinds = parse_descriptor(descriptor)
    rows = list(iter_rows(rows))

    n_jobs = config.effective_n_jobs
    if n_jobs > 1 and len(rows) >= config.shard_min_rows:
        tables = _scan_sharded(rows, kinds, config, n_jobs)
    else:
        tables = _scan_rows(rows, kinds, config)

    dataset = Dataset(kinds, tables)
    logger.info(
        "Generated dataset from %d rows: %d columns, %d attributes, %d labels",
        len(rows),
        dataset.nb_columns,
        dataset.nb_attributes,
        dataset.nb_labels,
    )
    for col, table in tables.items():
        logger.debug("Column %d (%s): %d distinct values", col, kinds[col].name.lower(), len(table))
    return dataset


def generate_dataset_from_file(
    descriptor: str,
    path: PathLike,
    fs: Optional[FileSystem] = None,
    config: Optional[LoaderConfig] = None,
) -> Dataset:
    config = config or LoaderConfig()
    fs = fs or LocalFileSystem(encoding=config.encoding)
    return generate_dataset(descriptor, read_lines(path, fs), config)


def decode_row(
    dataset: Dataset,
    row: str,
    instance_id: int,
    config: Optional[LoaderConfig] = None,
    row_index: Optional[int] = None,
) -> Optional[Instance]:
    """Decode one raw row, or return ``None`` when it holds a missing value."""

    config = config or LoaderConfig()
    kinds = dataset.kinds
    fields = _split_row(row, len(kinds), config, row_index=row_index)

    if any(field == config.missing_token for kind, field in zip(kinds, fields) if not kind.is_ignored):
        return None

    values: List[float] = []
    label: Optional[int] = None
    for col, (kind, field) in enumerate(zip(kinds, fields)):
        if kind is AttributeKind.IGNORED:
            continue
        if kind is AttributeKind.NUMERICAL:
            # float() accepts Python's digit separators; data files do not.
            if "_" in field:
                raise InvalidNumericLiteral(col, field)
            try:
                values.append(float(field))
            except ValueError as exc:
                raise InvalidNumericLiteral(col, field) from exc
        elif kind is AttributeKind.CATEGORICAL:
            values.append(float(dataset.value_of(len(values), field)))
        elif kind is AttributeKind.LABEL:
            label = dataset.label_code(field)

    return Instance(id=instance_id, values=tuple(values), label=label)


def load_data(dataset: Dataset, rows: Iterable[str], config: Optional[LoaderConfig] = None) -> Data:
    """Decode ``rows`` against ``dataset``, skipping rows with missing values."""

    config = config or LoaderConfig()
    instances: List[Instance] = []
    skipped = 0
    for index, row in enumerate(iter_rows(rows)):
        instance = decode_row(dataset, row, len(instances), config, row_index=index)
        if instance is None:
            skipped += 1
            continue
        instances.append(instance)

    logger.info("Loaded %d instances (%d rows skipped for missing values)", len(instances), skipped)
    return Data(dataset, instances)


def load_data_from_file(
    dataset: Dataset,
    path: PathLike,
    fs: Optional[FileSystem] = None,
    config: Optional[LoaderConfig] = None,
) -> Data:
    config = config or LoaderConfig()
    fs = fs or LocalFileSystem(encoding=config.encoding)
    return load_data(dataset, read_lines(path, fs), config)


def load(descriptor: str, rows: Iterable[str], config: Optional[LoaderConfig] = None) -> Data:
    """Build the dataset from ``rows`` and decode the same rows against it."""

    rows = list(rows)
    dataset = generate_dataset(descriptor, rows, config)
    return load_data(dataset, rows, config)
