"""Descriptor parsing, dataset generation and row decoding."""

from .dataset import Dataset
from .descriptor import AttributeKind, format_descriptor, parse_descriptor
from .instance import Data, Instance
from .loader import (
    decode_row,
    generate_dataset,
    generate_dataset_from_file,
    load,
    load_data,
    load_data_from_file,
)
from .sources import FileSystem, LocalFileSystem, open_lines, read_lines
from .vocabulary import CodeTable

__all__ = [
    "AttributeKind",
    "CodeTable",
    "Data",
    "Dataset",
    "FileSystem",
    "Instance",
    "LocalFileSystem",
    "decode_row",
    "format_descriptor",
    "generate_dataset",
    "generate_dataset_from_file",
    "load",
    "load_data",
    "load_data_from_file",
    "open_lines",
    "parse_descriptor",
    "read_lines",
]
