"""Exceptions raised while parsing descriptors and loading rows."""

from __future__ import annotations

from typing import Optional


class DataLoaderError(Exception):
    """Base class for every error raised by the data loader."""


class MalformedDescriptor(DataLoaderError, ValueError):
    """The descriptor is invalid or does not match the shape of a data row."""

    def __init__(self, message: str, row_index: Optional[int] = None) -> None:
        if row_index is not None:
            message = f"{message} (row {row_index})"
        super().__init__(message)
        self.row_index = row_index


class InvalidNumericLiteral(DataLoaderError, ValueError):
    """A numerical field holds text that is not a floating-point literal."""

    def __init__(self, column: int, value: str) -> None:
        super().__init__(f"Column {column}: '{value}' is not a valid numeric value.")
        self.column = column
        self.value = value


class _LookupFailure(DataLoaderError, KeyError):
    # KeyError.__str__ repr-quotes its argument; keep the message readable.
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnknownCategoricalValue(_LookupFailure):
    """A categorical value was never observed while building the dataset."""

    def __init__(self, attribute: int, value: str) -> None:
        super().__init__(f"Attribute {attribute}: unknown categorical value '{value}'.")
        self.attribute = attribute
        self.value = value


class UnknownLabelValue(_LookupFailure):
    """A label (text or code) was never observed while building the dataset."""

    def __init__(self, value) -> None:
        super().__init__(f"Unknown label '{value}'.")
        self.value = value
