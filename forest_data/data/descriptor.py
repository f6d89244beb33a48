"""Parsing of attribute descriptors such as ``"N, C, 3 N, I, L"``."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, List, Optional

from forest_data.errors import MalformedDescriptor

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"[\s,]+")
_REPEAT_COUNT = re.compile(r"[0-9]+")


class AttributeKind(Enum):
    """Role of a raw column in the data."""

    IGNORED = "I"
    NUMERICAL = "N"
    CATEGORICAL = "C"
    LABEL = "L"

    @property
    def is_ignored(self) -> bool:
        return self is AttributeKind.IGNORED

    @property
    def is_numerical(self) -> bool:
        return self is AttributeKind.NUMERICAL

    @property
    def is_categorical(self) -> bool:
        return self is AttributeKind.CATEGORICAL

    @property
    def is_label(self) -> bool:
        return self is AttributeKind.LABEL

    @property
    def is_coded(self) -> bool:
        """Whether the column's values are mapped to integer codes."""

        return self is AttributeKind.CATEGORICAL or self is AttributeKind.LABEL


_KINDS_BY_TOKEN = {kind.value: kind for kind in AttributeKind}


def _tokenize(descriptor: str) -> List[str]:
    return [token for token in _TOKEN_SPLIT.split(descriptor.strip()) if token]


def parse_descriptor(descriptor: str) -> List[AttributeKind]:
    """Turn a descriptor string into the ordered list of attribute kinds.

    Tokens are separated by commas and/or whitespace and are case-insensitive:
    ``N`` numerical, ``C`` categorical, ``L`` label, ``I`` ignored. A positive
    integer repeats the kind that follows it, so ``"3 N L"`` declares three
    numerical columns and a label. Exactly one label is required.
    """

    tokens = _tokenize(descriptor)
    if not tokens:
        raise MalformedDescriptor("Descriptor is empty.")

    kinds: List[AttributeKind] = []
    repeat: Optional[int] = None
    for token in tokens:
        if _REPEAT_COUNT.fullmatch(token):
            if repeat is not None:
                raise MalformedDescriptor(f"Repeat count '{token}' follows another count.")
            repeat = int(token)
            if repeat < 1:
                raise MalformedDescriptor(f"Repeat count must be positive, got {repeat}.")
            continue

        kind = _KINDS_BY_TOKEN.get(token.upper())
        if kind is None:
            raise MalformedDescriptor(f"Unknown descriptor token '{token}'.")
        kinds.extend([kind] * (repeat or 1))
        repeat = None

    if repeat is not None:
        raise MalformedDescriptor("Descriptor ends with a repeat count and no attribute token.")

    nb_labels = sum(1 for kind in kinds if kind.is_label)
    if nb_labels != 1:
        raise MalformedDescriptor(f"Descriptor must declare exactly one label, found {nb_labels}.")

    logger.debug("Parsed descriptor with %d columns: %s", len(kinds), format_descriptor(kinds))
    return kinds


def format_descriptor(kinds: Iterable[AttributeKind]) -> str:
    """Render attribute kinds back to a comma-separated descriptor."""

    return ",".join(kind.value for kind in kinds)
