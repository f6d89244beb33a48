"""Value-to-code tables for categorical and label columns."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping


class CodeTable(Mapping[str, int]):
    """Interns text values, giving each new value the next unused code.

    Codes start at 0 and follow first-occurrence order, so the set of codes is
    always ``{0, ..., len(table) - 1}``.
    """

    def __init__(self) -> None:
        self._codes: Dict[str, int] = {}
        self._values: List[str] = []

    @classmethod
    def from_values(cls, values: Iterable[str]) -> "CodeTable":
        table = cls()
        for value in values:
            if value in table:
                raise ValueError(f"Duplicate value '{value}' in code table.")
            table.add(value)
        return table

    def add(self, value: str) -> int:
        code = self._codes.get(value)
        if code is None:
            code = len(self._values)
            self._codes[value] = code
            self._values.append(value)
        return code

    def merge(self, other: "CodeTable") -> None:
        """Append the values of ``other`` not yet known, in ``other``'s code order."""

        for value in other._values:
            self.add(value)

    def code_of(self, value: str) -> int:
        return self._codes[value]

    def value_of(self, code: int) -> str:
        if code < 0:
            raise IndexError(code)
        return self._values[code]

    def to_list(self) -> List[str]:
        return list(self._values)

    def __getitem__(self, value: str) -> int:
        return self._codes[value]

    def __contains__(self, value: object) -> bool:
        return value in self._codes

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CodeTable({self._values!r})"
