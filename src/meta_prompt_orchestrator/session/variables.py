"""Variable store: placeholder name -> current value."""
from __future__ import annotations
from typing import Iterable, Iterator, Mapping

class VariableStore(Mapping[str, str]):
    """Values entered for template placeholders.

    Entries outlive the placeholders that introduced them. A name that was
    never set reads as absent; rendering treats absent and empty alike.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def form_fields(self, names: Iterable[str]) -> list[tuple[str, str]]:
        """Pair each name with its current value, or "" when absent."""
        return [(name, self._values.get(name, "")) for name in names]

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)
