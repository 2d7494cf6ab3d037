"""Ordered collection of pack records with a single active selection."""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Callable, Iterable, Iterator

from meta_prompt_orchestrator.common.schema import PackField, PackRecord

LOGGER = logging.getLogger("orchestrator.registry")

DEFAULT_GOAL = "Describe the objective for this synthetic data pack."
DEFAULT_PER_IMAGE = "List per-image directives, each on its own line."
DEFAULT_SYSTEM_NOTES = "Add advanced notes such as balancing rules or post-processing."

class PackNotFoundError(LookupError):
    """Raised when an operation names a pack id the registry does not hold."""

    def __init__(self, pack_id: str) -> None:
        super().__init__(f"Unknown pack id: {pack_id!r}")
        self.pack_id = pack_id

class PackRegistry:
    """
    Pack records in insertion order.

    Exactly one record is active whenever the registry is non-empty; it
    starts as the first seed record. Ids handed out by :meth:`add` are never
    reused within the registry's lifetime.
    """

    def __init__(self, packs: Iterable[PackRecord] = ()) -> None:
        self._packs: list[PackRecord] = []
        self._issued: set[str] = set()
        for pack in packs:
            if pack.id in self._issued:
                raise ValueError(f"Duplicate pack id: {pack.id!r}")
            self._packs.append(replace(pack))
            self._issued.add(pack.id)
        self._last_index = 0
        self._active_id: str | None = self._packs[0].id if self._packs else None
        self._updaters: dict[PackField, Callable[[str, str], PackRecord]] = {
            PackField.NAME: self.update_name,
            PackField.PACK_NAME: self.update_pack_name,
            PackField.GOAL: self.update_goal,
            PackField.PER_IMAGE: self.update_per_image,
            PackField.SYSTEM_NOTES: self.update_system_notes,
        }

    def __iter__(self) -> Iterator[PackRecord]:
        return iter(self._packs)

    def __len__(self) -> int:
        return len(self._packs)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active(self) -> PackRecord | None:
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, pack_id: str) -> PackRecord:
        for pack in self._packs:
            if pack.id == pack_id:
                return pack
        raise PackNotFoundError(pack_id)

    def _next_id(self) -> tuple[int, str]:
        index = max(len(self._packs), self._last_index) + 1
        while f"pack_{index}" in self._issued:
            index += 1
        return index, f"pack_{index}"

    def add(self) -> PackRecord:
        """Append a record with default fields and make it active."""
        index, pack_id = self._next_id()
        pack = PackRecord(
            id=pack_id,
            name=f"New Pack {index}",
            pack_name=f"PACK_{index}",
            goal=DEFAULT_GOAL,
            per_image=DEFAULT_PER_IMAGE,
            system_notes=DEFAULT_SYSTEM_NOTES,
        )
        self._last_index = index
        self._issued.add(pack_id)
        self._packs.append(pack)
        self._active_id = pack_id
        LOGGER.info("Added pack %s (%s)", pack_id, pack.pack_name)
        return pack

    def select(self, pack_id: str) -> PackRecord:
        """
        Make ``pack_id`` the active record.

        Raises:
            PackNotFoundError: If no record has that id; selection is unchanged.
        """
        pack = self.get(pack_id)
        self._active_id = pack.id
        LOGGER.debug("Selected pack %s", pack_id)
        return pack

    def _set(self, pack_id: str, field: PackField, value: str) -> PackRecord:
        pack = self.get(pack_id)
        setattr(pack, field.value, value)
        LOGGER.debug("Updated %s.%s", pack_id, field.value)
        return pack

    def update_name(self, pack_id: str, value: str) -> PackRecord:
        return self._set(pack_id, PackField.NAME, value)

    def update_pack_name(self, pack_id: str, value: str) -> PackRecord:
        return self._set(pack_id, PackField.PACK_NAME, value)

    def update_goal(self, pack_id: str, value: str) -> PackRecord:
        return self._set(pack_id, PackField.GOAL, value)

    def update_per_image(self, pack_id: str, value: str) -> PackRecord:
        return self._set(pack_id, PackField.PER_IMAGE, value)

    def update_system_notes(self, pack_id: str, value: str) -> PackRecord:
        return self._set(pack_id, PackField.SYSTEM_NOTES, value)

    def update_field(self, pack_id: str, field: PackField | str, value: str) -> PackRecord:
        """Dispatch to the update operation for ``field``.

        Raises:
            PackNotFoundError: If no record has that id.
            ValueError: If ``field`` is not an editable pack field.
        """
        return self._updaters[PackField(field)](pack_id, value)
