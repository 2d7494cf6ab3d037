"""Dataclasses shared by the session, the HTTP surface and the CLI."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

class PackField(str, Enum):
    """Editable fields of a pack record."""
    NAME = "name"
    PACK_NAME = "pack_name"
    GOAL = "goal"
    PER_IMAGE = "per_image"
    SYSTEM_NOTES = "system_notes"

    @classmethod
    def _missing_(cls, value: object) -> "PackField | None":
        # camelCase spellings used by the JSON snapshot
        aliases = {
            "packName": cls.PACK_NAME,
            "perImage": cls.PER_IMAGE,
            "systemNotes": cls.SYSTEM_NOTES,
        }
        return aliases.get(value) if isinstance(value, str) else None

@dataclass
class PackRecord:
    """A named bundle of generation directives.

    ``pack_name`` is the identifier string mirrored into the ``pack_name``
    template variable; ``per_image`` holds one directive per line.
    """
    id: str
    name: str
    pack_name: str
    goal: str
    per_image: str
    system_notes: str

    def directive_lines(self) -> list[str]:
        return self.per_image.split("\n")

@dataclass(frozen=True)
class CopyResult:
    """Outcome of a clipboard write."""
    label: str
    copied: bool
    error: str | None = None
