"""Session state for one interactive orchestrator session.

Holds the meta prompt template, the variable store, the pack registry and
the copy status. All mutations go through :class:`Session` methods, which
bump ``version`` and notify subscribers with the name of the change.
Single-threaded; no locking.
"""
from __future__ import annotations
import logging
from dataclasses import asdict
from typing import Any, Callable, Iterable, Mapping

from meta_prompt_orchestrator.common.config import SEED_PATH, TEMPLATE_PATH, load_seed
from meta_prompt_orchestrator.common.schema import CopyResult, PackField, PackRecord
from meta_prompt_orchestrator.common.templates import (
    detect_placeholders,
    load_template,
    render_prompt,
    unresolved_placeholders,
)
from meta_prompt_orchestrator.session.clipboard import CopyStatus, Writer, copy_to_clipboard
from meta_prompt_orchestrator.session.composer import build_snapshot, compose, snapshot_json
from meta_prompt_orchestrator.session.registry import PackRegistry
from meta_prompt_orchestrator.session.variables import VariableStore

LOGGER = logging.getLogger("orchestrator.session")

PACK_NAME_VARIABLE = "pack_name"
COPY_TARGETS = ("meta", "dispatch", "json")

Listener = Callable[[str], None]

class Session:
    def __init__(
        self,
        template: str = "",
        variables: Mapping[str, str] | None = None,
        packs: Iterable[PackRecord] = (),
        copy_status: CopyStatus | None = None,
        writer: Writer | None = None,
    ) -> None:
        self._template = template
        self.variables = VariableStore(variables)
        self.registry = PackRegistry(packs)
        self.copy_status = copy_status or CopyStatus()
        self._writer = writer
        self._listeners: list[Listener] = []
        self.version = 0

    @classmethod
    def from_files(cls, template_path: str = TEMPLATE_PATH, seed_path: str = SEED_PATH, **kwargs: Any) -> "Session":
        """Build a session from a meta prompt file and a YAML seed file."""
        seed = load_seed(seed_path)
        session = cls(load_template(template_path), seed.variables, seed.packs, **kwargs)
        LOGGER.info(
            "Loaded session: %d packs, %d variables, %d placeholders",
            len(session.registry),
            len(session.variables),
            len(session.placeholders),
        )
        return session

    # -- change signal -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _changed(self, what: str) -> None:
        self.version += 1
        for listener in list(self._listeners):
            listener(what)

    # -- template and variables --------------------------------------------

    @property
    def template(self) -> str:
        return self._template

    def set_template(self, text: str) -> None:
        self._template = text
        self._changed("template")

    def set_variable(self, name: str, value: str) -> None:
        self.variables.set(name, value)
        self._changed("variables")

    @property
    def placeholders(self) -> list[str]:
        return detect_placeholders(self._template)

    def form_fields(self) -> list[tuple[str, str]]:
        return self.variables.form_fields(self.placeholders)

    def unresolved(self) -> list[str]:
        return unresolved_placeholders(self._template, self.variables)

    # -- packs -------------------------------------------------------------

    @property
    def active_pack(self) -> PackRecord | None:
        return self.registry.active

    def _sync(self, pack: PackRecord) -> None:
        self.variables.set(PACK_NAME_VARIABLE, pack.pack_name)

    def add_pack(self) -> PackRecord:
        pack = self.registry.add()
        self._sync(pack)
        self._changed("packs")
        return pack

    def select_pack(self, pack_id: str) -> PackRecord:
        """
        Activate a pack and copy its identifier into ``pack_name``.

        Raises:
            PackNotFoundError: Unknown id. Selection and variables are unchanged.
        """
        pack = self.registry.select(pack_id)
        self._sync(pack)
        self._changed("selection")
        return pack

    def update_pack_field(self, pack_id: str, field: PackField | str, value: str) -> PackRecord:
        """
        Edit one field of a pack. Editing the identifier also updates ``pack_name``.

        Raises:
            PackNotFoundError: Unknown id. Nothing is modified.
            ValueError: ``field`` is not an editable pack field.
        """
        field = PackField(field)
        pack = self.registry.update_field(pack_id, field, value)
        if field is PackField.PACK_NAME:
            self._sync(pack)
        self._changed("packs")
        return pack

    def sync_pack_name(self) -> None:
        """Copy the active pack's identifier into ``pack_name`` unless it is empty."""
        pack = self.active_pack
        if pack is None or not pack.pack_name:
            return
        self._sync(pack)
        self._changed("variables")

    # -- outputs -----------------------------------------------------------

    def rendered(self) -> str:
        return render_prompt(self._template, self.variables)

    def combined(self) -> str:
        return compose(self.rendered(), self.active_pack)

    def snapshot(self) -> dict[str, Any]:
        return build_snapshot(self.rendered(), self.active_pack, self.variables)

    def snapshot_json(self) -> str:
        return snapshot_json(self.rendered(), self.active_pack, self.variables)

    def copy_text(self, target: str) -> str:
        """Text for a copy target: raw template, combined text or JSON snapshot."""
        if target == "meta":
            return self._template
        if target == "dispatch":
            return self.combined()
        if target == "json":
            return self.snapshot_json()
        raise KeyError(target)

    def copy(self, target: str) -> CopyResult:
        """
        Copy a target to the clipboard and record the transient status.

        Raises:
            KeyError: Unknown copy target.
        """
        result = copy_to_clipboard(target, self.copy_text(target), self._writer)
        self.copy_status.record(result)
        self._changed("copy")
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self._template,
            "variables": self.variables.as_dict(),
            "packs": [asdict(pack) for pack in self.registry],
            "active_pack_id": self.registry.active_id,
        }
