"""Environment settings and YAML seed loading."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from meta_prompt_orchestrator.common.schema import PackRecord

TEMPLATE_PATH = os.getenv("ORCHESTRATOR_TEMPLATE_PATH", "configs/meta_prompt.txt")
SEED_PATH = os.getenv("ORCHESTRATOR_SEED_PATH", "configs/session.yaml")
COPY_STATUS_SECONDS = float(os.getenv("ORCHESTRATOR_COPY_STATUS_SECONDS", "1.8"))
CLIPBOARD_TIMEOUT = float(os.getenv("ORCHESTRATOR_CLIPBOARD_TIMEOUT", "2.0"))

@dataclass
class Seed:
    """Startup variables and pack records."""
    variables: dict[str, str] = field(default_factory=dict)
    packs: list[PackRecord] = field(default_factory=list)

def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _pack_from_cfg(raw: dict[str, Any]) -> PackRecord:
    per_image = raw.get("per_image", "")
    if isinstance(per_image, list):
        per_image = "\n".join(str(line) for line in per_image)
    return PackRecord(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        pack_name=str(raw.get("pack_name", "")),
        goal=str(raw.get("goal", "")).strip(),
        per_image=str(per_image),
        system_notes=str(raw.get("system_notes", "")).strip(),
    )

def load_seed(path: str = SEED_PATH) -> Seed:
    """
    Load default variables and seed packs from YAML.

    Args:
        path: YAML file with ``variables`` and ``packs`` keys.

    Raises:
        FileNotFoundError: If the seed file is missing.
        ValueError: If two packs share an id.
    """
    cfg = load_cfg(path)
    variables = {str(k): "" if v is None else str(v) for k, v in (cfg.get("variables") or {}).items()}
    packs = [_pack_from_cfg(raw) for raw in cfg.get("packs") or []]
    ids = [p.id for p in packs]
    if len(ids) != len(set(ids)):
        raise ValueError(f"Duplicate pack ids in {path}: {ids}")
    return Seed(variables=variables, packs=packs)
