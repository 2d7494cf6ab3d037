"""Merge a rendered meta prompt with the active pack block.

The combined text is what gets dispatched; the snapshot is the JSON export
for headless pipelines.
"""
from __future__ import annotations
import json
from typing import Any, Mapping

from meta_prompt_orchestrator.common.schema import PackRecord

DIVIDER = "\n\n---\n\n"

def pack_to_markdown(pack: PackRecord) -> str:
    """
    Render a pack record as a fixed-order text block.

    Args:
        pack: Pack record.

    Returns:
        Pack Name, Objective, bulleted Per Image Directives and System Notes,
        separated by blank lines.
    """
    bullets = "\n".join(f"- {line}" for line in pack.directive_lines())
    return "\n".join([
        f"Pack Name: {pack.pack_name}",
        "",
        f"Objective: {pack.goal}",
        "",
        "Per Image Directives:",
        bullets,
        "",
        f"System Notes: {pack.system_notes}",
    ])

def compose(rendered: str, pack: PackRecord | None) -> str:
    """Rendered prompt, divider, pack block. Just the prompt when no pack is active."""
    if pack is None:
        return rendered
    return f"{rendered}{DIVIDER}{pack_to_markdown(pack)}"

def pack_snapshot(pack: PackRecord) -> dict[str, Any]:
    return {
        "packName": pack.pack_name,
        "goal": pack.goal,
        "perImage": [line.strip() for line in pack.directive_lines()],
        "systemNotes": pack.system_notes,
    }

def build_snapshot(rendered: str, pack: PackRecord | None, variables: Mapping[str, str]) -> dict[str, Any]:
    return {
        "metaPrompt": rendered,
        "selectedPack": pack_snapshot(pack) if pack is not None else None,
        "variables": dict(variables),
    }

def snapshot_json(rendered: str, pack: PackRecord | None, variables: Mapping[str, str]) -> str:
    """
    Serialize the export snapshot.

    Args:
        rendered: Rendered meta prompt.
        pack: Active pack, or None.
        variables: Every stored variable, including ones the template no longer uses.

    Returns:
        JSON text with 2-space indentation.
    """
    return json.dumps(build_snapshot(rendered, pack, variables), indent=2, ensure_ascii=False)
