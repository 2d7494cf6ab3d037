from __future__ import annotations

import pytest

from meta_prompt_orchestrator.common.schema import PackField, PackRecord
from meta_prompt_orchestrator.session.registry import PackNotFoundError, PackRegistry

from conftest import make_packs


def test_first_pack_is_active_by_default() -> None:
    reg = PackRegistry(make_packs())
    assert reg.active_id == "tr_invoice"
    assert reg.active is not None and reg.active.pack_name == "TR_INVOICE"


def test_empty_registry_has_no_active_pack() -> None:
    reg = PackRegistry()
    assert reg.active is None
    pack = reg.add()
    assert reg.active is pack


def test_seed_records_are_copied() -> None:
    seeds = make_packs()
    reg = PackRegistry(seeds)
    reg.update_goal("us_id", "changed")
    assert seeds[1].goal == "G"


def test_duplicate_seed_ids_rejected() -> None:
    packs = make_packs() + [make_packs()[0]]
    with pytest.raises(ValueError):
        PackRegistry(packs)


def test_add_appends_and_selects() -> None:
    reg = PackRegistry(make_packs())
    pack = reg.add()
    assert len(reg) == 3
    assert reg.active_id == pack.id == "pack_3"
    assert pack.name == "New Pack 3"
    assert pack.pack_name == "PACK_3"
    assert [p.id for p in reg][-1] == "pack_3"


def test_add_skips_ids_already_taken() -> None:
    packs = make_packs() + [
        PackRecord(id="pack_4", name="x", pack_name="X", goal="", per_image="", system_notes=""),
    ]
    reg = PackRegistry(packs)
    assert reg.add().id == "pack_5"


def test_add_never_reuses_ids() -> None:
    reg = PackRegistry(make_packs())
    issued = {p.id for p in reg}
    for _ in range(50):
        before = len(reg)
        pack = reg.add()
        assert len(reg) == before + 1
        assert pack.id not in issued
        assert reg.active_id == pack.id
        issued.add(pack.id)


def test_select_switches_active() -> None:
    reg = PackRegistry(make_packs())
    assert reg.select("us_id").pack_name == "US_ID_V1"
    assert reg.active_id == "us_id"


def test_select_unknown_id_leaves_state_unchanged() -> None:
    reg = PackRegistry(make_packs())
    reg.select("us_id")
    before = [(p.id, p.goal) for p in reg]
    with pytest.raises(PackNotFoundError) as exc:
        reg.select("nope")
    assert exc.value.pack_id == "nope"
    assert reg.active_id == "us_id"
    assert [(p.id, p.goal) for p in reg] == before


def test_update_field_touches_one_record() -> None:
    reg = PackRegistry(make_packs())
    reg.update_field("us_id", PackField.SYSTEM_NOTES, "new notes")
    assert reg.get("us_id").system_notes == "new notes"
    assert reg.get("us_id").goal == "G"
    assert reg.get("tr_invoice").system_notes == "Totals add up."


def test_update_field_accepts_names_and_snapshot_aliases() -> None:
    reg = PackRegistry(make_packs())
    reg.update_field("us_id", "goal", "G2")
    reg.update_field("us_id", "packName", "FOO")
    reg.update_field("us_id", "perImage", "x\ny")
    assert reg.get("us_id").goal == "G2"
    assert reg.get("us_id").pack_name == "FOO"
    assert reg.get("us_id").per_image == "x\ny"


def test_update_field_rejects_unknown_field() -> None:
    reg = PackRegistry(make_packs())
    with pytest.raises(ValueError):
        reg.update_field("us_id", "id", "hijack")
    assert reg.get("us_id").id == "us_id"


def test_update_unknown_id_is_lookup_failure() -> None:
    reg = PackRegistry(make_packs())
    with pytest.raises(PackNotFoundError):
        reg.update_name("ghost", "x")
    assert isinstance(PackNotFoundError("x"), LookupError)
    assert [p.name for p in reg] == ["Turkish Invoice Pack", "US ID Cards"]
