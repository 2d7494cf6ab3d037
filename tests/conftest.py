from __future__ import annotations

from pathlib import Path

import pytest

from meta_prompt_orchestrator.common.schema import PackRecord
from meta_prompt_orchestrator.session.clipboard import CopyStatus
from meta_prompt_orchestrator.session.state import Session

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeWriter:
    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.written: list[str] = []

    def __call__(self, text: str) -> None:
        if self.fail is not None:
            raise self.fail
        self.written.append(text)


def make_packs() -> list[PackRecord]:
    return [
        PackRecord(
            id="tr_invoice",
            name="Turkish Invoice Pack",
            pack_name="TR_INVOICE",
            goal="Turkish invoices",
            per_image="header\nfields",
            system_notes="Totals add up.",
        ),
        PackRecord(
            id="us_id",
            name="US ID Cards",
            pack_name="US_ID_V1",
            goal="G",
            per_image="a\nb",
            system_notes="N",
        ),
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def writer() -> FakeWriter:
    return FakeWriter()


@pytest.fixture
def session(clock: FakeClock, writer: FakeWriter) -> Session:
    return Session(
        template="Generate {{count}} images for {{pack_name}}",
        variables={"count": "10", "pack_name": "TR_INVOICE"},
        packs=make_packs(),
        copy_status=CopyStatus(duration=1.8, clock=clock),
        writer=writer,
    )
