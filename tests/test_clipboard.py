from __future__ import annotations

import subprocess
from typing import Any

import meta_prompt_orchestrator.session.clipboard as clipboard_mod
from meta_prompt_orchestrator.common.schema import CopyResult
from meta_prompt_orchestrator.session.clipboard import CopyStatus, copy_to_clipboard

from conftest import FakeClock, FakeWriter


def test_copy_success() -> None:
    writer = FakeWriter()
    result = copy_to_clipboard("meta", "hello", writer)
    assert result == CopyResult(label="meta", copied=True)
    assert writer.written == ["hello"]


def test_copy_failure_from_helper_process() -> None:
    writer = FakeWriter(fail=subprocess.CalledProcessError(1, ["xclip"]))
    result = copy_to_clipboard("json", "{}", writer)
    assert not result.copied
    assert result.error


def test_missing_helper_is_not_copied(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(clipboard_mod.shutil, "which", lambda name: None)
    result = copy_to_clipboard("dispatch", "text")
    assert not result.copied
    assert "No clipboard helper" in (result.error or "")


def test_system_writer_pipes_text(monkeypatch) -> None:  # noqa: ANN001
    calls: list[dict[str, Any]] = []

    def fake_run(cmd: list[str], **kwargs: Any) -> None:
        calls.append({"cmd": cmd, **kwargs})

    monkeypatch.setattr(clipboard_mod.shutil, "which", lambda name: "/usr/bin/xclip" if name == "xclip" else None)
    monkeypatch.setattr(clipboard_mod.subprocess, "run", fake_run)
    result = copy_to_clipboard("meta", "ürün")
    assert result.copied
    assert calls[0]["cmd"] == ["xclip", "-selection", "clipboard"]
    assert calls[0]["input"] == "ürün".encode("utf-8")
    assert calls[0]["check"] is True


def test_status_clears_after_delay() -> None:
    clock = FakeClock()
    status = CopyStatus(duration=1.8, clock=clock)
    status.record(CopyResult(label="meta", copied=True))
    clock.now += 1.0
    assert status.label == "meta"
    clock.now += 1.0
    assert status.label is None


def test_failed_copy_clears_status() -> None:
    status = CopyStatus(duration=1.8, clock=FakeClock())
    status.record(CopyResult(label="meta", copied=True))
    status.record(CopyResult(label="json", copied=False, error="boom"))
    assert status.label is None


def test_unencodable_text_does_not_escape(monkeypatch) -> None:  # noqa: ANN001
    calls: list[bytes] = []
    monkeypatch.setattr(clipboard_mod.shutil, "which", lambda name: "/usr/bin/pbcopy" if name == "pbcopy" else None)
    monkeypatch.setattr(clipboard_mod.subprocess, "run", lambda cmd, **kw: calls.append(kw["input"]))
    result = copy_to_clipboard("meta", "bad \ud800 text")
    assert result.copied
    assert calls == [b"bad ? text"]


def test_any_writer_error_is_not_copied() -> None:
    writer = FakeWriter(fail=RuntimeError("backend gone"))
    result = copy_to_clipboard("meta", "x", writer)
    assert not result.copied
    assert result.error == "backend gone"
