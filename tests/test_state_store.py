"""Tests for the JSON state store (infra/state_store.py).

All files live in ``tmp_path``; ``$SUDO_USER`` is removed so no chown
is attempted.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wg_waybar.exceptions import StateError
from wg_waybar.infra.state_store import DEFAULT_STATE_FILENAME, JsonStateStore


@pytest.fixture()
def state_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("SUDO_USER", raising=False)
    return tmp_path / DEFAULT_STATE_FILENAME


class TestLoad:
    @pytest.mark.parametrize("content", ["{}", '{"error": null}', '{"other": 1}'])
    def test_no_error(self, state_path: Path, content: str) -> None:
        state_path.write_text(content)
        assert JsonStateStore(state_path).load() == {}

    def test_error_map(self, state_path: Path) -> None:
        state_path.write_text('{"error": {"wg0": "boom"}}')
        assert JsonStateStore(state_path).load() == {"wg0": "boom"}

    def test_missing_file(self, state_path: Path) -> None:
        with pytest.raises(StateError, match="I/O error"):
            JsonStateStore(state_path).load()

    def test_invalid_json(self, state_path: Path) -> None:
        state_path.write_text("{not json")
        with pytest.raises(StateError, match="SerdeError"):
            JsonStateStore(state_path).load()

    @pytest.mark.parametrize(
        "content",
        ["[]", '{"error": "boom"}', '{"error": {"wg0": 1}}'],
    )
    def test_wrong_shape(self, state_path: Path, content: str) -> None:
        state_path.write_text(content)
        with pytest.raises(StateError, match="SerdeError"):
            JsonStateStore(state_path).load()


class TestSave:
    def test_empty_writes_empty_object(self, state_path: Path) -> None:
        JsonStateStore(state_path).save({})
        assert json.loads(state_path.read_text()) == {}

    def test_errors_are_nested(self, state_path: Path) -> None:
        JsonStateStore(state_path).save({"wg0": "boom"})
        assert json.loads(state_path.read_text()) == {"error": {"wg0": "boom"}}

    def test_overwrites_previous_entries(self, state_path: Path) -> None:
        store = JsonStateStore(state_path)
        store.save({"wg0": "boom"})
        store.save({"wg1": "bang"})
        assert store.load() == {"wg1": "bang"}

    def test_write_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SUDO_USER", raising=False)
        store = JsonStateStore(tmp_path / "missing-dir" / DEFAULT_STATE_FILENAME)
        with pytest.raises(StateError, match="I/O error"):
            store.save({})


class TestBootstrap:
    def test_ensure_exists_creates_empty_object(self, state_path: Path) -> None:
        JsonStateStore(state_path).ensure_exists()
        assert state_path.read_text() == "{}"

    def test_ensure_exists_keeps_content(self, state_path: Path) -> None:
        state_path.write_text('{"error": {"wg0": "boom"}}')
        JsonStateStore(state_path).ensure_exists()
        assert JsonStateStore(state_path).load() == {"wg0": "boom"}

    def test_lock_file_beside_state(self, state_path: Path) -> None:
        store = JsonStateStore(state_path)
        assert store.lock_path == state_path.with_name("status.json.lock")
        with store.locked():
            assert store.lock_path.exists()
            store.save({})
        assert store.load() == {}
