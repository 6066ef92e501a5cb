# tests/unit/core/test_engine_settings.py
"""Tests for EngineSettings and YAML loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mockdb.contracts.errors import ConfiguredError
from mockdb.core.config import EngineSettings, deep_merge, load_settings
from mockdb.engine.database import MockEngine


class TestEngineSettings:
    def test_defaults(self) -> None:
        settings = EngineSettings()
        assert settings.host is None
        assert settings.servers == {}
        assert settings.identifier_program is None
        assert settings.fetch_program is None
        assert settings.rowcount_program is None
        assert settings.extension is None
        assert settings.log_buffer is None

    def test_frozen(self) -> None:
        settings = EngineSettings()
        with pytest.raises(ValidationError):
            settings.host = "h"  # type: ignore[misc]

    def test_extra_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(autoid=1)  # type: ignore[call-arg]

    def test_programs_held_by_identity(self) -> None:
        def program(query: str) -> int:
            return 1

        rows = [{"id": 1}]
        buffer: list[str] = []
        settings = EngineSettings(
            fetch_program=rows,
            rowcount_program=program,
            identifier_program=ConfiguredError,
            log_buffer=buffer,
        )
        assert settings.fetch_program is rows
        assert settings.rowcount_program is program
        assert settings.identifier_program is ConfiguredError
        assert settings.log_buffer is buffer

    def test_log_buffer_must_be_list(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(log_buffer=("a",))

    def test_connection_options(self) -> None:
        assert EngineSettings().connection_options() == {}
        assert EngineSettings(host="h").connection_options() == {"host": "h"}

    def test_with_overrides(self) -> None:
        buffer: list[str] = []
        settings = EngineSettings(host="h", log_buffer=buffer)
        updated = settings.with_overrides(rowcount_program=2)
        assert updated.rowcount_program == 2
        assert updated.host == "h"
        assert updated.log_buffer is buffer
        assert settings.rowcount_program is None

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings().with_overrides(hosts="h")


class TestDeepMerge:
    def test_nested_override(self) -> None:
        base = {"servers": {"a": {"host": "1", "port": 5}}, "host": "x"}
        override = {"servers": {"a": {"host": "2"}, "b": {}}}
        assert deep_merge(base, override) == {
            "servers": {"a": {"host": "2", "port": 5}, "b": {}},
            "host": "x",
        }

    def test_inputs_not_mutated(self) -> None:
        base = {"servers": {"a": {"host": "1"}}}
        deep_merge(base, {"servers": {"a": {"host": "2"}}})
        assert base == {"servers": {"a": {"host": "1"}}}

    def test_non_dict_replaces(self) -> None:
        assert deep_merge({"fetch_program": [{"id": 1}]}, {"fetch_program": None}) == {"fetch_program": None}


class TestLoadSettings:
    def test_no_file(self) -> None:
        assert load_settings() == EngineSettings()

    def test_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "mockdb.yaml"
        config.write_text(
            "host: primary\n"
            "rowcount_program: [1, 2]\n"
            "identifier_program: 100\n"
            "fetch_program:\n"
            "  - {id: 1, name: a}\n"
            "  - {id: 2, name: b}\n"
            "servers:\n"
            "  replica:\n"
            "    host: r1\n"
        )
        settings = load_settings(config)

        engine = MockEngine(settings)
        assert engine.dataset("SELECT").all() == [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
        assert engine.execute_for_mutation("UPDATE") == 1
        assert engine.execute_for_insert("INSERT") == 100
        assert engine.server_options("replica") == {"host": "r1"}
        assert engine.drain_log()[0] == "SELECT -- primary"

    def test_overrides_win(self, tmp_path: Path) -> None:
        config = tmp_path / "mockdb.yaml"
        config.write_text("host: primary\nservers:\n  a: {host: x, port: 1}\n")
        settings = load_settings(config, overrides={"host": "other", "servers": {"a": {"port": 2}}})
        assert settings.host == "other"
        assert settings.servers == {"a": {"host": "x", "port": 2}}

    def test_empty_file(self, tmp_path: Path) -> None:
        config = tmp_path / "empty.yaml"
        config.write_text("")
        assert load_settings(config) == EngineSettings()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        config = tmp_path / "list.yaml"
        config.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="YAML mapping"):
            load_settings(config)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        config = tmp_path / "bad.yaml"
        config.write_text("numrows: 3\n")
        with pytest.raises(ValidationError):
            load_settings(config)
