"""Tests for the DecodeEngine façade and its config-directory bootstrap."""

import logging
import os
from pathlib import Path

import pytest

from decode_engine import DecodeEngine, Record, SchemaNotFound, TypeCatalog, sym
from decode_engine.engine import SCHEMA_PATH_ENV_VAR, resolve_schema_dirs
from decode_engine.schemas import EngineConfig

from tests.helpers.catalogs import FILMOGRAPHY, FILMOGRAPHY_PERSON, build_provider


PERSON_MANIFEST = """\
module: filmography.person
types:
  t:
    kind: record
    name: filmography.person
    fields:
      - {key: name, type: string}
      - {key: birth_year, type: pos_integer}
"""

FILMOGRAPHY_MANIFEST = """\
module: filmography
types:
  acting_credit:
    kind: map
    fields:
      - {key: film, type: string}
      - {key: "lead?", type: boolean}
  t:
    kind: record
    name: filmography
    fields:
      - key: subject
        type: {kind: ref, module: filmography.person, name: t}
      - key: acting_credits
        type: {kind: list, element: {kind: ref, name: acting_credit}}
        default: []
"""


@pytest.fixture
def config_dir(tmp_path, monkeypatch) -> Path:
    monkeypatch.delenv(SCHEMA_PATH_ENV_VAR, raising=False)
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    (schemas / "filmography.yaml").write_text(FILMOGRAPHY_MANIFEST, encoding="utf-8")
    (schemas / "filmography.person.yaml").write_text(PERSON_MANIFEST, encoding="utf-8")
    return tmp_path


class TestFromConfigDir:
    def test_defaults_without_engine_manifest(self, config_dir) -> None:
        engine = DecodeEngine.from_config_dir(str(config_dir))
        assert isinstance(engine.get_catalog(), TypeCatalog)
        assert engine.decoder.default_type == "t"
        assert engine.catalog.provider.schema_dirs == [config_dir.resolve() / "schemas"]

    def test_decodes_filmography(self, config_dir) -> None:
        engine = DecodeEngine.from_config_dir(str(config_dir))
        payload = {
            "subject": {"name": "Tom Hulce", "birth_year": 1953},
            "acting_credits": [{"film": "Amadeus", "lead?": True}],
        }
        film, err = engine.decode(payload, FILMOGRAPHY)
        assert err is None
        assert film.kind is sym(FILMOGRAPHY)
        assert film.subject == Record(
            sym(FILMOGRAPHY_PERSON), {sym("name"): "Tom Hulce", sym("birth_year"): 1953}
        )
        assert film.acting_credits == [{sym("film"): "Amadeus", sym("lead?"): True}]

    def test_reports_errors_as_values(self, config_dir) -> None:
        engine = DecodeEngine.from_config_dir(str(config_dir))
        film, err = engine.decode({"subject": {"name": "X", "birth_year": -1}}, FILMOGRAPHY)
        assert film is None
        assert err.location == "$.subject.birth_year"

    def test_preload_and_default_type(self, config_dir, caplog) -> None:
        (config_dir / "decode_engine.yaml").write_text(
            "default_type: acting_credit\npreload: [filmography]\n", encoding="utf-8"
        )
        with caplog.at_level(logging.INFO, logger="decode_engine.engine"):
            engine = DecodeEngine.from_config_dir(str(config_dir))
        assert "1 module(s) preloaded" in caplog.text
        assert engine.catalog.is_cached(FILMOGRAPHY)
        assert not engine.catalog.is_cached(FILMOGRAPHY_PERSON)
        credit = engine.decode_or_raise({"film": "Amadeus", "lead?": False}, FILMOGRAPHY)
        assert credit == {sym("film"): "Amadeus", sym("lead?"): False}

    def test_preload_of_unknown_module_fails(self, config_dir) -> None:
        (config_dir / "decode_engine.yaml").write_text("preload: [nowhere]\n", encoding="utf-8")
        with pytest.raises(SchemaNotFound):
            DecodeEngine.from_config_dir(str(config_dir))

    def test_env_override_searched_first(self, config_dir, tmp_path_factory, monkeypatch) -> None:
        override = tmp_path_factory.mktemp("override")
        (override / "filmography.person.yaml").write_text(
            PERSON_MANIFEST.replace("pos_integer", "string"), encoding="utf-8"
        )
        monkeypatch.setenv(SCHEMA_PATH_ENV_VAR, str(override))
        engine = DecodeEngine.from_config_dir(str(config_dir))
        person = engine.decode_or_raise({"name": "X", "birth_year": "1953"}, FILMOGRAPHY_PERSON)
        assert person.birth_year == "1953"


class TestResolveSchemaDirs:
    def test_relative_and_absolute(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv(SCHEMA_PATH_ENV_VAR, raising=False)
        absolute = tmp_path / "elsewhere"
        config = EngineConfig(schema_dirs=["local", str(absolute)])
        assert resolve_schema_dirs(str(tmp_path), config) == [tmp_path.resolve() / "local", absolute]

    def test_env_entries_come_first(self, tmp_path, monkeypatch) -> None:
        first, second = tmp_path / "one", tmp_path / "two"
        monkeypatch.setenv(SCHEMA_PATH_ENV_VAR, f"{first}{os.pathsep}{second}")
        dirs = resolve_schema_dirs(str(tmp_path), EngineConfig())
        assert dirs == [first.resolve(), second.resolve(), tmp_path.resolve() / "schemas"]


class TestInMemoryEngine:
    def test_engine_over_provider(self) -> None:
        engine = DecodeEngine(build_provider(), default_type="t")
        assert engine.decode("s", "strings") == ("s", None)
