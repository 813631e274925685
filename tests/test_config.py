import json

import pytest

from lab_scheduler.domain.db import DEFAULT_DB_URL
from lab_scheduler.domain.models import ConstraintSet
from lab_scheduler.io.config import DB_URL_ENV, load_config


@pytest.fixture(autouse=True)
def _no_env_db_url(monkeypatch):
    monkeypatch.delenv(DB_URL_ENV, raising=False)


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.db_url == DEFAULT_DB_URL
    assert cfg.default_constraints == ConstraintSet(sessions_per_day=2, people_per_session=2, sessions_per_assistant=2)
    assert cfg.slot_meta["Fri"]["afternoon"]["time_range"] == "11:00-12:30"


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "db_url: sqlite:///other.db\n"
        "default_constraints:\n"
        "  people_per_session: 3\n"
        "slot_meta:\n"
        "  Tue:\n"
        "    morning: {time_range: '8:00-9:00', label: 'Intro'}\n"
    )
    cfg = load_config(path)
    assert cfg.db_url == "sqlite:///other.db"
    assert cfg.default_constraints.people_per_session == 3
    assert cfg.default_constraints.sessions_per_assistant == 2
    assert cfg.slot_meta["Tue"]["morning"] == {"time_range": "8:00-9:00", "label": "Intro"}
    assert cfg.slot_meta["Tue"]["afternoon"]["time_range"] == "2:00-3:30"


def test_load_json_with_wire_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"default_constraints": {"peoplePerSession": 1, "sessionsPerAssistant": 5}}))
    cfg = load_config(path)
    assert cfg.default_constraints.people_per_session == 1
    assert cfg.default_constraints.sessions_per_assistant == 5


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path).db_url == DEFAULT_DB_URL


def test_invalid_config(tmp_path):
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("timezone: UTC\n")
    with pytest.raises(ValueError, match="timezone"):
        load_config(unknown)

    bad_day = tmp_path / "bad_day.yaml"
    bad_day.write_text("slot_meta:\n  Sat:\n    morning: {time_range: '9-10'}\n")
    with pytest.raises(ValueError, match="Sat"):
        load_config(bad_day)

    not_mapping = tmp_path / "list.yaml"
    not_mapping.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(not_mapping)


def test_env_overrides_db_url(tmp_path, monkeypatch):
    monkeypatch.setenv(DB_URL_ENV, "sqlite:///env.db")
    assert load_config(None).db_url == "sqlite:///env.db"
