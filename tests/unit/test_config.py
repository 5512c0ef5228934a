from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from irl_onboarding.config import AppConfig, dump_default_config, load_config


def test_defaults_when_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("IRL_STORE_DIR", str(tmp_path / "store"))
    config = load_config(tmp_path / "missing.yaml")
    assert config.logging.normalized_level() == "INFO"
    assert config.storage.store_dir == tmp_path / "store"


def test_explicit_file_wins(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(f"logging:\n  level: debug\nstorage:\n  store_dir: {tmp_path / 'custom'}\n", encoding="utf-8")
    config = load_config(path)
    assert config.logging.normalized_level() == "DEBUG"
    assert config.storage.store_dir == tmp_path / "custom"


def test_project_config_is_discovered(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".irl").mkdir()
    (tmp_path / ".irl" / "config.yaml").write_text("logging:\n  level: warning\n", encoding="utf-8")
    assert load_config().logging.level == "warning"


def test_invalid_config_names_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("logging: [1, 2]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="config.yaml"):
        load_config(path)


def test_dump_default_config_round_trips(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config.yaml"
    dump_default_config(target)
    data = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert data["logging"] == {"level": "INFO"}
    assert "store_dir" in data["storage"]
    assert load_config(target).logging.level == AppConfig().logging.level
