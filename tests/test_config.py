import json

import pytest

from src.bpgraph.config import AppConfig, ConfigManager


def test_config_read_default(tmp_path):
    manager = ConfigManager(str(tmp_path / "missing.json"))
    assert manager.data == AppConfig()
    assert manager.get("legacy", "identity_policy") == "literal"
    assert manager.get("layout", "arrow_spacing") == 250


def test_config_update_persists(tmp_path):
    path = tmp_path / "bpgraph.json"
    manager = ConfigManager(str(path))

    manager.update("legacy", "identity_policy", "windowed")

    assert manager.data.legacy.identity_policy == "windowed"
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["legacy"]["identity_policy"] == "windowed"

    reloaded = ConfigManager(str(path))
    assert reloaded.get("legacy", "identity_policy") == "windowed"


@pytest.mark.parametrize("section, key, value", [
    ("nope", "debug_mode", True),
    ("general", "nope", True),
    ("legacy", "identity_policy", "random"),
    ("legacy", "reuse_window", -1),
])
def test_config_update_rejects_invalid(tmp_path, section, key, value):
    manager = ConfigManager(str(tmp_path / "bpgraph.json"))
    with pytest.raises(ValueError):
        manager.update(section, key, value)
    assert manager.data == AppConfig()


def test_config_load_toml(tmp_path):
    path = tmp_path / "bpgraph.toml"
    path.write_text(
        '[layout]\narrow_spacing = 300\n\n[legacy]\nidentity_policy = "windowed"\nreuse_window = 5\n',
        encoding="utf-8"
    )
    manager = ConfigManager(str(path))
    assert manager.data.layout.arrow_spacing == 300
    assert manager.data.legacy.reuse_window == 5


def test_config_broken_file_keeps_defaults(tmp_path):
    path = tmp_path / "bpgraph.json"
    path.write_text("{broken", encoding="utf-8")
    manager = ConfigManager(str(path))
    assert manager.data == AppConfig()
