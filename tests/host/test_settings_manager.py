# tests/host/test_settings_manager.py
import json

import pytest

from leversguard.managers.config_manager import ConfigManager, HostSettings
from leversguard.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "INFO"
    },
    "host": {
        "size_gate_kb": 250,
        "workers": 2,
        "extensions": [".html"]
    }
}


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    """
    Een geïsoleerde testomgeving voor de ConfigManager:
    - Plaatst een nep 'settings.json' in een tijdelijke map.
    - Monkeypatched PathUtils om naar dit bestand te wijzen.
    - Herlaadt na de test de echte instellingen.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: settings_file)

    manager = ConfigManager()
    manager.reset()  # Forceer herladen vanuit ons nep-bestand

    yield manager, settings_file

    monkeypatch.undo()
    manager.reset()


def test_singleton():
    assert ConfigManager() is ConfigManager()


def test_get_nested(settings_env):
    manager, _ = settings_env
    assert manager.get_nested("debug.level") == "INFO"
    assert manager.get_nested("host.extensions") == [".html"]
    assert manager.get_nested("non.existent.key", "default") == "default"
    assert manager.get_nested("debug.level.deeper", "default") == "default"


def test_host_section_overlays_defaults(settings_env):
    """Ontbrekende host sleutels krijgen hun standaardwaarde."""
    manager, _ = settings_env
    host = manager.host
    assert host.size_gate_kb == 250
    assert host.workers == 2
    assert host.extensions == (".html",)
    assert host.max_files == HostSettings().max_files
    assert host.excluded_dirs == ("node_modules",)


def test_invalid_host_section_falls_back(settings_env, caplog):
    manager, settings_file = settings_env
    settings_file.write_text(json.dumps({"host": {"workers": 0, "size_gate_kb": "big"}}))

    with caplog.at_level("WARNING"):
        manager.reset()
    assert manager.host == HostSettings()
    assert "Invalid 'host' settings" in caplog.text


def test_reset_reloads_from_disk(settings_env):
    manager, settings_file = settings_env
    settings_file.write_text(json.dumps({"host": {"debounce_ms": 50}}))
    manager.reset()
    assert manager.host.debounce_ms == 50
    assert manager.get_nested("debug.level", "WARNING") == "WARNING"


def test_missing_or_broken_settings(settings_env):
    """Een ontbrekend of kapot bestand geeft standaardwaarden."""
    manager, settings_file = settings_env

    settings_file.write_text("{ not json")
    manager.reset()
    assert manager.host == HostSettings()

    settings_file.write_text("[1, 2]")
    manager.reset()
    assert manager.get_nested("debug.level") is None

    settings_file.unlink()
    manager.reset()
    assert manager.host.workers == 1


def test_packaged_settings_are_valid():
    settings_file = PathUtils.get_settings_file()
    data = json.loads(settings_file.read_text(encoding="utf-8"))
    host = HostSettings.model_validate(data["host"])
    assert host.size_gate_kb == 500
    assert ".tsx" in host.extensions
