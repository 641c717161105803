"""Pytest configuration and fixtures for fargin tests."""
import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(autouse=True)
def reset_settings_singleton():
    """Reset FarginSettings singleton between tests."""
    from fargin.core import settings as settings_module

    original_instance = settings_module.FarginSettings._instance
    settings_module.FarginSettings._instance = None

    yield

    settings_module.FarginSettings._instance = original_instance


@pytest.fixture(autouse=True)
def isolated_settings_file(tmp_path: Path, monkeypatch) -> Path:
    """Point the settings file at a temporary location."""
    settings_file = tmp_path / "settings" / "settings.json"
    monkeypatch.setenv("FARGIN_SETTINGS", str(settings_file))
    return settings_file


@pytest.fixture
def temp_settings(isolated_settings_file: Path) -> Dict[str, Any]:
    """Write a settings file with non-default values."""
    data = {
        "output": {"no_color": True},
        "suggest": {"limit": 2},
        "logging": {"level": "ERROR"}
    }
    isolated_settings_file.parent.mkdir(parents=True, exist_ok=True)
    with open(isolated_settings_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return data


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory."""
    root = tmp_path / "proj"
    root.mkdir()
    return root


@pytest.fixture
def store(project_root: Path):
    """ConfigStore for the empty project directory."""
    from fargin.core.store import ConfigStore

    return ConfigStore(project_root)


@pytest.fixture
def initialized_project(store):
    """Project initialized with a name and description."""
    store.init("Demo", "desc")
    return store


@pytest.fixture
def sample_config():
    """Config with goals and a mix of open and completed markers."""
    from fargin.core.project import ProjectConfig

    config = ProjectConfig.new("Demo", "A demo project")
    config.add_goal("Ship v1")
    config.add_goal("Write docs")
    config.add_marker("design", "Design the data model")
    config.add_marker("build", "Implement the store")
    config.add_marker("release")
    config.complete_marker("design")
    return config
