"""Shared fixtures for the nimbus test suite."""
import json
import os
from pathlib import Path

import pytest
import yaml

from nimbus.config import credentials, preferences


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Drop any loaded config and project/location overrides between tests."""
    for var in ("GCP_PROJECT", "GCP_LOCATION", "AWS_REGION"):
        monkeypatch.delenv(var, raising=False)
    # get_config() writes this variable directly
    saved_credentials = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    credentials.reset_config()
    yield
    credentials.reset_config()
    if saved_credentials is None:
        os.environ.pop("GOOGLE_APPLICATION_CREDENTIALS", None)
    else:
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = saved_credentials


@pytest.fixture
def temp_home(tmp_path, monkeypatch):
    """Fixture to create a temporary home directory for testing."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    fake_config_dir = fake_home / ".config" / "nimbus"
    monkeypatch.setattr(preferences, "PREFERENCES_DIR", fake_config_dir)
    monkeypatch.setattr(preferences, "PREFERENCES_FILE", fake_config_dir / "preferences.json")

    return fake_home


@pytest.fixture
def temp_config_dir(temp_home):
    config_dir = temp_home / ".config" / "nimbus"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def service_account_file(tmp_path):
    sa_file = tmp_path / "test-sa.json"
    sa_file.write_text(json.dumps({"type": "service_account"}))
    return sa_file


@pytest.fixture
def write_config(temp_config_dir):
    """Write a config mapping to the default config location and return its path."""
    def _write(content, path=None):
        config_file = Path(path) if path else temp_config_dir / "config.yml"
        with open(config_file, "w") as f:
            yaml.dump(content, f)
        return config_file
    return _write


@pytest.fixture
def temp_config_file(write_config, service_account_file):
    """A valid config at the default location."""
    return write_config({
        "authentication": {
            "type": "service_account",
            "service_account_path": str(service_account_file),
        },
        "gcp": {
            "project_id": "test-project",
            "location": "us-central1",
        },
    })
