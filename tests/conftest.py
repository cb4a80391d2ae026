import json

import pytest


@pytest.fixture
def write_config(tmp_path):
    """Writes a dictionary as a JSON config file under tmp_path and returns its path."""

    def _write(name: str, content) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(content, f)
        return str(path)

    return _write


@pytest.fixture
def app_config():
    return {
        "app": {
            "name": "A",
            "db": {"host": "h1", "port": 1},
        },
        "debug": False,
        "servers": ["alpha", "beta"],
    }
