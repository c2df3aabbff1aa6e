import json

import pytest

from CalcEngine import config_manager


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point config_manager at a throwaway config.json and return a writer."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)

    def write(settings):
        path.write_text(json.dumps(settings), encoding="utf-8")
        return path

    return write
