import json

from forefix.config import Config


def test_missing_config_uses_defaults(tmp_path):
    config = Config.load(tmp_path / "absent.json")
    assert config.analysis_delay == 2.0
    assert config.default_category == "mobile"
    assert config.resolved_data_dir().name == "data"


def test_config_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"analysis_delay": 0.5, "data_dir": str(tmp_path / "store")}), encoding="utf-8")
    config = Config.load(path)
    assert config.analysis_delay == 0.5
    assert config.resolved_data_dir() == tmp_path / "store"


def test_unreadable_config_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"no_such_setting": 1}), encoding="utf-8")
    assert Config.load(path) == Config()
