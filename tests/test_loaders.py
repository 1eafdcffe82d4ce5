import json

import pytest

from config_cascade.loaders import ConfigError, ConfigLoadError, find_config_file, load_file


def test_yaml_and_json_files_load_as_dicts(tmp_path):
    yaml_path = tmp_path / "app.yml"
    yaml_path.write_text("name: demo\nretries: 3\nhosts:\n  - a\n  - b\n", encoding="utf-8")
    json_path = tmp_path / "app.json"
    json_path.write_text(json.dumps({"name": "demo", "ratio": 0.5}), encoding="utf-8")

    assert load_file(yaml_path) == {"name": "demo", "retries": 3, "hosts": ["a", "b"]}
    assert load_file(json_path) == {"name": "demo", "ratio": 0.5}


def test_empty_yaml_loads_as_empty_mapping(tmp_path):
    path = tmp_path / "blank.yaml"
    path.write_text("# nothing configured\n", encoding="utf-8")

    assert load_file(path) == {}


def test_python_config_module(tmp_path):
    path = tmp_path / "auth.py"
    path.write_text(
        "import os\n"
        "config = {\n"
        "    'driver': 'mongo',\n"
        "    'timeout': 30 * 2,\n"
        "    'separator': os.sep,\n"
        "}\n",
        encoding="utf-8",
    )

    loaded = load_file(path)
    assert loaded["driver"] == "mongo"
    assert loaded["timeout"] == 60


def test_python_module_without_config_is_rejected(tmp_path):
    path = tmp_path / "auth.py"
    path.write_text("settings = {'a': 1}\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="config"):
        load_file(path)


def test_python_module_errors_are_wrapped(tmp_path):
    path = tmp_path / "auth.py"
    path.write_text("config = {'a': 1 / 0}\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError) as excinfo:
        load_file(path)
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_invalid_yaml_is_wrapped(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("key: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError) as excinfo:
        load_file(path)
    assert excinfo.value.path == path
    assert isinstance(excinfo.value, ConfigError)


def test_non_mapping_top_level_is_rejected(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="mapping"):
        load_file(path)


def test_unknown_suffix_is_rejected(tmp_path):
    path = tmp_path / "app.ini"
    path.write_text("[section]\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="unsupported"):
        load_file(path)


def test_find_config_file_respects_extension_order(tmp_path):
    (tmp_path / "db.json").write_text("{}", encoding="utf-8")
    (tmp_path / "db.yml").write_text("{}", encoding="utf-8")
    (tmp_path / "db.yaml").mkdir()

    assert find_config_file(tmp_path, "db", [".yaml", ".yml", ".json"]) == tmp_path / "db.yml"
    assert find_config_file(tmp_path, "db", [".json"]) == tmp_path / "db.json"
    assert find_config_file(tmp_path, "cache", [".yaml", ".json"]) is None
    assert find_config_file(tmp_path / "missing", "db", [".json"]) is None
