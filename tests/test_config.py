import pytest

from c2cs import utils
from c2cs.csharp import MapperOptions


def test_default_config_tables():
    config = utils.load_default_config()
    assert config["bindgen"]["on_error"] == "abort"
    assert config["bindgen"]["usings"] == ["System", "System.Runtime.InteropServices", "C2CS"]
    assert config["mapping"]["max_workers"] == 1
    assert config["mapping"]["validate_layout"] is False
    assert config["logging"]["dir"] == ""


def test_merge_configs_prefers_user_values():
    default = {"a": {"x": 1, "y": 2}, "b": 3}
    merged = utils._merge_configs({"a": {"x": 10}, "c": 4}, default)
    assert merged == {"a": {"x": 10, "y": 2}, "b": 3, "c": 4}


def test_merge_configs_type_mismatch():
    with pytest.raises(TypeError):
        utils._merge_configs({"a": 1}, {"a": {"x": 1}})


def test_try_load_config_explicit_file(tmp_path):
    path = tmp_path / "custom.toml"
    path.write_text('[bindgen]\nnamespace = "Native"\n\n[mapping]\nmax_workers = 3\n', encoding="utf-8")
    config = utils.try_load_config(str(path))
    assert config["bindgen"]["namespace"] == "Native"
    assert config["bindgen"]["on_error"] == "abort"
    assert config["mapping"]["max_workers"] == 3


def test_try_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        utils.try_load_config(str(tmp_path / "missing.toml"))


def test_try_load_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.toml"
    path.write_text('[bindgen]\non_error = "skip"\n', encoding="utf-8")
    monkeypatch.setenv("C2CS_CONFIG", str(path))
    assert utils.try_load_config()["bindgen"]["on_error"] == "skip"


def test_try_load_config_from_cwd(tmp_path, monkeypatch):
    (tmp_path / "c2cs.toml").write_text('[mapping]\nvalidate_layout = true\n', encoding="utf-8")
    monkeypatch.delenv("C2CS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    assert utils.try_load_config()["mapping"]["validate_layout"] is True


def test_try_load_config_defaults_only(tmp_path, monkeypatch):
    monkeypatch.delenv("C2CS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    assert utils.try_load_config() == utils.load_default_config()


def test_mapper_options_from_config():
    config = utils.load_default_config()
    config["mapping"].update({"max_workers": 0, "validate_layout": True, "boolean_type_name": "Bool8"})
    options = MapperOptions.from_config(config)
    assert options.max_workers == 1
    assert options.validate_layout
    assert options.boolean_type_name == "Bool8"


def test_save_code_creates_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "Out.cs"
    utils.save_code(str(path), "class A {}\n")
    assert path.read_text(encoding="utf-8") == "class A {}\n"


def test_model_schema_is_packaged():
    assert '"$schema"' in utils.load_model_schema_text()
