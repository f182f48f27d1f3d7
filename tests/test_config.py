import json

from appgift.core.config import load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg["blank_fill"] == "_____"
    assert cfg["name_length"] == 30
    assert cfg["verbose"] is True


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == load_config(None)


def test_file_overrides_are_merged(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"blank_fill": "[...]", "verbose": False}), encoding="utf-8")
    cfg = load_config(str(p))
    assert cfg["blank_fill"] == "[...]"
    assert cfg["verbose"] is False
    assert cfg["json_indent"] == 2


def test_invalid_json_gives_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("{not json", encoding="utf-8")
    assert load_config(str(p)) == load_config(None)


def test_defaults_are_copied():
    cfg = load_config(None)
    cfg["verbose"] = False
    assert load_config(None)["verbose"] is True
