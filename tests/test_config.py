# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from woodpecker.config import DEFAULT_API_BASE, FetcherConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com/api/\nuser_token: abc", ".yaml", None),
        (json.dumps({"base_url": "http://example.com/api/", "user_token": "abc"}), ".json", None),
        ("base_url: not-a-url", ".yaml", ValidationError),
        ("pool_limit: 17", ".yaml", ValidationError),
        ("timeout: 0", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("::invalid yaml", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("base_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, FetcherConfig)
        assert str(cfg.base_url) == "http://example.com/api/"
        assert cfg.user_token == "abc"


def test_load_config_default_missing(tmp_path, monkeypatch):
    # without configs/default.yaml the built-in defaults apply
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert str(cfg.base_url) == DEFAULT_API_BASE
    assert cfg.pool_limit == 16
    assert cfg.polite is False
    assert cfg.token_param is None


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("pool_limit: 4\npolite: true", encoding="utf-8")
    cfg = load_config(None)
    assert cfg.pool_limit == 4
    assert cfg.polite is True


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_params_are_stringified(tmp_path):
    cfg_path = write_file(tmp_path, "params: {PKUHelperAPI: 3.0, jsapiver: 201027113050}", ".yaml")
    cfg = load_config(cfg_path)
    assert cfg.params == {"PKUHelperAPI": "3.0", "jsapiver": "201027113050"}


def test_config_is_frozen():
    cfg = FetcherConfig()
    with pytest.raises(ValidationError):
        cfg.user_token = "x"
    updated = cfg.model_copy(update={"user_token": "x"})
    assert updated.user_token == "x"
    assert cfg.user_token == ""
