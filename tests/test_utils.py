import pytest

from repoforge.core.utils import coalesce, env_bool, load_config, make_alias


def test_make_alias_defaults():
    assert make_alias("My Repo", {}) == "my-repo"


def test_make_alias_replace_map():
    assert make_alias("c++", {"replace_map": {"+": "p"}}) == "cpp"


def test_coalesce_skips_empty():
    assert coalesce(None, "", "x", "y") == "x"
    assert coalesce(None, "") is None


def test_env_bool():
    env = {"A": "TRUE", "B": "no", "C": " "}
    assert env_bool(env, "A", False) is True
    assert env_bool(env, "B", True) is False
    assert env_bool(env, "C", True) is True
    assert env_bool(env, "D", False) is False


def test_load_config(tmp_path):
    assert load_config(str(tmp_path / "missing.yml")) == {}

    path = tmp_path / "config.yml"
    path.write_text("provider: gitflic\nnaming:\n  lowercase: false\n", encoding="utf-8")

    assert load_config(str(path)) == {"provider": "gitflic", "naming": {"lowercase": False}}


def test_load_config_rejects_non_mapping_section(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("naming:\n  - slugify\n", encoding="utf-8")

    with pytest.raises(ValueError, match="naming"):
        load_config(str(path))


def test_load_config_allows_empty_section(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("report:\n", encoding="utf-8")

    assert load_config(str(path)) == {"report": None}
