import pytest

from twoqueue.config import DEFAULTS, apply_overrides, load_cfg
from twoqueue.errors import ConfigurationError


def test_load_without_path_returns_defaults_copy():
    cfg = load_cfg()
    assert cfg == DEFAULTS
    cfg["sim"]["arrival_rate"] = 1.0
    assert DEFAULTS["sim"]["arrival_rate"] == 3.9


def test_apply_overrides_is_recursive_and_copies():
    base = {"sim": {"a": 1, "b": 2}, "routing": {"x": True}}
    new = apply_overrides(base, {"sim": {"b": 3}})
    assert new == {"sim": {"a": 1, "b": 3}, "routing": {"x": True}}
    assert base["sim"]["b"] == 2


def test_load_yaml_merges_over_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("sim:\n  seed: 5\n  strategy: shortest_queue\n")
    cfg = load_cfg(str(path))
    assert cfg["sim"]["seed"] == 5
    assert cfg["sim"]["strategy"] == "shortest_queue"
    assert cfg["sim"]["max_packets"] == 10000
    assert cfg["routing"]["overflow_to_other"] is True


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_cfg(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("sim: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_cfg(str(path))


def test_non_mapping_root(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigurationError):
        load_cfg(str(path))
