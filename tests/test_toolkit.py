"""Tests for the Toolkit service object, config loading and logging."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import json
import logging

import pytest

from fuzzy_censor import (
    CensorshipPolicy, PhoneMatchPolicy, Toolkit, ToolkitConfig, MASK,
    create_toolkit, load_config, load_from_yaml,
)
from fuzzy_censor.cli import main
from fuzzy_censor.log import JsonFormatter


# ── Toolkit ──────────────────────────────────────────────────────────

def test_toolkit_defaults_match_functions():
    tk = Toolkit()
    assert tk.transliterate("Čačak") == "Cacak"
    assert tk.edit_distance("kitten", "sitting") == 3
    assert tk.similarity("flaw", "lawn") == pytest.approx(0.5)
    assert tk.censor_text("1234567890") == "1234******"
    assert tk.censor_text("1234567890", spaced=True) == "1234* ******"
    assert tk.is_valid_phone_number("123-456-789")
    assert tk.censor_phone("0038763111222") == "0038763******"
    assert tk.same_phone_numbers("0038763111222", "063111222")


def test_toolkit_bound_policies():
    tk = Toolkit(ToolkitConfig(
        censorship=CensorshipPolicy(max_visible_prefix=2, min_visible_prefix=1),
        phone=PhoneMatchPolicy(suffix_digits=4),
        spaced=True,
    ))
    assert tk.censor_text("abcdef") == "ab* ****"
    assert tk.censor_text("abcdef", spaced=False) == "ab****"
    assert tk.censor_text("a") == MASK
    assert tk.censor_phone("063111222") == "0631*****"
    assert tk.same_phone_numbers("99991222", "1222")


def test_toolkit_fold_diacritics():
    plain = Toolkit()
    folded = Toolkit(ToolkitConfig(fold_diacritics=True))
    assert plain.similarity("Čačak", "Cacak") == pytest.approx(0.6)
    assert folded.similarity("Čačak", "Cacak") == 1.0
    assert folded.similarity(None, "Cacak") == 0.0


def test_toolkit_best_match_uses_threshold():
    tk = Toolkit(ToolkitConfig(similarity_threshold=0.8, fold_diacritics=True))
    assert tk.best_match("Cacak", ["Kraljevo", "Čačak"]) == ("Čačak", 1.0)
    assert tk.best_match("Beograd", ["Kraljevo", "Čačak"]) is None


def test_toolkit_rank():
    tk = Toolkit()
    ranked = tk.rank("abc", ["xyz", "abd", "abc"], threshold=0.5)
    assert [c for c, _ in ranked] == ["abc", "abd"]


def test_find_duplicates():
    values = ["Petrović", "Petrovic", "Jovanović"]
    folded = Toolkit(ToolkitConfig(fold_diacritics=True, similarity_threshold=0.8))
    assert folded.find_duplicates(values) == [(0, 1, 1.0)]

    strict = Toolkit(ToolkitConfig(similarity_threshold=0.9))
    assert strict.find_duplicates(values) == []

    loose = Toolkit(ToolkitConfig(similarity_threshold=0.8))
    assert loose.find_duplicates(values) == [(0, 1, pytest.approx(0.875))]


def test_censor_fields_does_not_mutate():
    tk = Toolkit()
    records = [
        {"name": "Jovana", "phone": "0038763111222", "age": 30},
        {"name": None, "note": "untouched"},
    ]
    out = tk.censor_fields(records, ["name"], phone_fields=["phone"])
    assert out[0] == {"name": "Jova**", "phone": "0038763******", "age": 30}
    assert out[1] is records[1]
    assert records[0]["name"] == "Jovana"
    assert records[0]["phone"] == "0038763111222"


def test_toolkit_config_threshold_validation():
    with pytest.raises(ValueError):
        ToolkitConfig(similarity_threshold=1.5)


# ── Config ───────────────────────────────────────────────────────────

def test_load_config_defaults():
    cfg = load_config({})
    assert cfg["max_visible_prefix"] == 4
    assert cfg["min_visible_prefix"] == 2
    assert cfg["suffix_digits"] == 7
    assert cfg["spaced"] is False
    assert cfg["similarity_threshold"] == 0.8


def test_load_config_nested():
    cfg = load_config({"fuzzy_censor": {
        "censorship": {"max_visible_prefix": 6, "spaced": True},
        "phone": {"suffix_digits": 9},
        "fold_diacritics": True,
    }})
    assert cfg["max_visible_prefix"] == 6
    assert cfg["min_visible_prefix"] == 2
    assert cfg["spaced"] is True
    assert cfg["suffix_digits"] == 9
    assert cfg["fold_diacritics"] is True


def test_load_config_rejects_non_mapping():
    with pytest.raises(ValueError):
        load_config(["not", "a", "mapping"])


def test_create_toolkit_from_dict():
    tk = create_toolkit({"censorship": {"max_visible_prefix": 3, "min_visible_prefix": 1}})
    assert tk.censor_text("abcdef") == "abc***"
    assert create_toolkit().censor_text("abcdef") == "abcd**"


@pytest.mark.parametrize("config", [
    {"censorship": {"max_visible_prefix": 2, "min_visible_prefix": 3}},
    {"censorship": 5},
    {"phone": "0038763"},
    {"similarity_threshold": None},
    {"similarity_threshold": "high"},
    {"phone": {"pattern": "["}},
    {"phone": {"pattern": 12}},
])
def test_create_toolkit_invalid_policy(config):
    with pytest.raises(ValueError):
        create_toolkit(config)


def test_load_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "fuzzy_censor:\n"
        "  censorship:\n"
        "    max_visible_prefix: 5\n"
        "    min_visible_prefix: 2\n"
        "  phone:\n"
        "    suffix_digits: 6\n"
        "  similarity_threshold: 0.7\n",
        encoding="utf-8",
    )
    cfg = load_from_yaml(path)
    assert cfg["max_visible_prefix"] == 5
    assert cfg["suffix_digits"] == 6

    tk = create_toolkit(cfg)
    assert tk.censor_text("abcdefg") == "abcde**"
    assert tk.censor_phone("063111222") == "063111***"
    assert tk.config.similarity_threshold == 0.7


def test_load_from_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_from_yaml(path) == load_config({})


def test_load_from_yaml_invalid(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("fuzzy_censor: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_from_yaml(path)


# ── Logging ──────────────────────────────────────────────────────────

def test_json_formatter():
    record = logging.LogRecord("fuzzy_censor.test", logging.INFO, __file__, 1,
                               "hello %s", ("world",), None)
    record.extra_data = {"route": "/similarity", "level": "spoofed"}
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "hello world"
    assert line["level"] == "info"
    assert line["logger"] == "fuzzy_censor.test"
    assert line["route"] == "/similarity"
    assert line["ts"].endswith("+00:00")


def test_cli_logs_command_context(capsys):
    stream = io.StringIO()
    logger = logging.getLogger("fuzzy_censor")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    try:
        main(["--log-level", "DEBUG", "distance", "kitten", "sitting"])
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.WARNING)
    lines = [json.loads(l) for l in stream.getvalue().splitlines()]
    assert {"command": "distance"}.items() <= lines[-1].items()
    assert "kitten" not in stream.getvalue()
    assert capsys.readouterr().out == "3\n"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
