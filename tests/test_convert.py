import pytest

import modules.text_case.core.convert as convert_module
from modules.text_case.core.convert import (
    EMPTY_INPUT_ERROR,
    SAMPLE_TEXT,
    SEED_ERROR,
    convert_text,
    export_conversions,
)


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t "])
def test_blank_input_is_rejected(text):
    result, error = convert_text(text)
    assert result is None
    assert error == EMPTY_INPUT_ERROR


def test_blank_input_never_reaches_engine(monkeypatch):
    def explode(*args, **kwargs):
        raise AssertionError("engine called")

    monkeypatch.setattr(convert_module, "convert", explode)
    assert convert_text("  ") == (None, EMPTY_INPUT_ERROR)


def test_invalid_seed_is_rejected():
    assert convert_text("hello", seed="abc") == (None, SEED_ERROR)


def test_convert_text_payload(sample_sentence):
    result, error = convert_text(sample_sentence)
    assert error is None
    assert result["formats"] == 14
    assert result["conversions"]["constantCase"] == "HELLO_WORLD_THIS_IS_A_TEST"
    assert result["stats"] == {
        "total_chars": 28,
        "chars_no_spaces": 23,
        "word_count": 6,
        "sentence_count": 2,
    }
    assert result["deterministic"] is False


def test_seed_pins_random_case():
    first, _ = convert_text(SAMPLE_TEXT, seed="42")
    second, _ = convert_text(SAMPLE_TEXT, seed=" 42 ")
    assert first["deterministic"] is True
    assert first["conversions"]["randomCase"] == second["conversions"]["randomCase"]


def test_blank_seed_means_unseeded():
    result, error = convert_text("hello", seed="  ")
    assert error is None
    assert result["deterministic"] is False


def test_export_conversions_lists_variants_by_display_name():
    result, _ = convert_text("hello world")
    exported = export_conversions(result["conversions"])
    lines = exported.splitlines()
    assert len(lines) == 14
    assert lines[0] == "lowercase: hello world"
    assert "snake_case: hello_world" in lines
    assert "CONSTANT_CASE: HELLO_WORLD" in lines
    assert exported.endswith("\n")


def test_sample_text_converts():
    result, error = convert_text(SAMPLE_TEXT)
    assert error is None
    assert result["conversions"]["kebabCase"].startswith("hello-world-this-is-a-s-a-m-p-l-e-text")


def test_blank_check_uses_browser_whitespace():
    assert convert_text("\ufeff\u3000") == (None, EMPTY_INPUT_ERROR)
    result, error = convert_text("\x1c")
    assert error is None
    assert result["formats"] == 14
