from modules.text_case.core.stats import TextStats, stats


def test_stats_sentence(sample_sentence):
    assert stats(sample_sentence) == TextStats(
        total_chars=28,
        chars_no_spaces=23,
        word_count=6,
        sentence_count=2,
    )


def test_stats_empty_and_blank():
    assert stats("") == (0, 0, 0, 0)
    assert stats("   ") == (3, 0, 0, 0)


def test_stats_mixed_whitespace():
    assert stats("a\tb\nc") == (5, 3, 3, 1)


def test_stats_punctuation_runs_count_once():
    result = stats("Wait... what?! Really")
    assert result.sentence_count == 3
    assert result.word_count == 3


def test_stats_counts_utf16_code_units():
    assert stats("😀ab") == (4, 4, 1, 1)
    assert stats("hi 😀") == (5, 4, 2, 1)


def test_stats_browser_whitespace():
    assert stats("a\ufeffb") == (3, 2, 2, 1)
    assert stats("a\x1cb") == (3, 3, 1, 1)
    assert stats("\ufeff.") == (2, 1, 1, 0)
