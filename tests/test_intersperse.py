import pytest

from utf8_engine import TextBuffer, join, repeat
from utf8_engine.errors import InvalidArgumentError


def test_join_inserts_between_units() -> None:
    assert join("abc", "-").text == "a-b-c"
    assert join("лаба", "_+_").text == "л_+_а_+_б_+_а"


def test_join_output_length() -> None:
    source = "аabcㅊ"
    joiner = "--"

    result = join(source, joiner)

    expected = len(source.encode()) + len(joiner) * (len(source) - 1)
    assert len(result) == expected


def test_join_degenerate_cases_copy_input() -> None:
    assert join("a", "-").text == "a"
    assert join("", "-").text == ""
    assert join("abc", "").text == "abc"


def test_join_borrows_both_inputs() -> None:
    source = TextBuffer.from_text("abc")
    joiner = TextBuffer.from_text(", ")

    result = join(source, joiner)

    assert result.text == "a, b, c"
    assert source.live and joiner.live


def test_join_requires_joiner() -> None:
    with pytest.raises(InvalidArgumentError):
        join("abc", None)


def test_repeat() -> None:
    assert repeat("ab", 3).text == "ababab"
    assert repeat("x", 0).text == ""
    assert repeat("лаба", 2).text == "лабалаба"


def test_repeat_rejects_negative_count() -> None:
    with pytest.raises(InvalidArgumentError):
        repeat("x", -1)
