import pytest

from utf8_engine import NPOS, TextBuffer, UnitRangeError, substring
from utf8_engine.errors import ErrorReason, InvalidArgumentError

SAMPLES = ["", "a", "лаба", "аabcㅊ", "aé€\U0001d11e"]


def test_substring_counts_units_not_bytes() -> None:
    result = substring("лаба", 1, 2)

    assert result.text == "аб"


@pytest.mark.parametrize("text", SAMPLES)
def test_whole_substring_is_identity(text: str) -> None:
    assert substring(text, 0, NPOS) == text
    assert substring(text, 0) == text


def test_substring_clamps_count_to_remainder() -> None:
    assert substring("лаба", 2, 10).text == "ба"


def test_substring_at_end_is_empty() -> None:
    assert substring("лаба", 4).text == ""
    assert substring("лаба", 1, 0).text == ""


def test_substring_offset_beyond_units_is_range_error() -> None:
    with pytest.raises(UnitRangeError) as info:
        substring("лаба", 5, 1)

    assert info.value.reason is ErrorReason.RANGE_ERROR
    assert info.value.available == 4


def test_substring_borrows_source() -> None:
    source = TextBuffer.from_text("аabcㅊ")

    piece = substring(source, 4)

    assert piece.text == "ㅊ"
    assert source.live
    assert source.text == "аabcㅊ"


def test_substring_rejects_negative_arguments() -> None:
    with pytest.raises(InvalidArgumentError):
        substring("abc", -1)
    with pytest.raises(InvalidArgumentError):
        substring("abc", 0, -2)


def test_substring_requires_value() -> None:
    with pytest.raises(InvalidArgumentError):
        substring(None, 0)
