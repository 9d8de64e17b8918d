import pytest

from utf8_engine import TextBuffer, iter_units, reverse
from utf8_engine.errors import (
    ConsumedBufferError,
    InvalidArgumentError,
    MalformedSequenceError,
)

SAMPLES = ["", "a", "ab", "лаба", "аabcㅊ", "aé€\U0001d11e", "\U0001d11e"]


def make_buffer(text: str) -> TextBuffer:
    return TextBuffer.from_text(text)


def test_reverse_keeps_multibyte_units_intact() -> None:
    buffer = make_buffer("лаба")

    result = reverse(buffer)

    assert result is buffer
    assert buffer.text == "абал"


@pytest.mark.parametrize("text", SAMPLES)
def test_reverse_matches_unit_order(text: str) -> None:
    buffer = make_buffer(text)

    reverse(buffer)

    assert buffer.text == text[::-1]
    assert list(iter_units(buffer)) == list(reversed(list(iter_units(text))))


@pytest.mark.parametrize("text", SAMPLES)
def test_reverse_twice_is_identity(text: str) -> None:
    buffer = make_buffer(text)

    reverse(reverse(buffer))

    assert buffer.text == text


def test_reverse_requires_owned_buffer() -> None:
    with pytest.raises(InvalidArgumentError):
        reverse(b"abc")
    with pytest.raises(InvalidArgumentError):
        reverse(None)


def test_reverse_refuses_released_buffer() -> None:
    buffer = make_buffer("abc")
    buffer.release()

    with pytest.raises(ConsumedBufferError):
        reverse(buffer)


def test_reverse_leaves_malformed_buffer_untouched() -> None:
    buffer = TextBuffer(b"a\xffb\xd0\xbb")

    with pytest.raises(MalformedSequenceError):
        reverse(buffer)

    assert buffer.view() == b"a\xffb\xd0\xbb"
