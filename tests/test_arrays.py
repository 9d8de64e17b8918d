import pytest

from utf8_engine import (
    END_MARKER,
    TextBuffer,
    distance,
    bounds,
    free_array,
    to_buffer,
    to_unit_array,
)
from utf8_engine.errors import (
    ConsumedBufferError,
    MalformedSequenceError,
    OutOfMemoryError,
)
from utf8_engine.runtime.allocator import BufferAllocator, use_allocator

SAMPLES = ["", "a", "лаба", "аabcㅊ", "aé€\U0001d11e", "é"]


def test_to_unit_array_splits_units() -> None:
    array = to_unit_array("аabcㅊ")

    elements = array.with_end_marker()

    assert len(array) == 5
    assert len(elements) == 6
    assert elements[-1] is END_MARKER
    assert array.texts() == ["а", "a", "b", "c", "ㅊ"]


@pytest.mark.parametrize("text", SAMPLES)
def test_unit_array_round_trip(text: str) -> None:
    array = to_unit_array(text)

    rebuilt = to_buffer(array)

    assert rebuilt == text
    assert len(array) == distance(*bounds(text))


def test_to_buffer_borrows_array() -> None:
    array = to_unit_array("лаба")

    to_buffer(array)

    assert array.live
    assert array[1].text == "а"


def test_free_array_releases_every_unit(allocator: BufferAllocator) -> None:
    source = TextBuffer.from_text("лаба")
    array = to_unit_array(source)

    free_array(array)
    source.release()

    stats = allocator.stats()
    assert stats.live_count == 0
    assert stats.allocations == 5
    assert stats.releases == 5


def test_free_array_none_is_noop() -> None:
    free_array(None)


def test_free_array_twice_is_reported() -> None:
    array = to_unit_array("ab")
    free_array(array)

    with pytest.raises(ConsumedBufferError):
        free_array(array)
    with pytest.raises(ConsumedBufferError):
        to_buffer(array)


def test_to_unit_array_cleans_up_on_allocation_failure() -> None:
    limited = BufferAllocator(limit_bytes=2)

    with use_allocator(limited):
        with pytest.raises(OutOfMemoryError):
            to_unit_array("abcd")

    stats = limited.stats()
    assert stats.allocations == 2
    assert stats.releases == 2
    assert stats.live_count == 0


def test_unit_array_context_manager_releases(allocator: BufferAllocator) -> None:
    with to_unit_array("abc") as array:
        assert len(array) == 3

    assert not array.live
    assert allocator.stats().live_count == 0


def test_to_unit_array_cleans_up_on_malformed_source(
    allocator: BufferAllocator,
) -> None:
    with pytest.raises(MalformedSequenceError):
        to_unit_array(b"ab\xff")

    stats = allocator.stats()
    assert stats.allocations == 2
    assert stats.releases == 2
    assert stats.live_count == 0
