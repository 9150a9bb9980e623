import pytest


def _feed_all(buffer, text):
    return [buffer.feed(ch) for ch in text]


def test_trigger_word_toggles(main_module):
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "cc") == [False, True]
    assert buffer.contents == ""


def test_trigger_is_case_insensitive(main_module):
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "cC") == [False, True]
    assert _feed_all(buffer, "CC") == [False, True]


def test_prefix_overflow_then_trigger_toggles(main_module):
    # "xc" fills the buffer and the next "c" overflows it.
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "xcc") == [False, False, False]
    assert buffer.contents == ""
    assert _feed_all(buffer, "cc") == [False, True]


def test_second_trigger_toggles_again(main_module):
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "cccc") == [False, True, False, True]


def test_overflow_clears_without_toggle(main_module):
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "abc") == [False, False, False]
    assert buffer.contents == ""


def test_non_alphanumerics_are_ignored(main_module):
    buffer = main_module.InputBuffer()
    assert _feed_all(buffer, "c !-c") == [False, False, False, False, True]
    assert buffer.feed(None) is False
    assert buffer.feed("é") is False
    assert buffer.contents == ""


@pytest.mark.parametrize("text", ["abcdefg", "c1c2c3", "wasd", "ca cb", "c x c", "0123456789"])
def test_text_without_trigger_never_toggles(main_module, text):
    buffer = main_module.InputBuffer()
    assert not any(_feed_all(buffer, text))
