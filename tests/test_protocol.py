from __future__ import annotations

import pytest

from chatcommon.protocol import Command, MessageFramer, TooLongError, is_quit, parse_command


def test_frame_prepends_username():
    assert MessageFramer().frame("alice", "hello") == b"alice> hello"


def test_frame_then_unframe_returns_body():
    framer = MessageFramer()
    for username in ("a", "bob", "abcdefghij"):
        body = "hi there, how are you?"
        assert framer.unframe(framer.frame(username, body), len(username)) == body


def test_frame_fills_exactly_to_limit():
    framer = MessageFramer()
    body = "x" * framer.body_limit("alice")
    data = framer.frame("alice", body)
    assert len(data) == 500
    assert framer.body_limit("alice") == 493


def test_frame_rejects_one_byte_over_limit():
    framer = MessageFramer()
    with pytest.raises(TooLongError) as info:
        framer.frame("alice", "x" * 494)
    assert info.value.length == 501
    assert info.value.limit == 500
    assert info.value.fatal is False


def test_frame_limit_counts_encoded_bytes():
    framer = MessageFramer(max_message_len=12)
    # "é" is two bytes in utf-8: 3 + 2 + 6 = 11 fits, 3 + 2 + 8 = 13 does not
    assert framer.frame("bob", "ééé") == "bob> ééé".encode("utf-8")
    with pytest.raises(TooLongError):
        framer.frame("bob", "éééé")


def test_unframe_strips_by_position_not_separator():
    framer = MessageFramer()
    assert framer.unframe(b"bob> hi there", 3) == "hi there"
    assert framer.unframe(b"bob> a> b", 3) == "a> b"


def test_unframe_short_buffer_gives_empty_body():
    framer = MessageFramer()
    assert framer.unframe(b"bo", 3) == ""
    assert framer.unframe(b"", 3) == ""


@pytest.mark.parametrize(
    "body, expected",
    [
        ("\\quit", True),
        ("   \\QuIt extra", True),
        ("\t \\QUIT", True),
        ("\\quit now", True),
        ("\\quitting", True),
        ("quit", False),
        ("", False),
        ("   \t ", False),
        ("\\qui", False),
        ("  x\\quit", False),
        ("\\ quit", False),
        ("/quit", False),
    ],
)
def test_quit_grammar(body, expected):
    assert is_quit(body) is expected


def test_quit_grammar_is_not_applied_to_framed_text():
    framed = MessageFramer().frame("alice", "\\quit").decode("utf-8")
    assert is_quit(framed) is False


def test_parse_command_returns_enum():
    assert parse_command(" \\Quit") is Command.QUIT
    assert parse_command("hello") is None
