from __future__ import annotations

import io

import pytest

from chatclient.ui import ConsoleActor
from chatcommon.protocol import ChatLine, ConfigError, Endpoint, UsernameError, load_schema, validate_username


def test_username_of_ten_letters_is_accepted():
    assert validate_username("abcdefghij") == "abcdefghij"
    assert validate_username("B") == "B"


@pytest.mark.parametrize(
    "name, reason",
    [
        ("abcdefghijk", "between 1 and 10"),
        ("", "between 1 and 10"),
        ("bob1", "only contain letters"),
        ("bo b", "only contain letters"),
        ("José", "only contain letters"),
        ("alice\n", "only contain letters"),
        ("abcdefghi\n", "only contain letters"),
    ],
)
def test_invalid_usernames_are_rejected(name, reason):
    with pytest.raises(UsernameError) as info:
        validate_username(name)
    assert reason in info.value.message


def test_username_limit_follows_configured_maximum():
    assert validate_username("abc", max_len=3) == "abc"
    with pytest.raises(UsernameError):
        validate_username("abcd", max_len=3)
    # the cached schema itself is not modified
    assert load_schema("username")["maxLength"] == 10


def test_prompt_username_reprompts_until_valid():
    answers = iter(["bob1", "abcdefghijk", "alice\n"])
    out = io.StringIO()
    actor = ConsoleActor(input_fn=lambda prompt: next(answers), out=out)

    assert actor.prompt_username() == "alice"
    text = out.getvalue()
    assert text.count("Please enter a one word username, up to 10 characters") == 3
    assert "Invalid username format: username can only contain letters" in text
    assert "Invalid username format: must be between 1 and 10 characters" in text


def test_endpoint_parses_port():
    endpoint = Endpoint.parse("localhost", "50001")
    assert endpoint.port == 50001
    assert endpoint.service == "50001"
    assert endpoint.below_recommended() is False
    assert Endpoint.parse("localhost", "8080").below_recommended() is True


@pytest.mark.parametrize("port", ["65536", "-1", "abc", ""])
def test_endpoint_rejects_bad_ports(port):
    with pytest.raises(ConfigError):
        Endpoint.parse("localhost", port)


def test_endpoint_accepts_range_edges():
    assert Endpoint.parse("localhost", "0").port == 0
    assert Endpoint.parse("localhost", "65535").port == 65535


def test_chat_line_renders_with_separator():
    assert ChatLine(sender="bob", body="hi there").render() == "bob> hi there"
