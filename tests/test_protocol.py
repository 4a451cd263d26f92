"""Tests for command parsing and dispatch."""

import asyncio

import pytest

from fakes import make_conn, sent
from roomcast.protocol import (
    HELP_TEXT,
    NO_ROOMS_REPLY,
    ROOM_USAGE,
    CommandProtocolHandler,
    parse,
)


@pytest.fixture()
def handler(membership) -> CommandProtocolHandler:
    return CommandProtocolHandler(membership)


def run_lines(handler: CommandProtocolHandler, conn, *lines: str) -> list[str]:
    async def go():
        for line in lines:
            await handler.handle(conn, line)

    asyncio.run(go())
    return sent(conn)


class TestParse:
    def test_plain_text_is_not_a_command(self):
        assert parse("hello /join lobby") is None

    def test_command_name_is_case_insensitive(self):
        cmd = parse("/JoIn lobby")
        assert cmd.name == "join"
        assert cmd.raw_name == "JoIn"
        assert cmd.room == "lobby"

    def test_room_body_rejoined_with_single_spaces(self):
        cmd = parse("/room lobby  hello   there  world")
        assert cmd.room == "lobby"
        assert cmd.body == "hello there world"

    def test_bare_slash(self):
        cmd = parse("/")
        assert cmd.name == ""
        assert cmd.room is None
        assert cmd.body == ""


class TestDispatch:
    def test_plain_echo_goes_only_to_sender(self, handler, membership, broadcaster):
        alice, bob = make_conn("alice"), make_conn("bob")
        asyncio.run(membership.join(bob, "lobby"))
        del sent(bob)[:]

        assert run_lines(handler, alice, "hello") == ["alice: hello"]
        assert sent(bob) == []

    def test_join_and_leave(self, handler, broadcaster):
        alice = make_conn("alice")
        replies = run_lines(handler, alice, "/join lobby", "/leave lobby")
        assert replies == [
            "You have joined room: lobby",
            "alice has joined the room",
            "You have left room: lobby",
        ]
        assert not broadcaster.is_subscribed(alice, "lobby")

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("/join", "Please specify a room name: /join [room]"),
            ("/leave", "Please specify a room name: /leave [room]"),
            ("/room", ROOM_USAGE),
            ("/room lobby", ROOM_USAGE),
        ],
    )
    def test_missing_arguments(self, handler, broadcaster, line, expected):
        alice = make_conn("alice")
        assert run_lines(handler, alice, line) == [expected]
        assert alice.rooms == []

    def test_room_message(self, handler):
        alice = make_conn("alice")
        replies = run_lines(handler, alice, "/join lobby", "/room lobby hi  all")
        assert replies[-1] == "[lobby] alice: hi all"

    def test_room_message_unjoined(self, handler):
        alice = make_conn("alice")
        assert run_lines(handler, alice, "/room dev hi") == [
            "You are not in room dev. Join it first with /join dev"
        ]

    def test_rooms_cannot_list(self, handler):
        alice = make_conn("alice")
        assert run_lines(handler, alice, "/rooms") == ["To join a room, use: /join [room]"]

    def test_myrooms_empty(self, handler):
        alice = make_conn("alice")
        assert run_lines(handler, alice, "/myrooms") == [NO_ROOMS_REPLY]

    def test_myrooms_lists_joined_rooms(self, handler):
        alice = make_conn("alice")
        replies = run_lines(handler, alice, "/join lobby", "/join dev", "/join lobby", "/myrooms")
        assert replies[-1] == "Your rooms:\nlobby\ndev"

    def test_unknown_command(self, handler):
        alice = make_conn("alice")
        assert run_lines(handler, alice, "/foo bar") == [
            "Unknown command: foo. Available commands: /join, /leave, /room, /rooms, /myrooms"
        ]

    def test_uppercase_command_dispatches(self, handler):
        alice = make_conn("alice")
        assert run_lines(handler, alice, "/MYROOMS") == [NO_ROOMS_REPLY]


def test_help_lists_every_command():
    for command in ("/join", "/leave", "/room", "/rooms", "/myrooms"):
        assert command in HELP_TEXT
