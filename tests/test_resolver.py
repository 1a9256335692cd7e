"""Tests for command resolution and the generic field accessor."""

from __future__ import annotations

import pytest

from charsheet_terminal.session.fields import field_command, modify_field, parse_modifier, unescape
from charsheet_terminal.session.parser import parse_command
from charsheet_terminal.session.resolver import CommandResolver, FieldAccess, NamedCommand, Unknown


def _noop(ctx, flags, *args):
    return None


@pytest.fixture
def resolver(character):
    return CommandResolver({"gold": _noop, "roll": _noop, "_debug": _noop}, character)


class TestResolve:
    def test_named_command(self, resolver):
        assert resolver.resolve("roll") == NamedCommand("roll", _noop)

    def test_named_command_wins_over_field(self, resolver):
        assert isinstance(resolver.resolve("gold"), NamedCommand)

    def test_field_fallback(self, resolver):
        assert resolver.resolve("inspiration") == FieldAccess("inspiration")

    def test_unknown(self, resolver):
        assert resolver.resolve("frobnicate") == Unknown("frobnicate")

    def test_private_command_still_resolves(self, resolver):
        assert isinstance(resolver.resolve("_debug"), NamedCommand)

    def test_private_field_is_not_accessible(self, resolver, character):
        character.set("_cache", 1)
        assert isinstance(resolver.resolve("_cache"), Unknown)

    def test_names_merged_sorted_public(self, resolver):
        names = resolver.names
        assert names == sorted(names)
        assert names.count("gold") == 1
        assert "roll" in names
        assert "strength" in names
        assert "_debug" not in names

    def test_complete(self, resolver):
        assert resolver.complete("go") == ["gold"]
        assert "charisma" in resolver.complete("c")


class TestDispatch:
    @pytest.mark.asyncio
    async def test_flags_always_passed(self, ctx, character):
        calls = []

        def record(ctx, flags, *args):
            calls.append((flags, args))

        resolver = CommandResolver({"record": record}, character)
        resolver.dispatch(ctx, parse_command("record --fast a b"))
        assert calls == [({"fast": "a"}, ("b",))]

    @pytest.mark.asyncio
    async def test_unknown_command_writes_one_line(self, ctx, stream):
        resolver = CommandResolver({}, ctx.character)
        resolution, _ = resolver.dispatch(ctx, parse_command("frobnicate"))
        await ctx.output.drain()
        assert isinstance(resolution, Unknown)
        assert stream.getvalue() == "Unknown command: frobnicate\n"

    @pytest.mark.asyncio
    async def test_field_display_via_dispatch(self, ctx, stream):
        resolver = CommandResolver({}, ctx.character)
        resolver.dispatch(ctx, parse_command("gold"))
        await ctx.output.drain()
        assert stream.getvalue() == "50\n"


class TestFieldDisplay:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("proficiencies", "Computers\nStealth\nPerception\n"),
            ("languages", "--empty--\n"),
            ("notes", "--empty--\n"),
            ("background", "--empty--\n"),
            ("inspiration", "false\n"),
            ("contacts", "fixer: Nines\n"),
            ("alignment", "true neutral\n"),
        ],
    )
    async def test_display(self, ctx, stream, name, expected):
        field_command(ctx, name, {})
        await ctx.output.drain()
        assert stream.getvalue() == expected

    @pytest.mark.asyncio
    async def test_help_flag_shows_usage(self, ctx, stream, character):
        field_command(ctx, "inspiration", {"help": True}, "true")
        await ctx.output.drain()
        assert "Usage: inspiration" in stream.getvalue()
        assert character.get("inspiration") is False


class TestFieldModify:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("arg,expected", [("+25", 75), ("-10", 40), ("100", 100)])
    async def test_numeric(self, ctx, character, arg, expected):
        modify_field(ctx, "gold", arg)
        await ctx.output.drain()
        assert character.get("gold") == expected

    @pytest.mark.asyncio
    async def test_numeric_delta_output(self, ctx, stream):
        modify_field(ctx, "gold", "-10")
        await ctx.output.drain()
        assert stream.getvalue() == "50 - 10\ngold: 40\n"

    @pytest.mark.asyncio
    async def test_numeric_rejects_garbage(self, ctx, stream, character):
        modify_field(ctx, "gold", "+lots")
        await ctx.output.drain()
        assert character.get("gold") == 50
        assert "Unknown modifier: +lots" in stream.getvalue()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arg", ["1_000", "1e3", "0x10", "+-5", "5."])
    async def test_numeric_accepts_only_plain_numbers(self, ctx, stream, character, arg):
        field_command(ctx, "gold", {}, arg)
        await ctx.output.drain()
        assert character.get("gold") == 50
        assert stream.getvalue().startswith(f"ERR Unknown modifier: {arg}.")

    @pytest.mark.asyncio
    async def test_boolean_true(self, ctx, character):
        modify_field(ctx, "inspiration", "true")
        await ctx.output.drain()
        assert character.get("inspiration") is True

    @pytest.mark.asyncio
    async def test_boolean_numeric_tokens(self, ctx, character):
        modify_field(ctx, "inspiration", "1")
        assert character.get("inspiration") is True
        modify_field(ctx, "inspiration", "0")
        assert character.get("inspiration") is False
        await ctx.output.drain()

    @pytest.mark.asyncio
    async def test_boolean_rejects_other_tokens(self, ctx, stream, character):
        modify_field(ctx, "inspiration", "maybe")
        await ctx.output.drain()
        assert character.get("inspiration") is False
        assert "Usage: inspiration [true|false|1|0]" in stream.getvalue()

    @pytest.mark.asyncio
    async def test_string_replace(self, ctx, character):
        modify_field(ctx, "alignment", "chaotic good")
        await ctx.output.drain()
        assert character.get("alignment") == "chaotic good"

    @pytest.mark.asyncio
    async def test_string_append_with_escapes(self, ctx, character):
        character.set("notes", "Day 1")
        modify_field(ctx, "notes", r"+\nmet the fixer")
        await ctx.output.drain()
        assert character.get("notes") == "Day 1\nmet the fixer"

    @pytest.mark.asyncio
    async def test_arguments_are_joined(self, ctx, character):
        field_command(ctx, "notes", {}, "+hello", "world")
        await ctx.output.drain()
        assert character.get("notes") == "hello world"

    @pytest.mark.asyncio
    async def test_list_not_modifiable(self, ctx, stream, character):
        modify_field(ctx, "features", "Hack")
        await ctx.output.drain()
        assert character.get("features") == ["Overclock", "Ghost Protocol"]
        assert "cannot be changed" in stream.getvalue()


class TestParseModifier:
    def test_relative(self):
        assert parse_modifier("+5") == (True, 5)
        assert parse_modifier("-5") == (True, -5)

    def test_absolute(self):
        assert parse_modifier("12") == (False, 12)

    def test_float(self):
        assert parse_modifier("+1.5") == (True, 1.5)

    @pytest.mark.parametrize("text", ["", "abc", "+", "nan", "inf", "1_000", "1e3", "\u0663", "- 5"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_modifier(text)

    def test_unescape(self):
        assert unescape(r"a\r\nb") == "a\r\nb"
