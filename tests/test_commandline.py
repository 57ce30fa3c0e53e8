#!/usr/bin/env python3
"""
Tests for the CommandLine facade.

This module tests building a command line from descriptions, parsing with
parse() and safe_parse(), leftover arguments, usage output, and combining a
config file with command-line overrides.
"""

import io
import json
import os
import tempfile
from unittest.mock import patch

import pytest
from result import Err, Ok

from optdesc import (
    CommandLine,
    CommandLineError,
    ConfigSet,
    DuplicateOption,
    MalformedDescription,
    MissingRequiredOption,
    ParserSettings,
    TypeMismatch,
    UnknownOption,
)

GREP_OPTIONS = [
    ":help,h:display this help and exit",
    ":recursive,r:equivalent to --directories=recurse",
    "count:max-count,m=int,10:stop after NUM matches",
    "*pattern:regexp,e=string:use PATTERN for matching",
    ":color?bool,true:use markers to highlight the matching strings",
]


class TestCommandLine:
    """Test suite for CommandLine."""

    def test_parse_returns_config_set(self):
        """Test a grep-like vector end to end."""
        cmdline = CommandLine(GREP_OPTIONS)
        config = cmdline.parse(["-r", "-e", "foo", "--regexp=bar", "--color", "src"])

        assert isinstance(config, ConfigSet)
        assert config.get_bool("recursive") is True
        assert config.get_list("pattern") == ["foo", "bar"]
        assert config.get_bool("color") is True
        assert config.get_int("count") == 10
        assert not config.has("help")
        assert cmdline.remaining() == ["src"]

    def test_parse_into_given_store(self):
        cmdline = CommandLine(GREP_OPTIONS)
        store = ConfigSet({"unrelated": 1})

        returned = cmdline.parse(["-m", "3"], store)

        assert returned is store
        assert store.get_int("count") == 3
        assert store.get_int("unrelated") == 1

    def test_parse_defaults_to_sys_argv(self):
        cmdline = CommandLine(GREP_OPTIONS)

        with patch("sys.argv", ["grep", "-m5", "file"]):
            config = cmdline.parse()

        assert config.get_int("count") == 5
        assert cmdline.remaining() == ["file"]

    def test_parse_raises(self):
        cmdline = CommandLine(GREP_OPTIONS)

        with pytest.raises(UnknownOption):
            cmdline.parse(["--nope"])
        with pytest.raises(TypeMismatch):
            cmdline.parse(["--max-count=many"])

    def test_safe_parse_ok(self):
        cmdline = CommandLine(GREP_OPTIONS)
        outcome = cmdline.safe_parse(["-h"])

        assert isinstance(outcome, Ok)
        assert outcome.unwrap().get_bool("help") is True

    def test_safe_parse_err(self):
        cmdline = CommandLine(["!:input,i=string"])
        outcome = cmdline.safe_parse(["x"])

        assert isinstance(outcome, Err)
        error = outcome.unwrap_err()
        assert isinstance(error, MissingRequiredOption)
        assert isinstance(error, CommandLineError)

    def test_remaining_unchanged_after_failure(self):
        cmdline = CommandLine(GREP_OPTIONS)
        cmdline.parse(["a", "b"])
        cmdline.safe_parse(["c", "--nope"])

        assert cmdline.remaining() == ["a", "b"]

    def test_remaining_is_a_copy(self):
        cmdline = CommandLine(GREP_OPTIONS)
        cmdline.parse(["a"])
        cmdline.remaining().append("b")

        assert cmdline.remaining() == ["a"]

    def test_settings_are_used(self):
        cmdline = CommandLine(
            GREP_OPTIONS, settings=ParserSettings(allow_abbreviations=True)
        )
        config = cmdline.parse(["--recur", "--max=2"])

        assert config.get_bool("recursive") is True
        assert config.get_int("count") == 2


class TestBuilding:
    """Test suite for declaration errors."""

    def test_malformed_description_raises(self):
        with pytest.raises(MalformedDescription):
            CommandLine([":ok", ":bad=float"])

    def test_duplicate_raises(self):
        with pytest.raises(DuplicateOption):
            CommandLine([":help,h", ":host,h=string"])

    def test_from_descriptions_ok(self):
        outcome = CommandLine.from_descriptions(GREP_OPTIONS, banner="usage: grep")

        assert isinstance(outcome, Ok)
        cmdline = outcome.unwrap()
        assert cmdline.banner == "usage: grep"
        assert len(cmdline.options) == len(GREP_OPTIONS)

    def test_from_descriptions_err(self):
        outcome = CommandLine.from_descriptions([":name?int"])

        assert isinstance(outcome, Err)
        assert isinstance(outcome.unwrap_err(), MalformedDescription)


class TestUsage:
    """Test suite for usage output."""

    def test_usage_writes_banner_and_options(self):
        cmdline = CommandLine(GREP_OPTIONS)
        cmdline.set_banner("usage: grep [OPTION]... PATTERNS [FILE]...")
        out = io.StringIO()
        cmdline.usage(out)
        text = out.getvalue()

        assert text.startswith("usage: grep [OPTION]... PATTERNS [FILE]...")
        assert "-m, --max-count=INT" in text
        assert "stop after NUM matches" in text
        assert "--color[=BOOL]" in text

    def test_usage_defaults_to_stdout(self):
        cmdline = CommandLine(GREP_OPTIONS, banner="usage: grep")

        with patch("sys.stdout", new_callable=io.StringIO) as mock_stdout:
            cmdline.usage()

        assert mock_stdout.getvalue() == str(cmdline)


class TestConfigFileOverride:
    """Test suite for combining a config file with the command line."""

    def test_command_line_overrides_file(self):
        config_data = {"count": 50, "recursive": True, "pattern": ["from-file"]}
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(config_data, f)
            config_path = f.name

        try:
            cmdline = CommandLine(GREP_OPTIONS)
            config = cmdline.parse(["-m", "7", "-e", "cli"], ConfigSet.from_file(config_path))

            assert config.get_int("count") == 7
            assert config.get_bool("recursive") is True
            assert config.get_list("pattern") == ["from-file", "cli"]
        finally:
            os.unlink(config_path)

    def test_file_value_replaces_declared_default(self):
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"count": 50}, f)
            config_path = f.name

        try:
            config = CommandLine(GREP_OPTIONS).parse([], ConfigSet.from_file(config_path))

            assert config.get_int("count") == 50
        finally:
            os.unlink(config_path)
