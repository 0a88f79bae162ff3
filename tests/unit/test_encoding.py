"""Unit tests for version and channel-config encoding."""

from __future__ import annotations

import logging

import pytest

from wrapgen.build.encoding import (
    format_version_code,
    header_guard,
    max_channels,
    parse_int,
    path_hash,
    version_code,
)


class TestVersionCode:
    def test_three_components(self):
        assert version_code("1.2.3") == 0x010203

    def test_four_components(self):
        assert version_code("1.2.3.4") == 0x01020304

    def test_missing_components_are_zero(self):
        assert version_code("2") == 0x020000
        assert version_code("") == 0

    def test_non_numeric_component_is_zero(self):
        assert version_code("1.x.3") == 0x010003

    def test_leading_digits_are_used(self):
        assert version_code("1.2.3beta") == 0x010203

    def test_comma_separator(self):
        assert version_code("1,2,3") == 0x010203

    def test_format(self):
        assert format_version_code(0x010203) == "0x10203"
        assert format_version_code(version_code("1.2.3.4")) == "0x1020304"


class TestParseInt:
    @pytest.mark.parametrize("token,expected", [("42", 42), ("7abc", 7), ("abc", 0), ("", 0), ("-3", -3)])
    def test_values(self, token, expected):
        assert parse_int(token) == expected


class TestMaxChannels:
    def test_inputs_and_outputs(self):
        assert max_channels("{1,2},{3,4}", True) == 3
        assert max_channels("{1,2},{3,4}", False) == 4

    def test_spaces(self):
        assert max_channels("{1, 1}, {2, 2}", True) == 2
        assert max_channels("{0, 2}, {1, 1}", False) == 2

    def test_empty(self):
        assert max_channels("", True) == 0

    def test_odd_token_count_is_tolerated(self, caplog):
        with caplog.at_level(logging.WARNING, logger="wrapgen.build.encoding"):
            assert max_channels("{1,2},{5}", True) == 5
            assert max_channels("{1,2},{5}", False) == 2
        assert "Odd number of channel tokens" in caplog.text


class TestHeaderGuard:
    def test_hash_is_stable(self):
        assert path_hash("abc") == 96354
        assert path_hash("") == 0

    def test_hash_wraps_to_32_bits(self):
        assert 0 <= path_hash("/a/very/long/path/to/some/header/file/JuceHeader.h") <= 0xFFFFFFFF

    def test_guard_format(self):
        assert header_guard("APPHEADERFILE", "abc") == "__APPHEADERFILE_17862__"
