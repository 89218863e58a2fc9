"""Tests for the line tokenizer and escape decoder."""

from __future__ import annotations

import pytest

from esh.errors import (
    InvalidHexEscape,
    InvalidUnicodeCodePoint,
    InvalidUnicodeEscape,
    InvalidUtf8,
    ShellParseError,
    TrailingBackslash,
    UnmatchedDoubleQuote,
    UnmatchedSingleQuote,
)
from esh.parser import (
    decode_argument_to_bytes,
    decode_argument_to_text,
    split_command,
    tokenize_to_bytes,
    tokenize_to_text,
)


# ---- basic splitting ------------------------------------------------------

@pytest.mark.parametrize("line", ["", " ", "   \t\n  ", "\r\n", "\t\t"])
def test_blank_input_yields_no_words(line):
    assert tokenize_to_text(line) == []
    assert tokenize_to_bytes(line) == []


def test_simple_words():
    assert tokenize_to_text("hello world foo") == ["hello", "world", "foo"]


def test_extra_whitespace_collapses():
    assert tokenize_to_text("  hello   world  ") == ["hello", "world"]


def test_all_whitespace_kinds_separate_words():
    assert tokenize_to_text("a\tb\nc\rd e") == ["a", "b", "c", "d", "e"]


def test_non_ascii_space_is_part_of_word():
    assert tokenize_to_text("a\u00a0b") == ["a\u00a0b"]


def test_non_ascii_words_are_utf8_encoded():
    assert tokenize_to_bytes("héllo wörld") == ["héllo".encode(), "wörld".encode()]
    assert tokenize_to_text("héllo wörld") == ["héllo", "wörld"]


def test_bytes_flavour_returns_bytes():
    words = tokenize_to_bytes("one two")
    assert words == [b"one", b"two"]
    assert all(isinstance(word, bytes) for word in words)


# ---- single quotes ----------------------------------------------------------

def test_single_quoted():
    assert tokenize_to_text("'hello world' foo") == ["hello world", "foo"]


def test_single_quoted_preserves_backslash():
    assert tokenize_to_text(r"'hello\nworld'") == [r"hello\nworld"]


def test_single_quote_closes_after_backslash():
    assert tokenize_to_text("'abc\\'") == ["abc\\"]


def test_empty_single_quotes():
    assert tokenize_to_text("''") == [""]
    assert tokenize_to_text("'' foo") == ["", "foo"]


def test_unmatched_single_quote():
    with pytest.raises(UnmatchedSingleQuote):
        tokenize_to_text("'hello")


# ---- double quotes ----------------------------------------------------------

def test_double_quoted():
    assert tokenize_to_text('"hello world" foo') == ["hello world", "foo"]


def test_double_quoted_escapes():
    assert tokenize_to_text(r'"hello\nworld"') == ["hello\nworld"]


def test_double_quoted_escaped_quote():
    assert tokenize_to_text(r'"say \"hi\""') == ['say "hi"']


def test_double_quoted_unknown_escape_preserved():
    assert tokenize_to_text(r'"\z"') == [r"\z"]


def test_empty_double_quotes():
    assert tokenize_to_text('""') == [""]


def test_unmatched_double_quote():
    with pytest.raises(UnmatchedDoubleQuote):
        tokenize_to_text('"hello')


def test_trailing_backslash_inside_double_quotes():
    with pytest.raises(TrailingBackslash):
        tokenize_to_text('"abc\\')


# ---- unquoted backslash -----------------------------------------------------

def test_backslash_space_joins_words():
    assert tokenize_to_text(r"hello\ world") == ["hello world"]


def test_backslash_newline_continuation():
    assert tokenize_to_text("hello\\\nworld") == ["helloworld"]


def test_backslash_newline_inside_double_quotes():
    assert tokenize_to_text('"hello\\\nworld"') == ["helloworld"]


def test_continuation_after_space_starts_new_word():
    assert tokenize_to_text("one \\\ntwo") == ["one", "two"]


def test_trailing_backslash():
    with pytest.raises(TrailingBackslash):
        tokenize_to_text("hello\\")


def test_unquoted_unknown_escape_strips_backslash():
    assert tokenize_to_text(r"\z") == ["z"]


# ---- escape sequences ---------------------------------------------------

@pytest.mark.parametrize(
    "line, expected",
    [
        (r"\a", "\x07"),
        (r"\b", "\x08"),
        (r"\e", "\x1b"),
        (r"\E", "\x1b"),
        (r"\f", "\x0c"),
        (r"\n", "\n"),
        (r"\r", "\r"),
        (r"\t", "\t"),
        (r"\v", "\x0b"),
        (r"\\", "\\"),
        (r"\'", "'"),
        (r"\"", '"'),
        (r"\$", "$"),
        (r"\`", "`"),
    ],
)
def test_simple_escapes(line, expected):
    assert tokenize_to_text(line) == [expected]


def test_octal_escape():
    assert tokenize_to_text(r"\0101") == ["A"]


def test_octal_max():
    assert tokenize_to_bytes(r"\0377") == [b"\xff"]


def test_octal_overflow_stops_early():
    # \0777: \077 is '?', another 7 would exceed 255 and stays literal.
    assert tokenize_to_text(r"\0777") == ["?7"]


def test_octal_overflow_leaves_trailing_zero():
    assert tokenize_to_text(r"\0400") == [" 0"]


def test_octal_nul():
    assert tokenize_to_bytes(r"\0") == [b"\x00"]


def test_octal_stops_at_non_octal_digit():
    assert tokenize_to_bytes(r"\08") == [b"\x008"]


def test_octal_takes_at_most_three_digits():
    assert tokenize_to_text(r"\01011") == ["A1"]


def test_hex_escape():
    assert tokenize_to_text(r"\x41\x42\x43") == ["ABC"]


def test_hex_escape_single_digit():
    assert tokenize_to_text(r"\xA") == ["\n"]


def test_hex_escape_takes_at_most_two_digits():
    assert tokenize_to_text(r"\x414") == ["A4"]


@pytest.mark.parametrize("line", [r"\xZZ", "\\x", r'"\xg"'])
def test_hex_escape_invalid(line):
    with pytest.raises(InvalidHexEscape):
        tokenize_to_text(line)


def test_hex_escape_high_byte_in_bytes_flavour():
    assert tokenize_to_bytes(r"\xFF") == [b"\xff"]


def test_hex_escape_high_byte_rejected_as_text():
    with pytest.raises(InvalidUtf8):
        tokenize_to_text(r"ok \xFF")


def test_hex_escapes_can_build_multibyte_utf8():
    assert tokenize_to_text(r"\xc3\xa9") == ["é"]


def test_unicode_escape_ascii():
    assert tokenize_to_text(r"\u{41}") == ["A"]


def test_unicode_escape_emoji():
    assert tokenize_to_bytes(r"\u{1F980}") == ["\U0001f980".encode("utf-8")]
    assert tokenize_to_bytes(r"\u{1f980}") == [b"\xf0\x9f\xa6\x80"]
    assert tokenize_to_text(r"\u{1f980}") == ["\U0001f980"]


def test_unicode_escape_six_digits():
    assert tokenize_to_text(r"\u{000041}") == ["A"]
    assert tokenize_to_text(r"\u{10FFFF}") == ["\U0010ffff"]


@pytest.mark.parametrize(
    "line",
    [r"\u0041", r"\u{}", r"\u{1234567}", r"\u{41", r"\u{4G}", "\\u", r"\u{", r'"\u{zz}"'],
)
def test_unicode_escape_malformed(line):
    with pytest.raises(InvalidUnicodeEscape):
        tokenize_to_text(line)


@pytest.mark.parametrize("value", [0xD800, 0xDFFF, 0x110000, 0xFFFFFF])
def test_unicode_escape_invalid_code_point(value):
    with pytest.raises(InvalidUnicodeCodePoint) as info:
        tokenize_to_text(f"\\u{{{value:X}}}")
    assert info.value.value == value
    assert info.value == InvalidUnicodeCodePoint(value)


# ---- comments ---------------------------------------------------------------

def test_comment_at_start():
    assert tokenize_to_text("# this is a comment") == []


def test_comment_after_words():
    assert tokenize_to_text("hello world # comment") == ["hello", "world"]


def test_comment_stops_scanning_entirely():
    # An unmatched quote inside the comment is never seen.
    assert tokenize_to_text("ok # don't") == ["ok"]


def test_hash_inside_word_is_not_comment():
    assert tokenize_to_text("foo#bar") == ["foo#bar"]


def test_hash_after_empty_quotes_is_literal():
    assert tokenize_to_text("''#x") == ["#x"]


def test_escaped_hash_is_literal():
    assert tokenize_to_text(r"\#x") == ["#x"]


def test_hash_in_quotes_is_not_comment():
    assert tokenize_to_text('"# not a comment"') == ["# not a comment"]
    assert tokenize_to_text("'# not either'") == ["# not either"]


# ---- mixed quoting ----------------------------------------------------------

def test_adjacent_quotes_merge():
    assert tokenize_to_text('hel"lo wo"rld') == ["hello world"]
    assert tokenize_to_text("a\"b\"c'd'") == ["abcd"]


def test_single_inside_double():
    assert tokenize_to_text('"it\'s a test"') == ["it's a test"]


def test_double_inside_single():
    assert tokenize_to_text("'say \"hello\"'") == ['say "hello"']


def test_complex_mixed():
    line = r"""echo "hello 'world'" foo\ bar 'baz "qux"'"""
    assert tokenize_to_text(line) == ["echo", "hello 'world'", "foo bar", 'baz "qux"']


@pytest.mark.parametrize("word", ["plain", "with-dash", "path/to/file.txt", "a=b", "ünïcødé", "x#y"])
def test_plain_words_are_fixed_points(word):
    assert tokenize_to_text(word) == [word]
    assert tokenize_to_text(tokenize_to_text(word)[0]) == [word]


def test_surrogate_escaped_input_round_trips_to_bytes():
    # os.fsdecode() maps undecodable bytes to lone surrogates U+DC80..U+DCFF.
    assert tokenize_to_bytes("a\udcffb") == [b"a\xffb"]


def test_lone_high_surrogate_is_rejected():
    with pytest.raises(InvalidUtf8):
        tokenize_to_bytes("\ud800")


def test_errors_share_base_class():
    with pytest.raises(ShellParseError):
        tokenize_to_text("'open")
    with pytest.raises(ValueError):
        tokenize_to_text('"open')


# ---- single-value decoding -------------------------------------------------

def test_decode_argument_plain():
    assert decode_argument_to_text("hello world") == "hello world"


def test_decode_argument_escapes():
    assert decode_argument_to_text(r"hello\nworld") == "hello\nworld"
    assert decode_argument_to_text(r"\x41\x42\x43") == "ABC"
    assert decode_argument_to_text(r"\u{1f980}") == "\U0001f980"


def test_decode_argument_quotes_and_hash_are_literal():
    assert decode_argument_to_text('hello "world"') == 'hello "world"'
    assert decode_argument_to_text("'single' # kept") == "'single' # kept"


def test_decode_argument_unknown_escape_preserved():
    assert decode_argument_to_text(r"\z") == r"\z"


def test_decode_argument_escaped_space():
    assert decode_argument_to_text(r"a\ b") == "a b"


def test_decode_argument_empty():
    assert decode_argument_to_text("") == ""
    assert decode_argument_to_bytes("") == b""


def test_decode_argument_trailing_backslash():
    with pytest.raises(TrailingBackslash):
        decode_argument_to_text("hello\\")


def test_decode_argument_raw_bytes():
    assert decode_argument_to_bytes(r"\xFF") == b"\xff"
    assert decode_argument_to_bytes(r"\x80\xFE\xFF") == b"\x80\xfe\xff"


def test_decode_argument_text_rejects_invalid_utf8():
    with pytest.raises(InvalidUtf8):
        decode_argument_to_text(r"\x80")


# ---- split_command ----------------------------------------------------------

def test_split_command_empty():
    assert split_command("") == []


def test_split_command_propagates_errors():
    with pytest.raises(UnmatchedDoubleQuote):
        split_command('echo "unterminated')
