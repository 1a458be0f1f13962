from __future__ import annotations

from pathlib import Path

import pytest

from iconbaker.models import ResamplePolicy, Size
from iconbaker.tokens import Flag, Token, TokenKind, classify, tokenize


@pytest.mark.parametrize(
    ("arg", "flag"),
    [
        ("-e", Flag.ENTRY),
        ("-ico", Flag.ICO),
        ("-icns", Flag.ICNS),
        ("-png", Flag.PNG),
        ("-r", Flag.RESAMPLE),
        ("-i", Flag.INTERPOLATE),
        ("--interpolate", Flag.INTERPOLATE),
        ("-p", Flag.PROPORTIONAL),
        ("--proportional", Flag.PROPORTIONAL),
        ("-x", Flag.EXACT),
        ("--exact", Flag.EXACT),
        ("-h", Flag.HELP),
        ("--help", Flag.HELP),
        ("-v", Flag.VERSION),
        ("--version", Flag.VERSION),
    ],
)
def test_flag_spellings(arg: str, flag: Flag) -> None:
    assert classify(arg) == Token(TokenKind.FLAG, flag)


def test_filter_names() -> None:
    assert classify("nearest").value is ResamplePolicy.NEAREST
    assert classify("linear").value is ResamplePolicy.LINEAR
    assert classify("cubic").value is ResamplePolicy.CUBIC


def test_sizes() -> None:
    assert classify("16") == Token(TokenKind.SIZE, Size(16, 16))
    assert classify("32x16") == Token(TokenKind.SIZE, Size(32, 16))
    assert classify("0") == Token(TokenKind.SIZE, Size(0, 0))


def test_sizes_accept_a_leading_plus() -> None:
    assert classify("+16") == Token(TokenKind.SIZE, Size(16, 16))
    assert classify("+32x+16") == Token(TokenKind.SIZE, Size(32, 16))
    assert str(classify("+16")) == "16"


@pytest.mark.parametrize("arg", ["icon.png", "16x", "x16", "-16", "+-16", "16X16", "1.5", "--ico", "Nearest"])
def test_everything_else_is_a_path(arg: str) -> None:
    token = classify(arg)
    assert token.kind is TokenKind.PATH
    assert token.value == Path(arg)


def test_tokenize_strips_executable_path_and_renumbers() -> None:
    tokens = tokenize(["/usr/bin/icon-baker", "-e", "icon.png", "16"])
    assert [t.kind for t in tokens] == [TokenKind.FLAG, TokenKind.PATH, TokenKind.SIZE]
    assert [t.position for t in tokens] == [0, 1, 2]
    assert [t.raw for t in tokens] == ["-e", "icon.png", "16"]


def test_tokenize_keeps_leading_flag() -> None:
    tokens = tokenize(["-h"])
    assert tokens == (Token(TokenKind.FLAG, Flag.HELP),)


def test_tokenize_empty() -> None:
    assert tokenize([]) == ()


def test_round_trip_through_canonical_spelling() -> None:
    args = ["-e", "icon.png", "16", "+32x64", "16x16", "--interpolate", "-r", "cubic",
            "--proportional", "--exact", "-e", "./16", "./-e", "-png", "out.zip", "--help", "--version"]
    tokens = tokenize(args)
    assert tokenize([str(t) for t in tokens]) == tokens
    assert str(tokens[4]) == "16"
    assert str(tokens[3]) == "32x64"


@pytest.mark.parametrize("arg", ["./16", "./32x16", "./-e", "./--exact", "./linear"])
def test_paths_that_look_like_other_tokens_round_trip(arg: str) -> None:
    tokens = tokenize(["-e", arg, "32", "-png"])
    assert tokens[1].kind is TokenKind.PATH
    assert str(tokens[1]) == arg
    assert tokenize([str(t) for t in tokens]) == tokens
