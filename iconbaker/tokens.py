"""Tokenizer: classify raw command-line strings into typed tokens."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from iconbaker.models import ResamplePolicy, Size

# An optional leading "+" is accepted, as unsigned integer parsing allows it.
_SCALAR_RE = re.compile(r"\+?\d+", re.ASCII)
_PAIR_RE = re.compile(r"(\+?\d+)x(\+?\d+)", re.ASCII)


class Flag(Enum):
    ENTRY = "-e"
    ICO = "-ico"
    ICNS = "-icns"
    PNG = "-png"
    RESAMPLE = "-r"
    INTERPOLATE = "-i"
    PROPORTIONAL = "-p"
    EXACT = "-x"
    HELP = "-h"
    VERSION = "-v"


# Canonical spellings come from the Flag values; these are the long aliases.
FLAG_SPELLINGS = {flag.value: flag for flag in Flag}
FLAG_SPELLINGS.update({
    "--interpolate": Flag.INTERPOLATE,
    "--proportional": Flag.PROPORTIONAL,
    "--exact": Flag.EXACT,
    "--help": Flag.HELP,
    "--version": Flag.VERSION,
})

FILTER_NAMES = {policy.value: policy for policy in ResamplePolicy}


class TokenKind(Enum):
    FLAG = "flag"
    PATH = "path"
    SIZE = "size"
    FILTER = "filter"


@dataclass(frozen=True)
class Token:
    """A classified argument.

    Equality only looks at ``kind`` and ``value``; ``raw`` and ``position``
    describe where the token came from.
    """

    kind: TokenKind
    value: Flag | Path | Size | ResamplePolicy
    raw: str = field(default="", compare=False)
    position: int = field(default=0, compare=False)

    def is_flag(self, *flags: Flag) -> bool:
        return self.kind is TokenKind.FLAG and self.value in flags

    def __str__(self) -> str:
        if self.kind is TokenKind.PATH:
            text = str(self.value)
            if classify(text).kind is not TokenKind.PATH:
                # "./16" and "./-e" must not read back as a size or a flag.
                return f"./{text}"
            return text
        if self.kind is TokenKind.SIZE:
            return str(self.value)
        return self.value.value


def classify(arg: str, position: int = 0) -> Token:
    """Map one argument string to exactly one token."""
    if arg in FLAG_SPELLINGS:
        return Token(TokenKind.FLAG, FLAG_SPELLINGS[arg], arg, position)
    if arg in FILTER_NAMES:
        return Token(TokenKind.FILTER, FILTER_NAMES[arg], arg, position)
    if _SCALAR_RE.fullmatch(arg):
        return Token(TokenKind.SIZE, Size.square(int(arg)), arg, position)
    match = _PAIR_RE.fullmatch(arg)
    if match:
        size = Size(int(match.group(1)), int(match.group(2)))
        return Token(TokenKind.SIZE, size, arg, position)
    return Token(TokenKind.PATH, Path(arg), arg, position)


def tokenize(args: list[str]) -> tuple[Token, ...]:
    """Classify every argument, dropping a leading executable path.

    Positions are renumbered after the drop so they index the returned tuple.
    """
    args = list(args)
    if args and classify(args[0]).kind is TokenKind.PATH:
        args = args[1:]
    return tuple(classify(arg, i) for i, arg in enumerate(args))
