"""Grammar parser over the token tuple.

    Command := Help | Version | (Entry+ ContainerSelector Path?)
    Entry   := EntryFlag Path Size+ Option*
    Option  := ResampleSelector FilterName | Interpolate | Proportional | Exact

Each step takes the immutable token tuple and an index, and returns the index
of the first token it did not consume. One token of lookahead is enough.
"""

import logging

from iconbaker.errors import (
    MissingOutputFlag,
    MissingOutputPath,
    UnexpectedEnd,
    UnexpectedToken,
)
from iconbaker.models import (
    ContainerKind,
    Entry,
    FitPolicy,
    HelpCommand,
    IconRequest,
    Output,
    ResamplePolicy,
    VersionCommand,
)
from iconbaker.tokens import Flag, Token, TokenKind

logger = logging.getLogger(__name__)

CONTAINER_FLAGS = {
    Flag.ICO: ContainerKind.ICO,
    Flag.ICNS: ContainerKind.ICNS,
    Flag.PNG: ContainerKind.PNG_SEQUENCE,
}


def parse(tokens: tuple[Token, ...], *,
          default_resample: ResamplePolicy = ResamplePolicy.NEAREST,
          default_fit: FitPolicy = FitPolicy.EXACT,
          stdout_ok: bool = True) -> HelpCommand | VersionCommand | IconRequest:
    """Parse a token tuple into a Help, Version or unvalidated icon request.

    ``stdout_ok`` tells whether standard output may receive container bytes;
    when it may not, an icon command without an output path is rejected.
    """
    if not tokens:
        return HelpCommand()

    first = tokens[0]
    if first.is_flag(Flag.HELP):
        return _expect_end(tokens, 1, HelpCommand())
    if first.is_flag(Flag.VERSION):
        return _expect_end(tokens, 1, VersionCommand())
    if not first.is_flag(Flag.ENTRY):
        raise UnexpectedToken(first.position)

    entries: list[Entry] = []
    i = 0
    while i < len(tokens) and tokens[i].is_flag(Flag.ENTRY):
        i = _entry(tokens, i, entries, default_resample, default_fit)

    if i == len(tokens):
        raise MissingOutputFlag()
    return _container(tokens, i, entries, stdout_ok)


def _peek(tokens: tuple[Token, ...], i: int) -> Token:
    if i >= len(tokens):
        raise UnexpectedEnd()
    return tokens[i]


def _entry(tokens, i, entries, resample, fit) -> int:
    """Consume ``-e <path> <size>... [options]`` starting at the entry flag."""
    path_token = _peek(tokens, i + 1)
    if path_token.kind is not TokenKind.PATH:
        raise UnexpectedToken(path_token.position)

    sizes = []
    i += 2
    while i < len(tokens) and tokens[i].kind is TokenKind.SIZE:
        size = tokens[i].value
        if size.width == 0 or size.height == 0:
            raise UnexpectedToken(tokens[i].position)
        sizes.append((size, tokens[i].position))
        i += 1

    if not sizes:
        raise UnexpectedToken(_peek(tokens, i).position)

    i, resample, fit = _options(tokens, i, resample, fit)

    for size, position in sizes:
        entries.append(Entry(
            size=size,
            source=path_token.value,
            resample=resample,
            fit=fit,
            position=position,
            source_position=path_token.position,
        ))
    logger.debug("Entry %s: sizes=%s resample=%s fit=%s", path_token.value,
                 [str(s) for s, _ in sizes], resample.value, fit.value)
    return i


def _options(tokens, i, resample, fit):
    """Consume per-entry options; each kind may be given once."""
    resample_set = False
    fit_set = False

    while i < len(tokens):
        token = tokens[i]
        if token.is_flag(Flag.RESAMPLE, Flag.INTERPOLATE):
            if resample_set:
                raise UnexpectedToken(token.position)
            resample_set = True
            if token.is_flag(Flag.INTERPOLATE):
                resample = ResamplePolicy.LINEAR
                i += 1
                continue
            name = _peek(tokens, i + 1)
            if name.kind is not TokenKind.FILTER:
                raise UnexpectedToken(name.position)
            resample = name.value
            i += 2
        elif token.is_flag(Flag.PROPORTIONAL, Flag.EXACT):
            if fit_set:
                raise UnexpectedToken(token.position)
            fit_set = True
            if token.is_flag(Flag.PROPORTIONAL):
                fit = FitPolicy.PROPORTIONAL
            else:
                fit = FitPolicy.EXACT
            i += 1
        else:
            break

    return i, resample, fit


def _container(tokens, i, entries, stdout_ok) -> IconRequest:
    token = tokens[i]
    if token.kind is not TokenKind.FLAG or token.value not in CONTAINER_FLAGS:
        raise UnexpectedToken(token.position)
    kind = CONTAINER_FLAGS[token.value]

    if i + 1 == len(tokens):
        if not stdout_ok:
            raise MissingOutputPath()
        return IconRequest(entries, kind, Output.stdout())

    path_token = tokens[i + 1]
    if path_token.kind is not TokenKind.PATH:
        raise UnexpectedToken(path_token.position)
    return _expect_end(tokens, i + 2, IconRequest(entries, kind, Output(path_token.value)))


def _expect_end(tokens, i, command):
    if i < len(tokens):
        raise UnexpectedToken(tokens[i].position)
    return command
