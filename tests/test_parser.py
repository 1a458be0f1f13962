from __future__ import annotations

from pathlib import Path

import pytest

from iconbaker.errors import MissingOutputFlag, MissingOutputPath, UnexpectedEnd, UnexpectedToken
from iconbaker.models import (
    ContainerKind,
    Entry,
    FitPolicy,
    HelpCommand,
    IconRequest,
    Output,
    ResamplePolicy,
    Size,
    VersionCommand,
)
from iconbaker.parser import parse
from iconbaker.tokens import tokenize


def _parse(*args: str, **options):
    return parse(tokenize(list(args)), **options)


def test_empty_input_is_help() -> None:
    assert _parse() == HelpCommand()


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help(flag: str) -> None:
    assert _parse(flag) == HelpCommand()


def test_version() -> None:
    assert _parse("--version") == VersionCommand()


def test_help_with_trailing_token() -> None:
    with pytest.raises(UnexpectedToken) as exc:
        _parse("-h", "-ico")
    assert exc.value.position == 1


def test_single_entry_to_file() -> None:
    request = _parse("-e", "icon.png", "16", "32", "-ico", "out.ico")
    assert isinstance(request, IconRequest)
    assert request.kind is ContainerKind.ICO
    assert request.output == Output(Path("out.ico"))
    assert request.entries == [
        Entry(Size(16, 16), Path("icon.png"), ResamplePolicy.NEAREST, FitPolicy.EXACT, 2, 1),
        Entry(Size(32, 32), Path("icon.png"), ResamplePolicy.NEAREST, FitPolicy.EXACT, 3, 1),
    ]


def test_entry_options() -> None:
    request = _parse("-e", "a.svg", "16", "-r", "cubic",
                     "-e", "b.png", "32x16", "-p", "-i",
                     "-png")
    first, second = request.entries
    assert first.resample is ResamplePolicy.CUBIC
    assert first.fit is FitPolicy.EXACT
    assert second.resample is ResamplePolicy.LINEAR
    assert second.fit is FitPolicy.PROPORTIONAL
    assert second.size == Size(32, 16)
    assert request.kind is ContainerKind.PNG_SEQUENCE
    assert request.output.is_stdout


def test_defaults_come_from_caller() -> None:
    request = _parse("-e", "a.png", "16", "-icns",
                     default_resample=ResamplePolicy.LINEAR,
                     default_fit=FitPolicy.PROPORTIONAL)
    assert request.entries[0].resample is ResamplePolicy.LINEAR
    assert request.entries[0].fit is FitPolicy.PROPORTIONAL


def test_exact_overrides_a_proportional_default() -> None:
    request = _parse("-e", "a.png", "16", "-x",
                     "-e", "b.png", "32", "--exact", "-i",
                     "-e", "c.png", "64",
                     "-ico", default_fit=FitPolicy.PROPORTIONAL)
    assert [e.fit for e in request.entries] == [FitPolicy.EXACT, FitPolicy.EXACT, FitPolicy.PROPORTIONAL]
    assert request.entries[1].resample is ResamplePolicy.LINEAR


def test_duplicates_are_left_to_the_validator() -> None:
    request = _parse("-e", "a.png", "16", "-e", "b.png", "16", "-ico", "out.ico")
    assert [e.position for e in request.entries] == [2, 5]


@pytest.mark.parametrize(
    ("args", "position"),
    [
        (["16", "-ico"], 0),
        (["-r", "linear"], 0),
        (["-ico", "out.ico"], 0),
        (["-e", "16"], 1),
        (["-e", "a.png", "-ico"], 2),
        (["-e", "a.png", "0", "-ico"], 2),
        (["-e", "a.png", "16x0", "-ico"], 2),
        (["-e", "a.png", "16", "-r", "16", "-ico"], 4),
        (["-e", "a.png", "16", "-r", "linear", "-r", "cubic", "-ico"], 5),
        (["-e", "a.png", "16", "-i", "-r", "cubic", "-ico"], 4),
        (["-e", "a.png", "16", "-p", "-p", "-ico"], 4),
        (["-e", "a.png", "16", "-p", "-x", "-ico"], 4),
        (["-e", "a.png", "16", "-x", "-r", "linear", "--exact", "-ico"], 6),
        (["-e", "a.png", "16", "linear", "-ico"], 3),
        (["-e", "a.png", "16", "-h"], 3),
        (["-e", "a.png", "16", "-ico", "32"], 4),
        (["-e", "a.png", "16", "-ico", "out.ico", "extra"], 5),
        (["-e", "a.png", "16", "-ico", "-icns"], 4),
    ],
)
def test_unexpected_token_positions(args: list[str], position: int) -> None:
    with pytest.raises(UnexpectedToken) as exc:
        _parse(*args)
    assert exc.value.position == position


@pytest.mark.parametrize(
    "args",
    [
        ["-e"],
        ["-e", "a.png"],
        ["-e", "a.png", "16", "-r"],
    ],
)
def test_unexpected_end(args: list[str]) -> None:
    with pytest.raises(UnexpectedEnd):
        _parse(*args)


def test_entries_without_container_flag() -> None:
    with pytest.raises(MissingOutputFlag):
        _parse("-e", "a.png", "16", "-r", "linear")


def test_stdout_refused_when_not_allowed() -> None:
    with pytest.raises(MissingOutputPath):
        _parse("-e", "a.png", "16", "-ico", stdout_ok=False)
    request = _parse("-e", "a.png", "16", "-ico", "out.ico", stdout_ok=False)
    assert request.output == Output(Path("out.ico"))
