"""Human-readable rendering of IconBaker errors.

Positional errors echo the command line and underline the offending tokens.
"""

from iconbaker import PROG_NAME
from iconbaker.errors import (
    DuplicateSize,
    EncodeError,
    IconBakerError,
    IllegalDownsizeWithoutInterpolation,
    MissingOutputFlag,
    MissingOutputPath,
    OutputError,
    ProportionalFitUnsupported,
    SizeNotRenderable,
    SourceNotFound,
    SourceUnreadable,
    UnexpectedEnd,
    UnexpectedToken,
    UnsupportedSizeForContainer,
)
from iconbaker.models import MAX_ICO_SIZE, VALID_ICNS_SIZES, ContainerKind
from iconbaker.tokens import Token

HELP_HINT = f"Type '{PROG_NAME} -h' for more details on usage."


def echo_command(tokens: tuple[Token, ...], positions: list[int]) -> str:
    """Echo the command line with carets under the tokens at ``positions``.

    A position equal to ``len(tokens)`` marks the spot after the last token.
    """
    words = [PROG_NAME] + [token.raw or str(token) for token in tokens]
    line = " ".join(words)

    marks = [" "] * (len(line) + 2)
    column = len(PROG_NAME) + 1
    starts = []
    for word in words[1:]:
        starts.append((column, len(word)))
        column += len(word) + 1
    for position in positions:
        if position >= len(tokens):
            marks[len(line) + 1] = "^"
            continue
        start, width = starts[position]
        for i in range(start, start + width):
            marks[i] = "^"
    return f"    {line}\n    {''.join(marks).rstrip()}"


def _icns_sizes() -> str:
    names = [f"{s}x{s}" for s in VALID_ICNS_SIZES]
    return ", ".join(names[:-1]) + f" and {names[-1]}"


def render(error: IconBakerError, tokens: tuple[Token, ...] = ()) -> str:
    if isinstance(error, UnexpectedToken):
        return f"[Syntax Error] Unexpected token:\n{echo_command(tokens, [error.position])}"
    if isinstance(error, UnexpectedEnd):
        return ("[Expected Additional Tokens]\n"
                f"{echo_command(tokens, [len(tokens)])}\n{HELP_HINT}")
    if isinstance(error, MissingOutputFlag):
        return ("[Syntax Error] Missing output details: expected -ico, -icns or -png "
                f"after the entries. {HELP_HINT}")
    if isinstance(error, MissingOutputPath):
        return ("[Syntax Error] Missing output path: standard output is a terminal, "
                f"so an output file must be given. {HELP_HINT}")

    if isinstance(error, DuplicateSize):
        positions = [error.first_position, error.second_position]
        return (f"[Syntax Error] The size {error.size} is bound to multiple sources:\n"
                f"{echo_command(tokens, positions)}")
    if isinstance(error, UnsupportedSizeForContainer):
        size = f"{error.size.width}x{error.size.height}"
        if error.kind is ContainerKind.ICO:
            text = (f"[Ico Error] The .ico file format only supports square icons of "
                    f"dimensions up to {MAX_ICO_SIZE}x{MAX_ICO_SIZE}: {size} icons aren't supported.")
        else:
            text = (f"[Icns Error] The .icns file format only supports {_icns_sizes()} "
                    f"icons: {size} icons aren't supported.")
        return f"{text}\n{echo_command(tokens, [error.position])}" if tokens else text
    if isinstance(error, ProportionalFitUnsupported):
        text = (f"[Fit Error] The .{error.kind.value} file format needs exactly sized "
                f"images: proportional fit can't be used for {error.size}. "
                "Add '-x' to the entry to pad it to size instead.")
        return f"{text}\n{echo_command(tokens, [error.position])}" if tokens else text
    if isinstance(error, IllegalDownsizeWithoutInterpolation):
        native = error.source_size
        return (f"[Downsizing Error] {error.source_path} is {native.width}x{native.height}; "
                f"it can't be shrunk to {error.size.width}x{error.size.height} with nearest "
                "resampling. Add '-r linear' or '-r cubic' to the entry.")
    if isinstance(error, SizeNotRenderable):
        text = (f"[Size Error] {error.source_path} can't be rendered at "
                f"{error.size.width}x{error.size.height}: {error.reason}.")
        return f"{text}\n{echo_command(tokens, [error.position])}" if tokens else text

    if isinstance(error, SourceNotFound):
        return f"[IO Error] File {error.path} could not be found on disk."
    if isinstance(error, SourceUnreadable):
        return f"[IO Error] File {error.path} couldn't be parsed: {error.reason}."
    if isinstance(error, OutputError):
        target = "standard output" if error.path is None else error.path
        return f"[IO Error] Could not write {target}: {error.reason}."
    if isinstance(error, EncodeError):
        return f"[Encode Error] {error}"
    return f"[Error] {error}"
