"""Error taxonomy. Every user-facing failure derives from IconBakerError."""

from pathlib import Path

from iconbaker.models import ContainerKind, Size


class IconBakerError(Exception):
    """Base class; ``exit_code`` is the process status the CLI reports."""

    exit_code = 1


# =============================================================================
# Syntax
# =============================================================================

class CommandSyntaxError(IconBakerError):
    exit_code = 2


class UnexpectedToken(CommandSyntaxError):
    def __init__(self, position: int):
        super().__init__(f"unexpected token at position {position}")
        self.position = position


class UnexpectedEnd(CommandSyntaxError):
    def __init__(self):
        super().__init__("expected additional tokens")


class MissingOutputFlag(CommandSyntaxError):
    def __init__(self):
        super().__init__("missing output format flag (-ico, -icns or -png)")


class MissingOutputPath(CommandSyntaxError):
    def __init__(self):
        super().__init__("missing output path: standard output is a terminal")


# =============================================================================
# Validation
# =============================================================================

class ValidationError(IconBakerError):
    exit_code = 3


class DuplicateSize(ValidationError):
    def __init__(self, size: Size, first_position: int, second_position: int):
        super().__init__(
            f"size {size} is bound at positions {first_position} and {second_position}"
        )
        self.size = size
        self.first_position = first_position
        self.second_position = second_position


class UnsupportedSizeForContainer(ValidationError):
    def __init__(self, size: Size, kind: ContainerKind, position: int):
        super().__init__(f"{kind.value} containers do not support {size} icons")
        self.size = size
        self.kind = kind
        self.position = position


class ProportionalFitUnsupported(ValidationError):
    def __init__(self, size: Size, kind: ContainerKind, position: int):
        super().__init__(
            f"{kind.value} containers need exact {size} images; proportional fit is not allowed"
        )
        self.size = size
        self.kind = kind
        self.position = position


class IllegalDownsizeWithoutInterpolation(ValidationError):
    def __init__(self, size: Size, source_size: Size, source_path: Path):
        super().__init__(
            f"cannot downsize {source_path} ({source_size.width}x{source_size.height}) "
            f"to {size.width}x{size.height} with nearest-neighbour resampling"
        )
        self.size = size
        self.source_size = source_size
        self.source_path = source_path


class SizeNotRenderable(ValidationError):
    def __init__(self, size: Size, source_path: Path, position: int, reason: str):
        super().__init__(f"cannot render {source_path} at {size.width}x{size.height}: {reason}")
        self.size = size
        self.source_path = source_path
        self.position = position
        self.reason = reason


# =============================================================================
# Sources, encoding, output
# =============================================================================

class SourceError(IconBakerError):
    exit_code = 4

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class SourceNotFound(SourceError):
    def __init__(self, path: Path):
        super().__init__(path, "file not found")


class SourceUnreadable(SourceError):
    pass


class EncodeError(IconBakerError):
    exit_code = 5


class OutputError(IconBakerError):
    exit_code = 6

    def __init__(self, path: Path | None, reason: str):
        target = "standard output" if path is None else str(path)
        super().__init__(f"{target}: {reason}")
        self.path = path
        self.reason = reason
