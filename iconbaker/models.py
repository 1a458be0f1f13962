"""Core value types shared by the parser, validator, scaler and encoders."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, NamedTuple

MAX_ICO_SIZE = 256
VALID_ICNS_SIZES = (16, 32, 64, 128, 256, 512, 1024)


class Size(NamedTuple):
    """Target pixel dimensions of one icon slot."""

    width: int
    height: int

    @classmethod
    def square(cls, side: int) -> "Size":
        return cls(side, side)

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def __str__(self) -> str:
        if self.is_square:
            return str(self.width)
        return f"{self.width}x{self.height}"


class ResamplePolicy(Enum):
    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"


class FitPolicy(Enum):
    EXACT = "exact"
    PROPORTIONAL = "proportional"


class ContainerKind(Enum):
    """Output container formats and the sizes each of them can hold."""

    ICO = "ico"
    ICNS = "icns"
    PNG_SEQUENCE = "png"

    @property
    def extension(self) -> str:
        return ".zip" if self is ContainerKind.PNG_SEQUENCE else f".{self.value}"

    @property
    def has_fixed_slots(self) -> bool:
        """True when every size must be filled by an exactly-sized image."""
        return self is not ContainerKind.PNG_SEQUENCE

    def accepts(self, size: Size) -> bool:
        if self is ContainerKind.ICO:
            return size.is_square and 0 < size.width <= MAX_ICO_SIZE
        if self is ContainerKind.ICNS:
            return size.is_square and size.width in VALID_ICNS_SIZES
        return size.width > 0 and size.height > 0


@dataclass(frozen=True)
class Entry:
    """One binding of a target size to a source image and its scaling policy.

    ``position`` is the index of the size token that requested the binding and
    ``source_position`` the index of the path token naming the source; both
    are kept for diagnostics.
    """

    size: Size
    source: Path
    resample: ResamplePolicy = ResamplePolicy.NEAREST
    fit: FitPolicy = FitPolicy.EXACT
    position: int = 0
    source_position: int = 0


class BuildPlan:
    """Ordered, duplicate-free mapping of target sizes to entries.

    Keys are unique by construction: ``bind`` refuses a size that is already
    present, and iteration follows first-bound order.
    """

    def __init__(self):
        self._bindings: dict[Size, Entry] = {}

    def bind(self, entry: Entry) -> Entry | None:
        """Bind ``entry`` under its size.

        Returns the entry already holding that size, leaving the plan
        untouched, or None once the new entry is bound.
        """
        existing = self._bindings.get(entry.size)
        if existing is not None:
            return existing
        self._bindings[entry.size] = entry
        return None

    def sizes(self) -> list[Size]:
        return list(self._bindings)

    def entries(self) -> list[Entry]:
        return list(self._bindings.values())

    def items(self):
        return self._bindings.items()

    def __getitem__(self, size: Size) -> Entry:
        return self._bindings[size]

    def __contains__(self, size) -> bool:
        return size in self._bindings

    def __iter__(self) -> Iterator[Size]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BuildPlan):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{size}: {entry.source}" for size, entry in self.items())
        return f"BuildPlan({{{inner}}})"


class Output:
    """Where the finished container goes: a file path or standard output."""

    def __init__(self, path: Path | None = None):
        self.path = path

    @classmethod
    def stdout(cls) -> "Output":
        return cls(None)

    @property
    def is_stdout(self) -> bool:
        return self.path is None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Output):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return "Output(stdout)" if self.is_stdout else f"Output({self.path})"


class HelpCommand:
    """Print usage."""

    def __eq__(self, other) -> bool:
        return isinstance(other, HelpCommand)

    def __hash__(self) -> int:
        return hash(HelpCommand)


class VersionCommand:
    """Print the version string."""

    def __eq__(self, other) -> bool:
        return isinstance(other, VersionCommand)

    def __hash__(self) -> int:
        return hash(VersionCommand)


@dataclass
class IconRequest:
    """Syntactic result of parsing an icon command, before validation."""

    entries: list[Entry]
    kind: ContainerKind
    output: Output


@dataclass
class IconCommand:
    """A validated icon command, ready to be scaled and encoded."""

    plan: BuildPlan
    kind: ContainerKind
    output: Output


Command = HelpCommand | VersionCommand | IconCommand
