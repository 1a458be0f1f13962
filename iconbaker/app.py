"""Command-line application: wires the compiler, assembler and output together."""

import logging
import sys
from pathlib import Path
from typing import TextIO

from iconbaker import PROG_NAME, __version__
from iconbaker.assembler import assemble
from iconbaker.compiler import compile_tokens
from iconbaker.config import DATA_DIR, LOG_FILE, Config
from iconbaker.diagnostics import render
from iconbaker.errors import IconBakerError, OutputError
from iconbaker.models import HelpCommand, IconCommand, Output, VersionCommand
from iconbaker.sources import SourceCache, decode_source
from iconbaker.tokens import tokenize

logger = logging.getLogger(__name__)

TITLE = r"""
 __  ___  __   __ _  ____   __   __ _  ____  ____
(  )/ __)/  \ (  ( \(  _ \ / _\ (  / )(  __)(  _ \
 )(( (__(  O )/    / ) _ (/    \ )  (  ) _)  )   /
(__)\___)\__/ \_)__)(____/\_/\_/(__\_)(____)(__\_)"""

USAGE = (f"{PROG_NAME} ((-e <file path> <size>... [-r <filter>] [-p | -x])... "
         "(-ico | -icns | -png) [<output path>]) | -h | --help | -v | --version")

OPTIONS = [
    ("-e <file path> <size>...", "Bind sizes (N or WxH) to a source image."),
    ("-r nearest|linear|cubic", "Resampling filter for the entry (default: nearest)."),
    ("-i, --interpolate", "Shorthand for '-r linear'."),
    ("-p, --proportional", "Keep the aspect ratio without padding (-png only)."),
    ("-x, --exact", "Pad to exactly the requested size (the default)."),
    ("-ico [<output path>]", "Output a .ico file."),
    ("-icns [<output path>]", "Output a .icns file."),
    ("-png [<output path>]", "Output a .png sequence as a .zip file."),
    ("-h, --help", "Help."),
    ("-v, --version", "Display version information."),
]

EXAMPLES = [
    f"{PROG_NAME} -e small.svg 16 20 24 -e big.png 32 64 -ico output.ico",
    f"{PROG_NAME} -e image.png 32x16 64 48 -r linear -p -png output.zip",
    f"{PROG_NAME} -e image.jpeg 64 128 -r cubic -icns > output.icns",
]


def _setup_logging(config: Config):
    """Configure logging to stderr, and to a file when the config asks for it."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_to_file:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


class IconBakerApp:
    """Runs one command line to completion and reports an exit status."""

    def __init__(self, config: Config | None = None,
                 stdout: TextIO | None = None, stderr: TextIO | None = None,
                 decode=decode_source):
        self.config = config or Config()
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self._decode = decode

    def run(self, argv: list[str]) -> int:
        tokens = tokenize(argv)
        try:
            command = compile_tokens(
                tokens,
                default_resample=self.config.resample,
                default_fit=self.config.fit,
                stdout_ok=not self._stdout_is_terminal(),
            )
            if isinstance(command, HelpCommand):
                self._print_help()
            elif isinstance(command, VersionCommand):
                print(f"{PROG_NAME} v{__version__}", file=self.stdout)
            else:
                self._bake(command)
        except IconBakerError as e:
            logger.debug("%s failed", PROG_NAME, exc_info=True)
            print(render(e, tokens), file=self.stderr)
            return e.exit_code
        return 0

    def _bake(self, command: IconCommand):
        logger.info("Baking %d size(s) into %s", len(command.plan), command.kind.value)
        output = command.output
        if not output.is_stdout and Path(output.path).suffix.lower() != command.kind.extension:
            logger.warning("Output %s does not end in %s", output.path, command.kind.extension)
        data = assemble(command, SourceCache(self._decode))
        self._write(command.output, data)

    def _write(self, output: Output, data: bytes):
        if output.is_stdout:
            stream = getattr(self.stdout, "buffer", self.stdout)
            try:
                stream.write(data)
                stream.flush()
            except OSError as e:
                raise OutputError(None, e.strerror or str(e)) from e
            print(f"[IconBaker] File <stdout> saved at standard output ({len(data)} bytes)",
                  file=self.stderr)
            return

        path = Path(output.path)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise OutputError(path, e.strerror or str(e)) from e
        print(f"[IconBaker] File {path.name} saved at {path.resolve()} ({len(data)} bytes)",
              file=self.stdout)

    def _stdout_is_terminal(self) -> bool:
        isatty = getattr(self.stdout, "isatty", None)
        return bool(isatty and isatty())

    def _print_help(self):
        width = max(len(flag) for flag, _ in OPTIONS) + 3
        lines = [TITLE, f"v{__version__}", "", f"Usage:   {USAGE}", ""]
        lines += [f"   {flag.ljust(width)}{text}" for flag, text in OPTIONS]
        lines += ["", "Examples:"]
        lines += [f"   {example}" for example in EXAMPLES]
        print("\n".join(lines), file=self.stdout)


def main(argv: list[str] | None = None) -> int:
    config = Config()
    _setup_logging(config)
    logger.debug("%s v%s, config: %s", PROG_NAME, __version__, config.config_path)
    app = IconBakerApp(config)
    return app.run(sys.argv if argv is None else argv)
