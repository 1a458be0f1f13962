"""Turn a raw argument list into a validated command."""

from iconbaker.models import (
    Command,
    FitPolicy,
    IconCommand,
    IconRequest,
    ResamplePolicy,
)
from iconbaker.parser import parse
from iconbaker.tokens import Token, tokenize
from iconbaker.validator import build_plan


def compile_tokens(tokens: tuple[Token, ...], *,
                   default_resample: ResamplePolicy = ResamplePolicy.NEAREST,
                   default_fit: FitPolicy = FitPolicy.EXACT,
                   stdout_ok: bool = True) -> Command:
    parsed = parse(tokens, default_resample=default_resample,
                   default_fit=default_fit, stdout_ok=stdout_ok)
    if not isinstance(parsed, IconRequest):
        return parsed
    plan = build_plan(parsed.entries, parsed.kind)
    return IconCommand(plan, parsed.kind, parsed.output)


def compile_args(args: list[str], **options) -> Command:
    """Tokenize, parse and validate ``args``; see ``compile_tokens``."""
    return compile_tokens(tokenize(args), **options)
