"""Entry validation: one binding per size, and only sizes the container holds."""

import logging

from iconbaker.errors import (
    DuplicateSize,
    ProportionalFitUnsupported,
    UnsupportedSizeForContainer,
)
from iconbaker.models import BuildPlan, ContainerKind, Entry, FitPolicy

logger = logging.getLogger(__name__)


def build_plan(entries: list[Entry], kind: ContainerKind) -> BuildPlan:
    """Bind every entry by size, then check each binding against ``kind``.

    Both passes report the first offender in input order.
    """
    plan = BuildPlan()
    for entry in entries:
        existing = plan.bind(entry)
        if existing is not None:
            raise DuplicateSize(entry.size, existing.position, entry.position)

    for entry in plan.entries():
        if not kind.accepts(entry.size):
            raise UnsupportedSizeForContainer(entry.size, kind, entry.position)
        if kind.has_fixed_slots and entry.fit is FitPolicy.PROPORTIONAL:
            raise ProportionalFitUnsupported(entry.size, kind, entry.position)

    logger.debug("Build plan for %s: %s", kind.value, [str(s) for s in plan])
    return plan
