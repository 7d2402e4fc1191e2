"""Selection of targets by tags and name prefix."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from portwatch.config import Target


@dataclass(frozen=True)
class Options:
    """Criteria for selecting targets.

    ``tags`` keeps targets carrying all listed tags; ``name_prefix`` keeps
    targets whose name starts with it. Both comparisons ignore case.
    """

    tags: Sequence[str] = field(default_factory=tuple)
    name_prefix: str = ""


def _has_all_tags(tags: Iterable[str], required: Iterable[str]) -> bool:
    present = {tag.lower() for tag in tags}
    return all(tag.lower() in present for tag in required)


def apply(targets: Iterable[Target], options: Options) -> list[Target]:
    """Return the targets matching every criterion; all of them for empty options."""
    if not options.tags and not options.name_prefix:
        return list(targets)
    prefix = options.name_prefix.lower()
    return [
        target
        for target in targets
        if target.name.lower().startswith(prefix) and _has_all_tags(target.tags, options.tags)
    ]