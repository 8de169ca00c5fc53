"""Permission value object for tenant-gate permissions feature.

A permission is a string of one to three colon-separated lowercase segments:
``module``, ``module:resource`` or ``module:resource:action``. The literal
``*`` is the universal grant; ``module:*`` and ``module:resource:*`` are
scoped wildcards. A wildcard may only appear as the final segment.

Parsing happens at data-entry boundaries (role save, module registration),
so the matcher only ever sees well-formed strings.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from ....config.constants import MAX_PERMISSION_SEGMENTS, PERMISSION_SEPARATOR, UNIVERSAL_PERMISSION
from ....core.exceptions import InvalidPermissionFormat


_SEGMENT_RE = re.compile(r"[a-z][a-z0-9_]*")


def is_valid_permission(value: object) -> bool:
    """Check whether ``value`` satisfies the permission grammar."""
    if not isinstance(value, str) or not value:
        return False
    if value == UNIVERSAL_PERMISSION:
        return True

    segments = value.split(PERMISSION_SEPARATOR)
    if len(segments) > MAX_PERMISSION_SEGMENTS:
        return False

    head, last = segments[:-1], segments[-1]
    if not all(_SEGMENT_RE.fullmatch(segment) for segment in head):
        return False
    if last == UNIVERSAL_PERMISSION:
        # "*" alone is handled above; a scoped wildcard needs a module prefix
        return len(segments) >= 2
    return bool(_SEGMENT_RE.fullmatch(last))


@dataclass(frozen=True)
class PermissionCode:
    """Immutable, validated permission string."""

    value: str

    def __post_init__(self):
        """Validate permission code against the segment grammar."""
        if not is_valid_permission(self.value):
            raise InvalidPermissionFormat([self.value] if isinstance(self.value, str) else [repr(self.value)])

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.value.split(PERMISSION_SEPARATOR))

    @property
    def module(self) -> str:
        """First segment; ``*`` for the universal grant."""
        return self.segments[0]

    @property
    def resource(self) -> Optional[str]:
        segments = self.segments
        return segments[1] if len(segments) >= 2 else None

    @property
    def action(self) -> Optional[str]:
        segments = self.segments
        return segments[2] if len(segments) == 3 else None

    @property
    def is_universal(self) -> bool:
        return self.value == UNIVERSAL_PERMISSION

    @property
    def is_wildcard(self) -> bool:
        """True for ``*``, ``module:*`` and ``module:resource:*``."""
        return self.segments[-1] == UNIVERSAL_PERMISSION

    def __str__(self) -> str:
        return self.value


def parse_permissions(values: Iterable[str]) -> FrozenSet[str]:
    """Validate a collection of permission strings.

    Args:
        values: Raw permission strings from a data-entry boundary

    Returns:
        Frozen set of the validated strings

    Raises:
        InvalidPermissionFormat: listing every malformed entry
    """
    collected: List[str] = []
    invalid: List[str] = []
    for value in values:
        if is_valid_permission(value):
            collected.append(value)
        else:
            invalid.append(value if isinstance(value, str) else repr(value))

    if invalid:
        raise InvalidPermissionFormat(invalid)
    return frozenset(collected)
