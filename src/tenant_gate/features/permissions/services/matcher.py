"""Permission matching.

Pure functions deciding whether a set of granted permissions satisfies a
required permission. Inputs are assumed to be well-formed (validated at
role save and module registration), so every function here is total and
safe to call concurrently.

Wildcards expand only on the granted side: a required ``"core:*"`` is
satisfied by ``"*"`` or the literal ``"core:*"``, never by ``"core:users:read"``.
"""

from typing import AbstractSet, Iterable

from ....config.constants import PERMISSION_SEPARATOR, UNIVERSAL_PERMISSION


def matches(granted: AbstractSet[str], required: str) -> bool:
    """Check whether ``granted`` satisfies ``required``.

    Args:
        granted: Permission strings held by the caller
        required: Permission string the operation needs

    Returns:
        True if the universal grant, the exact permission, the module
        wildcard or the resource wildcard is granted
    """
    if UNIVERSAL_PERMISSION in granted:
        return True
    if required in granted:
        return True

    parts = required.split(PERMISSION_SEPARATOR)
    if len(parts) >= 2 and f"{parts[0]}:*" in granted:
        return True
    if len(parts) == 3 and f"{parts[0]}:{parts[1]}:*" in granted:
        return True
    return False


def matches_all(granted: AbstractSet[str], required: Iterable[str]) -> bool:
    """Check that every permission in ``required`` is satisfied."""
    return all(matches(granted, permission) for permission in required)


def matches_any(granted: AbstractSet[str], required: Iterable[str]) -> bool:
    """Check that at least one permission in ``required`` is satisfied."""
    return any(matches(granted, permission) for permission in required)


def unassignable(granted: AbstractSet[str], targets: Iterable[str]) -> frozenset:
    """Return the subset of ``targets`` the holder of ``granted`` may not hand out."""
    if UNIVERSAL_PERMISSION in granted:
        return frozenset()
    return frozenset(permission for permission in targets if not matches(granted, permission))


def can_assign(granted: AbstractSet[str], targets: Iterable[str]) -> bool:
    """Check whether a caller may grant ``targets`` to a role.

    A caller may only assign permissions they themselves satisfy, which
    prevents privilege escalation through role editing.
    """
    return not unassignable(granted, targets)
