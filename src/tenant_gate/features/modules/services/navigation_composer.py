"""Navigation composition.

Prunes module navigation trees down to what a permission set can reach.
"""

from typing import AbstractSet, Iterable, List, Optional, Sequence

from ...permissions.services.matcher import matches
from ..entities import ModuleDefinition, NavItem


class NavigationComposer:
    """Builds the menu a caller is shown from module navigation trees."""

    def __init__(self, platform_navigation: Sequence[NavItem] = ()):
        self.platform_navigation = tuple(platform_navigation)

    def compose(self, nav_trees: Iterable[NavItem], granted: AbstractSet[str]) -> List[NavItem]:
        """Return the visible part of ``nav_trees`` for ``granted``.

        A node is kept when its own permission passes or when at least one
        descendant is kept. Sibling order is preserved.
        """
        composed = []
        for item in nav_trees:
            kept = self._prune(item, granted)
            if kept is not None:
                composed.append(kept)
        return composed

    def compose_for_tenant(
        self,
        enabled_modules: Iterable[ModuleDefinition],
        granted: AbstractSet[str],
        include_platform: bool = True,
    ) -> List[NavItem]:
        """Compose platform navigation followed by each enabled module's navigation."""
        trees: List[NavItem] = list(self.platform_navigation) if include_platform else []
        for module in enabled_modules:
            trees.extend(module.navigation)
        return self.compose(trees, granted)

    def _prune(self, item: NavItem, granted: AbstractSet[str]) -> Optional[NavItem]:
        children = self.compose(item.children, granted)

        if item.permission is None:
            # organisational parents need a visible child; bare leaves are public
            visible = bool(children) or not item.children
        else:
            visible = bool(children) or matches(granted, item.permission)

        if not visible:
            return None
        return item.with_children(children)
