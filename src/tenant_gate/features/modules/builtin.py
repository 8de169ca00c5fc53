"""Built-in module catalog and platform navigation.

Definitions for the modules shipped with the platform. Navigation hrefs are
relative to the tenant's home route.
"""

from typing import Tuple

from .entities import ModuleDefinition, NavItem


PLATFORM_NAVIGATION: Tuple[NavItem, ...] = (
    NavItem(label="Dashboard", href="/", icon="LayoutDashboard"),
    NavItem(
        label="Settings",
        href="/settings",
        icon="Settings",
        children=(
            NavItem(label="General", href="/settings", icon="Settings", permission="core:settings:manage"),
            NavItem(label="Members", href="/settings/members", icon="Users", permission="core:users:read"),
            NavItem(label="Roles", href="/settings/roles", icon="Shield", permission="core:users:read"),
            NavItem(label="Modules", href="/settings/modules", icon="Package", permission="core:settings:manage"),
        ),
    ),
)


NOTES_MODULE = ModuleDefinition(
    id="notes",
    name="Notes",
    version="1.0.0",
    description="Simple notes module",
    permissions=frozenset({
        "notes:notes:read",
        "notes:notes:write",
        "notes:notes:delete",
    }),
    role_defaults={
        "owner": {"notes:*"},
        "admin": {"notes:*"},
        "manager": {"notes:notes:read", "notes:notes:write"},
        "operator": {"notes:notes:read", "notes:notes:write"},
        "viewer": {"notes:notes:read"},
    },
    navigation=(
        NavItem(label="Notes", href="/notes", icon="StickyNote", permission="notes:notes:read"),
    ),
)


CATALOG_MODULE = ModuleDefinition(
    id="catalog",
    name="Product Catalog",
    version="1.0.0",
    description="Product catalog with categories, photos, and custom attributes",
    permissions=frozenset({
        "catalog:products:read",
        "catalog:products:write",
        "catalog:products:delete",
        "catalog:categories:read",
        "catalog:categories:write",
        "catalog:categories:delete",
        "catalog:attributes:read",
        "catalog:attributes:write",
        "catalog:attributes:delete",
    }),
    role_defaults={
        "owner": {"catalog:*"},
        "admin": {"catalog:*"},
        "manager": {
            "catalog:products:read",
            "catalog:products:write",
            "catalog:categories:read",
            "catalog:categories:write",
            "catalog:attributes:read",
        },
        "operator": {
            "catalog:products:read",
            "catalog:products:write",
            "catalog:categories:read",
        },
        "viewer": {
            "catalog:products:read",
            "catalog:categories:read",
            "catalog:attributes:read",
        },
    },
    navigation=(
        NavItem(label="Products", href="/catalog/products", icon="Package", permission="catalog:products:read"),
        NavItem(label="Categories", href="/catalog/categories", icon="FolderTree", permission="catalog:categories:read"),
        NavItem(label="Attributes", href="/catalog/attributes", icon="Settings2", permission="catalog:attributes:read"),
    ),
)


COSTING_MODULE = ModuleDefinition(
    id="costing",
    name="Recipe Costing",
    version="1.0.0",
    description="Recipe costing, raw materials management, price tracking, and COGS analysis",
    permissions=frozenset({"costing:view", "costing:manage", "costing:admin"}),
    role_defaults={
        "owner": {"costing:*"},
        "admin": {"costing:*"},
        "manager": {"costing:view", "costing:manage"},
        "operator": {"costing:view"},
        "viewer": {"costing:view"},
    },
    navigation=(
        NavItem(label="Inventory Items", href="/costing/inventory", icon="Package", permission="costing:view"),
        NavItem(label="Recipes", href="/costing/recipes", icon="ChefHat", permission="costing:view"),
        NavItem(label="Dashboard", href="/costing/dashboard", icon="BarChart3", permission="costing:view"),
    ),
)


BUILTIN_MODULES: Tuple[ModuleDefinition, ...] = (NOTES_MODULE, CATALOG_MODULE, COSTING_MODULE)
