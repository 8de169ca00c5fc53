"""Version information for tenant-gate."""

__version__ = "0.1.0"
