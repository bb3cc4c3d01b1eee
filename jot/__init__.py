"""jot - vaults, folders and markdown notes on the filesystem."""

__version__ = "0.1.0"
