"""StudioVault - monorepo scaffolding and governance toolkit."""

__version__ = "0.1.0"
