"""ETF portfolio tracker application: importer, cache, price refresh, state service and CLI."""

__version__ = "1.0.0"
