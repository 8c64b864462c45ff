"""Aurora production ledger: thread inventory, orders and production tasks."""

__version__ = "1.0.0"
