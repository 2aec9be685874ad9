"""Typed result sets, statements, transactions, workers and SQL time values for MariaDB clients."""

__version__ = "0.1.0"