"""Service module exports."""

from . import auth, budgeting, currency, debts, liabilities, reports, summary

__all__ = [
    "auth",
    "budgeting",
    "currency",
    "debts",
    "liabilities",
    "reports",
    "summary",
]
