"""DebtWise: debt and budget tracking with payoff projections."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig

__all__ = ["BaseConfig", "DevConfig", "TestConfig"]
__version__ = "0.3.0"
