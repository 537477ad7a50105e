"""Service modules"""
from .dashboard import Dashboard, WalletView

__all__ = ["Dashboard", "WalletView"]
