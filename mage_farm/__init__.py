"""Mage Farm Helper - experience and loot efficiency calculator for mage farming."""

__version__ = "0.1.0"
