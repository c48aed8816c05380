# src/currencyx/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
Service configuration objects live in currencyx.config.define_config and the
exchange factories in currencyx.config.exchanges.
"""

from currencyx.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
