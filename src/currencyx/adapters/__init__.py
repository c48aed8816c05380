# src/currencyx/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Exchanges (upstream rate sources)
- Formatting (locale-aware output)
"""

__all__ = []
