"""
Core module - Configuration and cross-cutting concerns.

This module provides:
- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Application exception hierarchy
- feature_flags.py  : Feature flag registry and route gates
- audit.py          : Request id, server failure, request logging and security header middleware
"""
from snippets.core.config import get_settings, Settings
from snippets.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
