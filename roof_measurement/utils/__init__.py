"""
Utility Functions and Helpers

Common utilities for the roof measurement engine.
"""

from .config_manager import ConfigManager

__all__ = ['ConfigManager']
