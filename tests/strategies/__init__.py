"""
Common test strategies for Hypothesis-based property testing.
"""

from .name_strategies import invalid_names, valid_names

__all__ = ["invalid_names", "valid_names"]
