"""
.. include:: ../README.md
"""

__all__ = [
    "config",
    "events",
    "exceptions",
    "resource",
    "store",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
