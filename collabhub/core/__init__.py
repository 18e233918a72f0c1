# collabhub/core/__init__.py
"""
CollabHub Core Module
Central location for shared constants and metadata
"""

from collabhub import __version__, __description__, __author__

from collabhub.core.app_state import AppState, get_start_time

__all__ = [
    "__version__",
    "__description__",
    "__author__",
    "AppState",
    "get_start_time"
]
