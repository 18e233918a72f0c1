# =============================================================================
# CollabHub Realtime Core - Dynamic Version Loading
# =============================================================================
"""
CollabHub - realtime chat and notification fan-out

Version is loaded from installed metadata, falling back to pyproject.toml
when running from a source checkout.
"""

from __future__ import annotations

import sys


def _get_version() -> str:
    """
    Get package version dynamically from installed metadata.

    Returns:
        Version string (e.g., "0.3.0")
    """
    try:
        from importlib.metadata import version, PackageNotFoundError
        return version("collabhub")
    except PackageNotFoundError:
        pass  # Package not installed, try fallback

    try:
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib  # type: ignore

        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
                return data["project"]["version"]
    except (ImportError, OSError, KeyError, ValueError):
        pass

    return "0.1.0-unknown"


__version__: str = _get_version()
__description__: str = "CollabHub - realtime project chat and notifications"
__author__: str = "CollabHub Team"

__all__ = [
    "__version__",
    "__description__",
    "__author__",
]
