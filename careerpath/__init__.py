"""
Core package for the Career Path Generator.

Holds configuration, typed records, and the error/result types shared by the
generation services, the user store, the CLI and the portal backend.
"""

from importlib import metadata


def get_version() -> str:
    """Return the installed project version."""
    try:
        return metadata.version("careerpath")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
