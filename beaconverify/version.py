"""
Version helpers for the beaconverify package.

Resolution order:
1) importlib.metadata (if the distribution is installed),
2) a static fallback BASE_VERSION with a PEP 440 local tag.
"""
from __future__ import annotations

import sys
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Bump this when making intentional, source-level releases.
BASE_VERSION = "0.1.0"

_PKG_NAME = "beaconverify"


@lru_cache(maxsize=1)
def get_version() -> str:
    try:
        return _pkg_version(_PKG_NAME)
    except PackageNotFoundError:
        py = f"py{sys.version_info.major}{sys.version_info.minor}"
        return f"{BASE_VERSION}+src.{py}"


__version__ = get_version()
__all__ = ["__version__", "get_version", "BASE_VERSION"]
