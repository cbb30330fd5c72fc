"""GameZone core: accounts, sessions and personal bests for a small game portal.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("gamezone")
except PackageNotFoundError:
    __version__ = "0.1.0"
