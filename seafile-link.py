#!/usr/bin/env python3
"""Launcher for seafile-link.

Drop this file (or a symlink to it) into a file manager's scripts folder,
e.g. ``~/.local/share/nautilus/scripts``, and run it on selected files.

 - Prefer a static import so packagers can detect the ``seafile_link``
   package.
 - Fall back to adding the local ``./src`` directory to ``sys.path`` when the
   repository is used directly without installing it.
"""

import importlib
import sys
from pathlib import Path


def _load_main_flow():
    """Locate and import :mod:`seafile_link.main_flow`."""
    try:
        from seafile_link import main_flow as _main_flow  # type: ignore

        return _main_flow
    except ImportError:
        pass

    _src = Path(__file__).resolve().parent / "src"
    if _src.exists():
        src_str = str(_src)
        if src_str not in sys.path:
            sys.path.insert(0, src_str)
    return importlib.import_module("seafile_link.main_flow")


_main_flow = _load_main_flow()

main = _main_flow.main

__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        sys.exit(130)
