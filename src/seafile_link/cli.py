"""CLI facade for seafile-link.

Re-exports the entry point together with the building blocks scripts and
tests commonly reach for.
"""

from .main_flow import main
from .config import Settings
from .api import SeafileClient
from .dialogs import ConsoleDialog, ZenityDialog, make_dialog
from .linker import register_link
from .logging_utils import configure_logging
from .matcher import repo_for_path
from .token_store import TokenStore

__all__ = [
    "main",
    "Settings",
    "SeafileClient",
    "ConsoleDialog",
    "ZenityDialog",
    "make_dialog",
    "register_link",
    "configure_logging",
    "repo_for_path",
    "TokenStore",
]
