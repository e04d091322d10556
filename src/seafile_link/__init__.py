"""Create Seafile share links for local files from the desktop."""

__version__ = "1.0.0"


def main() -> int:
    """Console entrypoint (``seafile-link``)."""
    from .main_flow import main as _main

    return _main()


__all__ = ["main", "__version__"]
