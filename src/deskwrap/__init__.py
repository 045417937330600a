"""deskwrap — thin wrapper commands for external desktop utilities.

Transparency, screen locking, screen capture, volume control and
PDF-to-text conversion, each delegated to an existing unix tool through
a single typed invocation layer.
"""

from deskwrap.version import __version__

__all__: list[str] = ["__version__"]
