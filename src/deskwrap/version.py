"""Single source of truth for the deskwrap version string."""

__version__: str = "0.3.0"
