"""Allow ``python -m deskwrap`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m deskwrap`` behaves identically to the ``deskwrap`` console
script.
"""

from __future__ import annotations

from deskwrap.cli.app import cli

if __name__ == "__main__":
    cli()
