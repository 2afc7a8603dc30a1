"""Allow ``python -m age_github`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m age_github`` behaves identically to the ``age-github``
console script.
"""

from __future__ import annotations

from age_github.cli.app import cli

if __name__ == "__main__":
    cli()
