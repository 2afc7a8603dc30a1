"""CLI application entry point for age-github.

This module is the **sole error boundary** for the entire application.
It catches :class:`~age_github.exceptions.AgeGithubError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering a
single-line message via Rich and returning well-defined exit codes.

Architecture notes
------------------
* There is no argument parser: every argument belongs to age and is
  forwarded, only ``@handle`` recipients are rewritten.
* No business logic lives here — all work is delegated to the core and
  infrastructure layers.
* On success control passes to age and never comes back here.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence

from age_github.cli import exit_codes
from age_github.cli.console import configure_logging, console, escape
from age_github.config import Settings
from age_github.core.resolver import KeyResolver
from age_github.core.rewriter import ArgumentRewriter
from age_github.exceptions import AgeGithubError, UsageError
from age_github.infra.disk_cache import DiskCache
from age_github.infra.github_keys import GithubKeySource
from age_github.infra.launcher import launch, locate_binary

USAGE = """\
age-github is the age tool [1] wrapper which allows using github
user handles as -r flag recipients. This wrapper automatically fetches first ssh
key for a given user from github and calls age with -r flag holding ssh key value.

Github user handles should have @ prefix, i.e. to encrypt file for
https://github.com/artyom user, you call it as

\tage-github -r @artyom ...

[1]: https://filippo.io/age"""


def _verbose() -> bool:
    """Return whether debug logging is enabled for the package."""
    return logging.getLogger("age_github").isEnabledFor(logging.DEBUG)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_rewriter(settings: Settings) -> ArgumentRewriter:
    """Assemble the cache → network → rewrite pipeline from *settings*."""
    cache = DiskCache(settings.cache_dir)
    source = GithubKeySource(settings.keys_url)
    return ArgumentRewriter(KeyResolver(cache, source))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the age-github CLI.

    Parameters
    ----------
    argv:
        Arguments for age, without the program name.  When ``None``
        (default), ``sys.argv[1:]`` is used.
    environ:
        Environment for settings and for age.  Defaults to ``os.environ``.

    Returns
    -------
    int
        age's exit code on platforms where the process is spawned
        rather than replaced.  Where it is replaced this never returns.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise UsageError(USAGE)

    settings = Settings.from_env(environ)
    configure_logging(settings.debug)

    binary = locate_binary(settings.binary)
    rewritten = build_rewriter(settings).rewrite(str(binary), args)
    return launch(binary, rewritten, environ)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except UsageError as exc:
        console.print(escape(str(exc)))
        sys.exit(exit_codes.GENERAL_ERROR)
    except AgeGithubError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint and _verbose():
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue. "
            f"{type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
