"""Infrastructure: locating the age binary and handing control to it.

Rules
-----
* Detection via :func:`shutil.which` only.
* On POSIX the current process image is replaced with :func:`os.execve`;
  a successful :func:`launch` never returns.
* Where no real exec exists (Windows) the child is spawned, signals are
  forwarded, and the child's exit code is returned to the caller.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import signal
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import FrameType

from age_github.exceptions import BinaryNotFoundError, LaunchError

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS: tuple[str, ...] = ("SIGINT", "SIGTERM", "SIGHUP", "SIGQUIT")


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def locate_binary(name: str) -> Path:
    """Find *name* on PATH (or verify it, if it is a path).

    The returned path is absolute but symlinks are kept as found, so the
    tool sees the same ``argv[0]`` it would if run directly.
    """
    result = shutil.which(name)
    if result is None:
        commands = _platform_install_commands()
        raise BinaryNotFoundError(
            f"exec: \"{name}\": executable file not found in $PATH",
            hint="\n".join(("Install age using one of:", *(f"  {cmd}" for cmd in commands))),
        )
    return Path(os.path.abspath(result))


def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install --id FiloSottile.age",
            "scoop install age",
        )
    if system == "linux":
        return (
            "sudo apt install age",
            "sudo dnf install age",
            "sudo pacman -S age",
        )
    if system == "darwin":
        return ("brew install age",)
    return ("See https://github.com/FiloSottile/age#installation",)


# ---------------------------------------------------------------------------
# Hand-over
# ---------------------------------------------------------------------------

def can_replace_process() -> bool:
    """Whether :func:`os.execve` truly replaces the process on this OS."""
    return os.name != "nt" and hasattr(os, "execve")


def launch(
    binary: Path,
    argv: Sequence[str],
    environ: Mapping[str, str] | None = None,
) -> int:
    """Transfer control to *binary* with *argv* (``argv[0]`` included).

    Where the process image can be replaced this never returns.  Otherwise
    the child is run to completion and its exit code is returned.

    Raises
    ------
    LaunchError
        When the binary cannot be executed or spawned.
    """
    env = dict(os.environ if environ is None else environ)
    logger.debug("Handing over to %s", binary)
    sys.stdout.flush()
    sys.stderr.flush()

    if not can_replace_process():
        return spawn(binary, argv, env)

    try:
        os.execve(binary, list(argv), env)
    except OSError as exc:
        raise LaunchError(f"cannot execute {binary}: {exc.strerror or exc}") from exc


def spawn(binary: Path, argv: Sequence[str], env: Mapping[str, str]) -> int:
    """Run *binary* as a child with inherited stdio and return its exit code.

    Termination signals received meanwhile are relayed to the child.
    A child killed by signal ``N`` maps to ``128 + N``.
    """
    try:
        proc = subprocess.Popen(list(argv), executable=binary, env=dict(env))
    except OSError as exc:
        raise LaunchError(f"cannot execute {binary}: {exc.strerror or exc}") from exc

    def _forward(signum: int, _frame: FrameType | None) -> None:
        # Windows consoles already deliver Ctrl+C to every attached process.
        if os.name == "nt" and signum == signal.SIGINT:
            return
        proc.send_signal(signum)

    previous: dict[int, object] = {}
    for name in _FORWARDED_SIGNALS:
        signum = getattr(signal, name, None)
        if signum is not None:
            previous[signum] = signal.signal(signum, _forward)
    try:
        code = proc.wait()
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)  # type: ignore[arg-type]

    return 128 - code if code < 0 else code
