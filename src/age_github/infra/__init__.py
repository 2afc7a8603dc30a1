"""Infrastructure layer — external system integration.

This layer wraps all interaction with GitHub, the filesystem, and the
age binary.  Every raw third-party exception must be caught here and
re-raised as a :class:`~age_github.exceptions.AgeGithubError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from age_github.infra.disk_cache import DiskCache, user_cache_dir
from age_github.infra.github_keys import GithubKeySource
from age_github.infra.launcher import launch, locate_binary

__all__: list[str] = [
    "DiskCache",
    "GithubKeySource",
    "launch",
    "locate_binary",
    "user_cache_dir",
]
