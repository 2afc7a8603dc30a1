"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from age_github.core.key_parser import parse_keys
from age_github.core.models import HANDLE_GRAMMAR, HandleGrammar, KeyList, validate_handle
from age_github.core.protocols import KeyCache, KeySource, Resolver
from age_github.core.resolver import KeyResolver
from age_github.core.rewriter import ArgumentRewriter

__all__: list[str] = [
    "HANDLE_GRAMMAR",
    "ArgumentRewriter",
    "HandleGrammar",
    "KeyCache",
    "KeyList",
    "KeyResolver",
    "KeySource",
    "Resolver",
    "parse_keys",
    "validate_handle",
]
