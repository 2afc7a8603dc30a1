"""Tests for the CLI entry point and error boundary (cli/app.py).

Binary lookup, the network source and the final hand-over are all
replaced; the disk cache runs against ``tmp_path``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from age_github.cli import app as app_module
from age_github.cli import exit_codes
from age_github.cli.app import USAGE, cli, main
from age_github.exceptions import (
    BinaryNotFoundError,
    InvalidHandleError,
    KeyFetchError,
    NoKeysFoundError,
    UsageError,
)
from age_github.infra.disk_cache import cache_filename
from conftest import FakeSource

AGE = Path("/usr/bin/age")


@pytest.fixture
def environ(tmp_path: Path) -> dict[str, str]:
    return {"AGE_GITHUB_CACHE_DIR": str(tmp_path / "cache"), "PATH": "/usr/bin"}


@pytest.fixture
def source(monkeypatch: pytest.MonkeyPatch) -> FakeSource:
    fake = FakeSource(
        {
            "alice": b"ssh-ed25519 AAA\nssh-rsa BBB\n",
            "bob": b"ssh-ed25519 CCC\n",
            "empty": b"nothing\n",
        },
    )
    monkeypatch.setattr(app_module, "GithubKeySource", lambda keys_url: fake)
    return fake


@pytest.fixture
def launched(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mock = MagicMock(return_value=exit_codes.SUCCESS)
    monkeypatch.setattr(app_module, "launch", mock)
    monkeypatch.setattr(app_module, "locate_binary", lambda name: AGE)
    return mock


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_args_is_usage_error(self) -> None:
        with pytest.raises(UsageError) as exc_info:
            main([])
        assert str(exc_info.value) == USAGE

    def test_scenario_separate_value(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        assert main(["-r", "@alice", "file.txt"], environ) == exit_codes.SUCCESS
        launched.assert_called_once_with(
            AGE, [str(AGE), "-r", "ssh-ed25519 AAA", "file.txt"], environ,
        )

    def test_scenario_equals_form(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        main(["--recipient=@bob", "f"], environ)
        assert launched.call_args.args[1] == [str(AGE), "-r", "ssh-ed25519 CCC", "f"]

    def test_plain_arguments_forwarded(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        main(["-d", "-i", "key.txt", "secret.age"], environ)
        assert launched.call_args.args[1] == [str(AGE), "-d", "-i", "key.txt", "secret.age"]
        assert source.calls == []

    def test_fetched_listing_is_cached(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        main(["-r", "@alice"], environ)
        main(["-r", "@alice"], environ)
        assert source.calls == ["alice"]
        cached = Path(environ["AGE_GITHUB_CACHE_DIR"]) / cache_filename("alice")
        assert cached.read_bytes() == b"ssh-ed25519 AAA\nssh-rsa BBB\n"

    def test_empty_key_list_never_launches(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        with pytest.raises(NoKeysFoundError, match='"empty"'):
            main(["-r", "@empty", "f"], environ)
        launched.assert_not_called()

    def test_invalid_handle_never_hits_network(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
    ) -> None:
        with pytest.raises(InvalidHandleError):
            main(["-r", "@1abc"], environ)
        assert source.calls == []
        launched.assert_not_called()

    def test_missing_binary_fails_before_network(
        self, environ: dict[str, str], source: FakeSource, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _missing(name: str) -> Path:
            raise BinaryNotFoundError(f"exec: \"{name}\": executable file not found in $PATH")

        monkeypatch.setattr(app_module, "locate_binary", _missing)
        with pytest.raises(BinaryNotFoundError):
            main(["-r", "@alice"], environ)
        assert source.calls == []

    def test_binary_override(
        self, environ: dict[str, str], source: FakeSource, launched: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        looked_up: list[str] = []

        def _locate(name: str) -> Path:
            looked_up.append(name)
            return Path("/opt/rage")

        monkeypatch.setattr(app_module, "locate_binary", _locate)
        main(["-e"], {**environ, "AGE_GITHUB_BINARY": "rage"})
        assert looked_up == ["rage"]
        assert launched.call_args.args[1] == [str(Path("/opt/rage")), "-e"]


# ---------------------------------------------------------------------------
# cli error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        monkeypatch.setattr(sys, "argv", ["age-github", "-r", "@alice"])
        with patch("age_github.cli.app.main", side_effect=exc):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        return exc_info.value.code  # type: ignore[return-value]

    def test_known_error_exits_one(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run(
            monkeypatch,
            KeyFetchError('fetching keys for github user "alice": unexpected content type "text/html"'),
        )
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert 'Error: fetching keys for github user "alice"' in err
        assert err.strip().count("\n") == 0

    def test_hint_hidden_without_debug(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        self._run(monkeypatch, BinaryNotFoundError("not found", hint="brew install age"))
        assert "brew install age" not in capsys.readouterr().err

    def test_usage_error_prints_usage(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run(monkeypatch, UsageError(USAGE))
        assert code == exit_codes.GENERAL_ERROR
        assert "age-github -r @artyom" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert self._run(monkeypatch, RuntimeError("kaboom")) == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in capsys.readouterr().err

    def test_child_exit_code_propagates(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["age-github", "-d"])
        with patch("age_github.cli.app.main", return_value=5):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == 5


class TestDebugMode:
    def test_hint_shown_with_debug(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from age_github.cli.console import configure_logging

        configure_logging(True)
        monkeypatch.setattr(sys, "argv", ["age-github", "-r", "@alice"])
        with patch(
            "age_github.cli.app.main",
            side_effect=BinaryNotFoundError("not found", hint="brew install age"),
        ):
            with pytest.raises(SystemExit):
                cli()
        assert "brew install age" in capsys.readouterr().err
