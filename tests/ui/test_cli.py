from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from checkstate.app import RefreshSummary
from checkstate.ui import cli

if TYPE_CHECKING:
    from pathlib import Path

    from conftest import CheckDocuments


def _write(tmp_path: Path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_diff_exits_cleanly_when_equivalent(
    docs: CheckDocuments,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    local = _write(tmp_path, "local.yaml", docs.base)
    remote = _write(tmp_path, "remote.json", docs.api_with_permissions)

    cli.main(["diff", local, remote])

    assert capsys.readouterr().out.strip() == "unchanged"


def test_diff_signals_replacement(
    docs: CheckDocuments,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    local = _write(tmp_path, "local.yaml", docs.base)
    remote = _write(tmp_path, "remote.yaml", docs.invalid)

    with pytest.raises(SystemExit) as exc:
        cli.main(["diff", local, remote])

    assert exc.value.code == cli.EXIT_WOULD_REPLACE
    out = capsys.readouterr().out
    assert out.startswith("replaced_with_warning")
    assert "warning:" in out


def test_diff_missing_file_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["diff", str(tmp_path / "nope.yaml"), str(tmp_path / "nope.json")])

    assert exc.value.code == cli.EXIT_USAGE


def test_refresh_without_credentials_is_a_usage_error(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.delenv("DASH0_URL", raising=False)
    monkeypatch.delenv("DASH0_AUTH_TOKEN", raising=False)

    with pytest.raises(SystemExit) as exc:
        cli.main(["refresh", "--state", str(tmp_path / "state.json")])

    assert exc.value.code == cli.EXIT_USAGE


def test_refresh_reports_failures_through_exit_code(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    seen: dict[str, object] = {}

    def fake_refresh(repository: object) -> RefreshSummary:
        seen["repository"] = repository
        summary = RefreshSummary(unchanged=1)
        summary.failures.append(object())  # type: ignore[arg-type]
        return summary

    monkeypatch.setattr(cli, "refresh_state", fake_refresh)

    with pytest.raises(SystemExit) as exc:
        cli.main(["refresh", "--state", str(tmp_path / "state.json")])

    assert exc.value.code == cli.EXIT_FAILURE
    assert seen["repository"].path == tmp_path / "state.json"  # type: ignore[attr-defined]


def test_refresh_succeeds_without_exit(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    monkeypatch.setattr(cli, "refresh_state", lambda repository: RefreshSummary(replaced=2))

    cli.main(["refresh", "--state", str(tmp_path / "state.json")])
