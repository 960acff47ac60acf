import csv
import urllib.request
from pathlib import Path

import pytest
from typer.testing import CliRunner

from inscription_export import oklink_client
from inscription_export.cli import app, cmd_export
from tests.helpers.payloads import PagedFetcher, make_pages, raw_inscription, response_body

WALLET = "bc1pwallet"

runner = CliRunner()


def _stub_api(monkeypatch: pytest.MonkeyPatch, bodies: list[str]) -> list[tuple]:
    calls: list[tuple] = []

    def _fake(api_key, address, page, *, limit):
        calls.append((api_key, address, page, limit))
        return bodies[page - 1]

    monkeypatch.setattr(oklink_client, "get_transaction_list", _fake)
    return calls


def _read_rows(directory: Path) -> list[list[str]]:
    files = sorted(directory.glob("*.csv"))
    assert len(files) == 1
    with files[0].open(encoding="utf-8", newline="") as f:
        return list(csv.reader(f))


def test_export_writes_all_pages(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    calls = _stub_api(monkeypatch, make_pages([2, 3]))

    result = runner.invoke(app, [WALLET, "--api-key", "secret"])

    assert result.exit_code == 0, result.output
    assert [c[2] for c in calls] == [1, 2]
    assert all(c[0] == "secret" and c[1] == WALLET and c[3] == 50 for c in calls)
    rows = _read_rows(tmp_path / "csv")
    assert len(rows) == 1 + 5
    assert [r[11] for r in rows[1:]] == ["tx1-0", "tx1-1", "tx2-0", "tx2-1", "tx2-2"]
    assert "csv" in result.output


def test_api_key_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("OKLINK_API_KEY", "env-key")
    calls = _stub_api(monkeypatch, make_pages([1]))

    result = runner.invoke(app, [WALLET])

    assert result.exit_code == 0, result.output
    assert calls[0][0] == "env-key"


def test_api_key_from_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    (tmp_path / ".env").write_text("OKLINK_API_KEY=dotenv-key\n", encoding="utf-8")
    calls = _stub_api(monkeypatch, make_pages([1]))

    result = runner.invoke(app, [WALLET])

    assert result.exit_code == 0, result.output
    assert calls[0][0] == "dotenv-key"


def test_missing_api_key_fails(tmp_path: Path):
    result = runner.invoke(app, [WALLET])
    assert result.exit_code == 1
    assert "OKLINK_API_KEY" in result.output
    assert not (tmp_path / "csv").exists()


def test_invalid_record_writes_nothing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    bodies = [
        response_body([raw_inscription()], page=1, total=2),
        response_body([raw_inscription(actionType="burn")], page=2, total=2),
    ]
    _stub_api(monkeypatch, bodies)

    result = runner.invoke(app, [WALLET, "--api-key", "k"])

    assert result.exit_code == 1
    assert "Error: unknown action: burn" in result.output
    assert not (tmp_path / "csv").exists()


def test_output_dir_option(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    _stub_api(monkeypatch, make_pages([1]))
    out = tmp_path / "exports"

    result = runner.invoke(app, [WALLET, "--api-key", "k", "--output-dir", str(out)])

    assert result.exit_code == 0, result.output
    assert len(_read_rows(out)) == 2


def test_output_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("INSCRIPTION_EXPORT_OUTPUT_DIR", str(tmp_path / "from-env"))
    fetcher = PagedFetcher(make_pages([1, 1]))

    assert cmd_export(WALLET, fetch_page=fetcher) == 0
    assert len(_read_rows(tmp_path / "from-env")) == 3


def test_write_failure_returns_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    (tmp_path / "blocked").write_text("file, not a directory")
    fetcher = PagedFetcher(make_pages([1]))

    code = cmd_export(
        WALLET, api_key="k", output_dir=tmp_path / "blocked" / "csv", fetch_page=fetcher
    )

    assert code == 1
    assert "failed to write CSV" in capsys.readouterr().err


def test_undecodable_response_reports_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    class _Response:
        def read(self) -> bytes:
            return b'{"data": [\xff]}'

        def __enter__(self):
            return self

        def __exit__(self, *exc) -> None:
            return None

    monkeypatch.setattr(urllib.request, "urlopen", lambda req, *a, **kw: _Response())

    result = runner.invoke(app, [WALLET, "--api-key", "k"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Error: OKLink response is not valid UTF-8" in result.output
    assert not (tmp_path / "csv").exists()
