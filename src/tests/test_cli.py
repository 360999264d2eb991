from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

import cli
from src.config.database import SupabaseClient
from src.guests.directory import GuestDirectory
from src.guests.tests.inmemory_models import InMemoryGuestReadModel, InMemoryGuestWriteModel

runner = CliRunner()


def store_client(configured: bool = True) -> SupabaseClient:
    return SupabaseClient(
        config=SimpleNamespace(
            supabase_url="https://project.supabase.co" if configured else "",
            supabase_api_key="key",
            request_timeout=5.0,
        )
    )


@pytest.fixture
def invite_list(tmp_path):
    path = tmp_path / "invite_list.csv"
    path.write_text("Name,Address\nJohn Smith,1 Main St\nJane Doe,2 Oak Ave\n", encoding="utf-8")
    return path


@pytest.fixture
def read_model(monkeypatch):
    read_model = InMemoryGuestReadModel()
    directory = GuestDirectory(read_model=read_model)
    monkeypatch.setattr(cli, "get_store_client", lambda: store_client())
    monkeypatch.setattr(cli, "get_guest_directory", lambda: directory)
    monkeypatch.setattr(cli, "SupabaseGuestWriteModel", lambda: InMemoryGuestWriteModel(read_model))
    return read_model


def test_import_guests_then_rerun(invite_list, read_model):
    first = runner.invoke(cli.app, ["import-guests", "--file", str(invite_list)])
    second = runner.invoke(cli.app, ["import-guests", "-f", str(invite_list)])

    assert first.exit_code == 0
    assert "Imported: 2" in first.output
    assert second.exit_code == 0
    assert "Imported: 0" in second.output
    assert "Already on the guest list: 2" in second.output
    assert [g.name for g in read_model.guests] == ["John Smith", "Jane Doe"]


def test_import_guests_missing_file(tmp_path, read_model):
    result = runner.invoke(cli.app, ["import-guests", "--file", str(tmp_path / "nope.csv")])

    assert result.exit_code == 1
    assert "CSV file not found" in result.output


def test_import_guests_without_store(invite_list, monkeypatch):
    monkeypatch.setattr(cli, "get_store_client", lambda: store_client(configured=False))

    result = runner.invoke(cli.app, ["import-guests", "--file", str(invite_list)])

    assert result.exit_code == 1
    assert "SUPABASE_URL" in result.output


def test_import_guests_store_down(invite_list, read_model):
    read_model.fail = True

    result = runner.invoke(cli.app, ["import-guests", "--file", str(invite_list)])

    assert result.exit_code == 1
    assert "Import failed" in result.output


def test_create_table_prints_ddl():
    result = runner.invoke(cli.app, ["create-table"])

    assert result.exit_code == 0
    assert "CREATE TABLE IF NOT EXISTS guests" in result.output
    assert "CREATE TABLE IF NOT EXISTS rsvps" in result.output


def test_serve_runs_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    result = runner.invoke(cli.app, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    assert calls == [("src.main:app", {"host": cli.settings.app_host, "port": 9000, "reload": False})]


def test_import_guests_unreadable_file(tmp_path, read_model):
    path = tmp_path / "invite_list.csv"
    path.write_bytes(b"Name,Address\n\xff\xfeJohn Smith,1 Main St\n")

    result = runner.invoke(cli.app, ["import-guests", "--file", str(path)])

    assert result.exit_code == 1
    assert "Import failed" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert read_model.guests == []
