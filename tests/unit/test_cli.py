"""Unit tests for the typer entry point."""

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.domain.exit_codes import ExitCode
from fakes import FakeCatalog, FakeLoader, build_library, store_payload


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STEAM_IDLER_APPID_FILE", str(tmp_path / "steam_appid.txt"))
    monkeypatch.setenv("STEAM_IDLER_MAINTENANCE_INTERVAL_SECONDS", "0.01")
    monkeypatch.delenv("SteamAppId", raising=False)
    monkeypatch.delenv("SteamGameId", raising=False)
    return tmp_path


@pytest.fixture
def fake_adapters(monkeypatch):
    """Swap the store client and the ctypes loader for fakes."""

    lib = build_library()
    catalog = FakeCatalog(
        {
            "440": store_payload("440", "Team Fortress 2"),
            "999999999": store_payload("999999999", success=False),
        }
    )

    class _CatalogContext:
        def __init__(self, settings):
            pass

        def __enter__(self):
            return catalog

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(cli_main, "StoreCatalogClient", _CatalogContext)
    monkeypatch.setattr(cli_main, "CtypesLibraryLoader", lambda: FakeLoader(lib))
    return catalog, lib


class TestIdleCommand:
    def test_end_to_end_team_fortress(self, cli_runner, isolated_env, fake_adapters):
        catalog, lib = fake_adapters

        result = cli_runner.invoke(cli_main.app, ["440", "--no-banner"], input="\n")

        assert result.exit_code == 0, result.output
        assert 'Executing game "Team Fortress 2" (AppID 440)...' in result.output
        assert "Simulation stopped. Exiting." in result.output
        assert (isolated_env / "steam_appid.txt").read_text() == "440\n"
        assert "shutdown" in lib.events

    def test_bad_format_then_quit(self, cli_runner, isolated_env, fake_adapters):
        catalog, _ = fake_adapters

        result = cli_runner.invoke(cli_main.app, ["abc123", "--no-banner"], input="q\n")

        assert result.exit_code == 0
        assert "Error: AppID must contain digits only." in result.output
        assert catalog.calls == []

    def test_unknown_appid_then_input_closed(self, cli_runner, isolated_env, fake_adapters):
        result = cli_runner.invoke(cli_main.app, ["999999999", "--no-banner"], input="")

        assert "AppID not found" in result.output
        assert result.exit_code == int(ExitCode.FAILURE)

    def test_saved_appid_is_used(self, cli_runner, isolated_env, fake_adapters):
        (isolated_env / "steam_appid.txt").write_text("440\n")

        result = cli_runner.invoke(cli_main.app, ["--no-banner"], input="\n")

        assert result.exit_code == 0
        assert "Enter Steam AppID" not in result.output

    def test_banner(self, cli_runner, isolated_env, fake_adapters):
        result = cli_runner.invoke(cli_main.app, [], input="q\n")

        assert "SimpleSteamIdler" in result.output
        assert result.exit_code == 0


class TestDoctorFlag:
    def test_exit_code_follows_checks(self, cli_runner, isolated_env, monkeypatch):
        seen = []

        def fake_doctor(console, settings):
            seen.append(settings.appid_file)
            return False

        monkeypatch.setattr(cli_main, "run_doctor", fake_doctor)

        result = cli_runner.invoke(cli_main.app, ["--doctor", "--no-banner"])

        assert result.exit_code == 1
        assert seen == [isolated_env / "steam_appid.txt"]
