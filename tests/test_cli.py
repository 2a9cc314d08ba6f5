"""Tests for the command-line interface"""

import json

import pytest
from typer.testing import CliRunner

from daily_dose import __version__
from daily_dose.__main__ import main
from daily_dose.cli import app as cli_app
from fakes import FakeArchive, doc

runner = CliRunner()
WIDE = {"COLUMNS": "200"}

GD_DATE = "collection:GratefulDead AND date:*-05-08"


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "daily-dose" / "settings.json"
    monkeypatch.setattr(cli_app, "SETTINGS_FILE", path)
    return path


@pytest.fixture
def archive(monkeypatch, sample_files):
    """Routes the CLI's archive client to an in-memory fake"""
    fake = FakeArchive(
        responses={GD_DATE: [doc("gd1977-05-08.sbd", "1977-05-08", "Barton Hall")]},
        files={"gd1977-05-08.sbd": sample_files},
    )
    monkeypatch.setattr(cli_app, "ArchiveClient", lambda **kwargs: fake)
    return fake


def test_version():
    result = runner.invoke(cli_app.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_artists_lists_defaults(settings_file):
    result = runner.invoke(cli_app.app, ["artists"], env=WIDE)

    assert result.exit_code == 0
    for name in ("Grateful Dead", "Jerry Garcia (Solo)", "Jerry Garcia Band", "Dead & Company"):
        assert name in result.output


class TestSetApiKey:
    """Test storing the setlist.fm key"""

    def test_save_and_clear(self, settings_file):
        result = runner.invoke(cli_app.app, ["set-api-key", "abc123"])
        assert result.exit_code == 0
        assert json.loads(settings_file.read_text())["setlist_api_key"] == "abc123"

        result = runner.invoke(cli_app.app, ["set-api-key", "--clear"])
        assert result.exit_code == 0
        assert json.loads(settings_file.read_text())["setlist_api_key"] == ""

    def test_missing_key(self, settings_file):
        result = runner.invoke(cli_app.app, ["set-api-key"])
        assert result.exit_code == 1
        assert "No API key provided" in result.output
        assert not settings_file.exists()

    def test_show_config_hides_key(self, settings_file):
        runner.invoke(cli_app.app, ["set-api-key", "abc123"])
        result = runner.invoke(cli_app.app, ["--show-config"], env=WIDE)

        assert result.exit_code == 0
        assert "[hidden]" in result.output
        assert "abc123" not in result.output


class TestToday:
    """Test the show of the day command"""

    def test_show_of_the_day(self, settings_file, archive, tmp_path):
        playlist = tmp_path / "show.m3u"
        result = runner.invoke(
            cli_app.app,
            ["today", "--date", "05-08", "--no-setlist", "--m3u", str(playlist)],
            env=WIDE,
        )

        assert result.exit_code == 0, result.output
        assert "Barton Hall" in result.output
        assert "New Minglewood Blues" in result.output
        assert playlist.read_text(encoding="utf-8").startswith("#EXTM3U\n")
        assert json.loads(settings_file.read_text())["last_show_identifier"] == (
            "gd1977-05-08.sbd"
        )

    def test_invalid_date(self, settings_file, archive):
        result = runner.invoke(cli_app.app, ["today", "--date", "13-45"], env=WIDE)

        assert result.exit_code == 1
        assert "InvalidDateMarkerError" in result.output
        assert archive.calls == []

    def test_unknown_artist(self, settings_file, archive):
        result = runner.invoke(cli_app.app, ["today", "--artist", "Phish"], env=WIDE)

        assert result.exit_code == 1
        assert "UnknownArtistError" in result.output

    def test_no_shows(self, settings_file, monkeypatch):
        monkeypatch.setattr(cli_app, "ArchiveClient", lambda **kwargs: FakeArchive())
        result = runner.invoke(cli_app.app, ["today", "--date", "05-08"], env=WIDE)

        assert result.exit_code == 1
        assert "No shows found for Grateful Dead." in result.output


class TestMain:
    """Test the console script entry point"""

    def test_version_exits_cleanly(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unexpected_error_becomes_exit_code(self, monkeypatch, capsys):
        """Errors escaping a command are shown as a panel on stderr"""

        def broken_store(path):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(cli_app, "SettingsStore", broken_store)
        with pytest.raises(SystemExit) as exc_info:
            main(["artists"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "RuntimeError" in err
        assert "disk on fire" in err
