"""Test configuration and fixtures"""

import pytest

from daily_dose.models import Artist, SetlistSet
from daily_dose.storage.settings_store import SettingsStore


@pytest.fixture
def grateful_dead():
    return Artist(
        name="Grateful Dead",
        collection="GratefulDead",
        mbid="6faa7ca7-0d99-4a5e-bfa6-1fd5037520c6",
    )


@pytest.fixture
def jgb():
    return Artist(
        name="Jerry Garcia Band",
        collection="JerryGarcia",
        mbid="6b5c16a5-9a3b-40e0-9fdb-789ab5a30f5a",
        collection_filter_keyword="jgb",
    )


@pytest.fixture
def jerry_solo():
    return Artist(
        name="Jerry Garcia (Solo)",
        collection="JerryGarcia",
        mbid="1ecff755-607d-4130-9a8a-8873f27e5de5",
        exclude_keyword="jgb",
    )


@pytest.fixture
def settings_store(tmp_path):
    """Settings store backed by a temporary directory"""
    return SettingsStore(tmp_path / "daily-dose" / "settings.json")


@pytest.fixture
def sample_files():
    """A show manifest mixing playable and non-playable files"""
    return [
        {"name": "gd77-05-08d1t02.ogg", "format": "Ogg Vorbis", "title": "Loser"},
        {"name": "gd77-05-08d1t01.mp3", "format": "VBR MP3", "title": "New Minglewood Blues"},
        {"name": "gd77-05-08d1t02.mp3", "format": "VBR MP3", "title": "Loser"},
        {"name": "gd77-05-08d1t01.flac", "format": "Flac", "title": "New Minglewood Blues"},
        {"name": "gd77-05-08_meta.xml", "format": "Metadata"},
    ]


@pytest.fixture
def sample_sets():
    return [
        SetlistSet(name="Set 1", songs=("New Minglewood Blues", "Loser")),
        SetlistSet(name="Encore", songs=("One More Saturday Night",)),
    ]
