"""Tests for sync settings validation."""

import os

import pytest

from common.constants import DEFAULT_LOG_FILE
from syncer.config import SyncSettings, load_settings
from syncer.exceptions import ConfigurationError


def test_defaults():
    settings = SyncSettings(basedir="/data", s3bucket="bucket", region="us-east-1")

    assert settings.action == "upload"
    assert settings.workers == 1
    assert settings.strict_roster is False
    assert settings.log_file == DEFAULT_LOG_FILE


@pytest.mark.parametrize("raw,expected", [
    ("/data/export/", "/data/export"),
    ("/data//export", "/data/export"),
    ("/", "/"),
])
def test_basedir_normalized(raw, expected):
    settings = SyncSettings(basedir=raw, s3bucket="bucket", region="us-east-1")

    assert settings.basedir == expected


def test_relative_basedir_made_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    settings = SyncSettings(basedir="export", s3bucket="bucket", region="us-east-1")

    assert settings.basedir == os.path.join(str(tmp_path), "export")


def test_load_settings_ignores_none_overrides():
    settings = load_settings(
        basedir="/data", s3bucket="bucket", region="us-east-1", workers=None, node_name=None
    )

    assert settings.workers >= 1


def test_load_settings_applies_overrides():
    settings = load_settings(
        basedir="/data", s3bucket="bucket", region="eu-west-1",
        workers=8, node_name="node7", strict_roster=True,
    )

    assert settings.workers == 8
    assert settings.node_name == "node7"
    assert settings.strict_roster is True
    assert settings.region == "eu-west-1"


@pytest.mark.parametrize("overrides", [
    {"s3bucket": "  "},
    {"region": ""},
    {"basedir": " "},
    {"workers": 0},
    {"action": "mirror"},
])
def test_invalid_settings_raise(overrides):
    data = {"basedir": "/data", "s3bucket": "bucket", "region": "us-east-1"}
    data.update(overrides)

    with pytest.raises(ConfigurationError):
        load_settings(**data)


def test_download_action_is_accepted():
    settings = load_settings(basedir="/data", s3bucket="bucket", region="us-east-1", action="download")

    assert settings.action == "download"
