"""Tests for loading and saving the farms file."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from farm_config.config import FarmsConfig, default_path_placeholder, load_config, save_config
from farm_config.exceptions import ConfigError
from farm_config.models import Farm, FarmEntryInit


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_farms(self, tmp_path: Path) -> None:
        config_file = tmp_path / "farms.json"
        config_file.write_text(
            json.dumps(
                {
                    "farms": [
                        {"path": "/media/farm-a", "size": "2 TB"},
                        {"path": "/media/farm-b", "size": "10"},
                    ]
                }
            )
        )

        config = load_config(config_file)

        assert config.farms == (
            Farm(path=Path("/media/farm-a"), size="2 TB"),
            Farm(path=Path("/media/farm-b"), size="10"),
        )

    def test_missing_farms_key_means_no_farms(self, tmp_path: Path) -> None:
        config_file = tmp_path / "farms.json"
        config_file.write_text("{}")

        assert load_config(config_file).farms == ()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path / "missing.json")

    def test_corrupted_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "farms.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigError):
            load_config(config_file)

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"farms": {"path": "/media/farm"}},
            {"farms": [{"path": "/media/farm"}]},
            {"farms": ["/media/farm"]},
        ],
    )
    def test_malformed_payload(self, tmp_path: Path, payload: object) -> None:
        config_file = tmp_path / "farms.json"
        config_file.write_text(json.dumps(payload))

        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(config_file)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_then_load_preserves_order_and_text(self, tmp_path: Path) -> None:
        config_file = tmp_path / "nested" / "farms.json"
        config = FarmsConfig(
            farms=(
                Farm(path=Path("/media/farm-b"), size="1.5 TiB"),
                Farm(path=Path("/media/farm-a"), size="abc"),
            )
        )

        save_config(config_file, config)

        assert load_config(config_file) == config
        assert json.loads(config_file.read_text())["farms"][1] == {
            "path": "/media/farm-a",
            "size": "abc",
        }


class TestFarmEntryInit:
    """Tests for the initial-value helpers."""

    def test_empty_sentinel(self) -> None:
        init = FarmEntryInit.empty()

        assert init.path is None
        assert init.size == ""

    def test_from_farm(self) -> None:
        init = FarmEntryInit.from_farm(Farm(path=Path("/media/farm"), size="2 GB"))

        assert init.path == Path("/media/farm")
        assert init.size == "2 GB"

    def test_current_directory_is_not_the_sentinel(self) -> None:
        init = FarmEntryInit.from_farm(Farm(path=Path("."), size="2 GB"))

        assert init.path is not None
        assert init != FarmEntryInit.empty()


class TestFarmSerialization:
    """Tests for Farm.to_dict and Farm.from_dict."""

    def test_unset_path_is_stored_as_empty_string(self) -> None:
        farm = Farm(path=None, size="")

        assert farm.to_dict() == {"path": "", "size": ""}
        assert Farm.from_dict({"path": "", "size": ""}) == farm

    def test_current_directory_survives_reload(self) -> None:
        farm = Farm.from_dict({"path": ".", "size": "2 GB"})

        assert farm.path == Path(".")
        assert farm.to_dict() == {"path": ".", "size": "2 GB"}


class TestDefaultPathPlaceholder:
    """Tests for the platform-specific placeholder."""

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [
            ("win32", "D:\\subspace-farm"),
            ("darwin", "/Volumes/Subspace/subspace-farm"),
            ("linux", "/media/subspace-farm"),
        ],
    )
    def test_placeholder(self, platform: str, expected: str) -> None:
        with patch("farm_config.config.sys.platform", platform):
            assert default_path_placeholder() == expected
