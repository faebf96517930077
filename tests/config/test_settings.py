"""Tests for ShiprateSettings: unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from shiprate.config.settings import ShiprateSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SHIPRATE_CONFIG", "SHIPRATE_LOCALE", "SHIPRATE_SHIPPING__HANDLING_FEE"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ShiprateSettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.locale == "en"
        assert settings.shipping.unit_multiplier == 16.0
        assert settings.cache.backend == "memory"
        assert settings.services == []

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ShiprateSettings.from_cli(root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_sections(self, tmp_path: Path) -> None:
        (tmp_path / "shiprate.toml").write_text(
            'locale = "fr"\n\n'
            "[shipping]\nhandling_fee = 50\n\n"
            '[cache]\nbackend = "sqlite"\n\n'
            '[[services]]\ncarrier = "CanadaPost"\ndescription = "Expedited"\n'
        )
        settings = ShiprateSettings.from_cli(root=tmp_path)
        assert settings.locale == "fr"
        assert settings.shipping.handling_fee == 50
        assert settings.shipping.unit_multiplier == 16.0
        assert settings.cache.backend == "sqlite"
        assert settings.services[0].carrier == "CanadaPost"

    def test_root_defaults_to_config_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "shiprate.toml").write_text('locale = "fr"\n')
        child = tmp_path / "sub"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = ShiprateSettings.from_cli()
        assert settings.root == tmp_path
        assert settings.config_path == tmp_path / "shiprate.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "rates.toml"
        custom.parent.mkdir()
        custom.write_text('locale = "de"\n')
        settings = ShiprateSettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.locale == "de"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "shiprate.toml").write_text("locale = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ShiprateSettings.from_cli(root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "shiprate.toml").write_text('locale = "fr"\n')
        monkeypatch.setenv("SHIPRATE_LOCALE", "de")
        assert ShiprateSettings.from_cli(root=tmp_path).locale == "de"

    def test_nested_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHIPRATE_SHIPPING__HANDLING_FEE", "75")
        assert ShiprateSettings.from_cli(root=tmp_path).shipping.handling_fee == 75

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        (tmp_path / "shiprate.toml").write_text('locale = "fr"\n')
        settings = ShiprateSettings.from_cli(
            root=tmp_path, locale="es", json_output=True, verbose=True
        )
        assert settings.locale == "es"
        assert settings.json_output is True
        assert settings.verbose is True
