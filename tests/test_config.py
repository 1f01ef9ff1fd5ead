"""Tests for staticweb.config — ServeConfig defaults and builder wiring."""

import dataclasses

import pytest

from staticweb.config import ServeConfig


class TestServeConfig:
    def test_defaults(self) -> None:
        config = ServeConfig()
        assert config.directory == "."
        assert config.request_path is None
        assert config.port == 8000

    def test_frozen(self) -> None:
        config = ServeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 1  # type: ignore[misc]

    def test_builder_carries_options(self, static_dir) -> None:
        config = ServeConfig(
            directory=static_dir,
            request_path="/files",
            strip_path=False,
            gzip=True,
            listing=True,
        )
        builder = config.builder()
        assert builder.built is False
        assert builder.config.root_directory == str(static_dir)
        assert builder.config.request_path == "/files"
        assert builder.config.strip_path is False
        assert builder.config.gzip is True
        assert builder.config.list_directories is True

    def test_builder_default_path(self, static_dir, monkeypatch) -> None:
        monkeypatch.chdir(static_dir.parent)
        builder = ServeConfig(directory="public").builder()
        assert builder.config.request_path == "public"
