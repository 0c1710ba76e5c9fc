"""Unit tests for project discovery and settings layering."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stylekit_core.errors import ConfigurationError
from stylekit_core.project import (
    SETTINGS_ENV_VAR,
    default_settings_path,
    find_project_root,
    load_project_overrides,
    load_user_settings,
    resolve_project,
)
from stylekit_core.schemas import OutputStyle, StylekitSettings


def _write_package_json(root: Path, data: dict) -> None:
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(data))


class TestFindProjectRoot:
    """Tests for find_project_root()."""

    def test_no_projects(self) -> None:
        assert find_project_root("/work/site/scss/app.scss", []) is None

    def test_outside_every_project(self) -> None:
        assert find_project_root("/tmp/app.scss", ["/work/site"]) is None

    def test_single_match(self) -> None:
        root = find_project_root("/work/site/scss/app.scss", ["/work/other", "/work/site"])
        assert root == Path("/work/site")

    def test_nested_projects_pick_greatest(self) -> None:
        root = find_project_root(
            "/work/site/themes/dark/app.scss",
            ["/work/site/themes/dark", "/work/site"],
        )
        assert root == Path("/work/site/themes/dark")

    def test_plain_string_prefix(self) -> None:
        """Matching is a string prefix, so /work/site also claims /work/site2."""
        assert find_project_root("/work/site2/app.scss", ["/work/site"]) == Path("/work/site")


class TestLoadProjectOverrides:
    """Tests for load_project_overrides()."""

    def test_no_config_files(self, tmp_path: Path) -> None:
        assert load_project_overrides(tmp_path) == {}

    def test_package_json_sections(self, tmp_path: Path) -> None:
        _write_package_json(
            tmp_path,
            {
                "name": "site",
                "sass": {"outputStyle": "compressed"},
                "autoprefixer": {"enabled": True},
            },
        )

        assert load_project_overrides(tmp_path) == {
            "sass": {"outputStyle": "compressed"},
            "autoprefixer": {"enabled": True},
        }

    def test_yaml_wins_over_package_json(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"sass": {"outputStyle": "compressed", "precision": 3}})
        (tmp_path / "stylekit.yaml").write_text("sass:\n  outputStyle: nested\n")

        assert load_project_overrides(tmp_path) == {
            "sass": {"outputStyle": "nested", "precision": 3},
        }

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"sass": {')

        with pytest.raises(ConfigurationError, match="Parse config error"):
            load_project_overrides(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "stylekit.yaml").write_text("sass: [unclosed\n")

        with pytest.raises(ConfigurationError, match="stylekit.yaml"):
            load_project_overrides(tmp_path)

    def test_yaml_section_must_be_object(self, tmp_path: Path) -> None:
        (tmp_path / "stylekit.yaml").write_text("sass: compressed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_project_overrides(tmp_path)

        assert exc_info.value.field_path == "sass"
        assert exc_info.value.file_path == str(tmp_path / "stylekit.yaml")

    def test_package_json_entry_point_field_ignored(self, tmp_path: Path) -> None:
        """npm packages use "sass" as a string entry point; it is not a settings object."""
        _write_package_json(
            tmp_path,
            {"name": "theme", "sass": "scss/app.scss", "autoprefixer": ["on"]},
        )

        assert load_project_overrides(tmp_path) == {}

    def test_package_json_entry_point_with_yaml_overrides(self, tmp_path: Path) -> None:
        _write_package_json(tmp_path, {"sass": "scss/app.scss"})
        (tmp_path / "stylekit.yaml").write_text("sass:\n  precision: 3\n")

        assert load_project_overrides(tmp_path) == {"sass": {"precision": 3}}


class TestResolveProject:
    """Tests for resolve_project()."""

    def test_outside_project_uses_user_settings(self, tmp_path: Path) -> None:
        settings = StylekitSettings.model_validate({"sass": {"precision": 9}})

        context = resolve_project(tmp_path / "app.scss", settings, [])

        assert context.project_root is None
        assert context.settings == settings
        assert context.compile_options().project_root is None

    def test_project_overrides_apply(self, tmp_path: Path) -> None:
        site = tmp_path / "site"
        _write_package_json(site, {"sass": {"outputStyle": "compressed"}})
        settings = StylekitSettings.model_validate({"sass": {"precision": 9}})

        context = resolve_project(site / "scss/app.scss", settings, [site])

        assert context.project_root == site
        assert context.settings.sass.output_style is OutputStyle.COMPRESSED
        assert context.settings.sass.precision == 9
        assert context.compile_options().project_root == site

    def test_explicit_overrides_win(self, tmp_path: Path) -> None:
        site = tmp_path / "site"
        _write_package_json(site, {"sass": {"outputStyle": "compressed"}})

        context = resolve_project(
            site / "app.scss",
            StylekitSettings(),
            [site],
            overrides={"sass": {"output_style": "nested"}},
        )

        assert context.settings.sass.output_style is OutputStyle.NESTED

    def test_invalid_project_value(self, tmp_path: Path) -> None:
        site = tmp_path / "site"
        _write_package_json(site, {"sass": {"precision": "many"}})

        with pytest.raises(ConfigurationError, match="Invalid project settings") as exc_info:
            resolve_project(site / "app.scss", StylekitSettings(), [site])

        assert exc_info.value.field_path == "precision"

    def test_prefix_options_follow_project(self, tmp_path: Path) -> None:
        site = tmp_path / "site"
        _write_package_json(site, {"autoprefixer": {"enabled": True, "ignore": ["vendor/"]}})

        context = resolve_project(site / "app.scss", StylekitSettings(), [site])

        prefix = context.prefix_options()
        assert prefix.enabled is True
        assert prefix.exclude_rules == ("vendor/",)


class TestUserSettings:
    """Tests for user settings discovery and loading."""

    def test_env_var_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "custom.yaml"))
        assert default_settings_path() == tmp_path / "custom.yaml"

    def test_xdg_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert default_settings_path() == tmp_path / "stylekit" / "settings.yaml"

    def test_missing_default_file_gives_defaults(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv(SETTINGS_ENV_VAR, str(tmp_path / "absent.yaml"))
        assert load_user_settings() == StylekitSettings()

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_user_settings(tmp_path / "absent.yaml")

    def test_loads_explicit_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("sass:\n  compileOnSave: false\n")

        assert load_user_settings(path).sass.compile_on_save is False

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("autoprefixer:\n  enabled: maybe\n")

        with pytest.raises(ConfigurationError, match="Invalid settings") as exc_info:
            load_user_settings(path)

        assert exc_info.value.field_path == "autoprefixer.enabled"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("sass: {\n")

        with pytest.raises(ConfigurationError, match="Parse config error"):
            load_user_settings(path)
