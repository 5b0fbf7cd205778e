from pathlib import Path

import pytest

from appwrap.config import BuildConfig, CompressionStrategy, PackageSpec
from appwrap.context import BuildContext
from appwrap.errors import ConfigError


def test_package_spec_derives_defaults_from_app_name():
    spec = PackageSpec(app_name="editor")

    assert spec.binary_path == Path("target/release/editor")
    assert spec.icon_path == Path("assets/icon-256.png")
    assert spec.icon_name == "editor"
    assert spec.output_name == "editor-x86_64.AppImage"
    assert spec.desktop_filename == "editor.desktop"
    assert spec.icon_filename == "editor.png"


def test_package_spec_keeps_explicit_icon_name():
    spec = PackageSpec(app_name="editor", icon_name="app_icon")

    assert spec.icon_name == "app_icon"
    assert spec.icon_filename == "app_icon.png"


@pytest.mark.parametrize("name", ["", "bad/name", "two words"])
def test_package_spec_rejects_invalid_app_names(name):
    with pytest.raises(ConfigError):
        PackageSpec(app_name=name)


def test_package_spec_rejects_output_name_with_separator():
    with pytest.raises(ConfigError):
        PackageSpec(app_name="editor", output_name="dist/editor.AppImage")


def test_package_spec_rejects_bad_categories():
    with pytest.raises(ConfigError):
        PackageSpec(app_name="editor", categories=[])
    with pytest.raises(ConfigError):
        PackageSpec(app_name="editor", categories=["Utility;Development"])


def test_build_config_requires_unique_compression_strategies():
    with pytest.raises(ConfigError):
        BuildConfig(compression=[])
    with pytest.raises(ConfigError):
        BuildConfig(
            compression=[
                CompressionStrategy(name="best", args=["--best"]),
                CompressionStrategy(name="best", args=["-9"]),
            ]
        )


def test_build_config_default_compression_order():
    config = BuildConfig()

    assert [s.name for s in config.compression] == ["ultra-brute", "best"]
    assert config.image_compression == "xz"
    assert config.skip_appstream is True
    assert config.extract_and_run is True


def test_build_context_resolves_paths_against_work_dir(tmp_path):
    context = BuildContext.create(PackageSpec(app_name="editor"), work_dir=tmp_path)

    root = tmp_path.resolve()
    assert context.tool_path == root / "appimagetool-x86_64.AppImage"
    assert context.appdir == root / "AppImage" / "AppDir"
    assert context.binary_source == root / "target" / "release" / "editor"
    assert context.icon_source == root / "assets" / "icon-256.png"
    assert context.artifact_path == root / "editor-x86_64.AppImage"


def test_build_context_keeps_absolute_inputs(tmp_path):
    binary = tmp_path / "elsewhere" / "editor"
    context = BuildContext.create(
        PackageSpec(app_name="editor", binary_path=binary),
        work_dir=tmp_path / "work",
        output_dir=tmp_path / "dist",
    )

    assert context.binary_source == binary
    assert context.artifact_path == (tmp_path / "dist").resolve() / "editor-x86_64.AppImage"


@pytest.mark.parametrize("name", ["ed$x", "ed`id`", 'ed"q', "ed;rm", "..", "édit"])
def test_package_spec_rejects_shell_sensitive_names(name):
    with pytest.raises(ConfigError, match="letters, digits"):
        PackageSpec(app_name=name)


def test_package_spec_rejects_shell_sensitive_icon_name():
    with pytest.raises(ConfigError):
        PackageSpec(app_name="editor", icon_name="icon$HOME")


def test_package_spec_accepts_common_name_characters():
    spec = PackageSpec(app_name="my-editor_2.0+beta")

    assert spec.output_name == "my-editor_2.0+beta-x86_64.AppImage"


@pytest.mark.parametrize("sub", ["AppImage", "AppImage/AppDir", "AppImage/dist"])
def test_build_context_rejects_output_inside_staging(tmp_path, sub):
    with pytest.raises(ConfigError, match="staging directory"):
        BuildContext.create(
            PackageSpec(app_name="editor"),
            work_dir=tmp_path,
            output_dir=tmp_path / sub,
        )


def test_build_context_allows_sibling_output_dir(tmp_path):
    context = BuildContext.create(
        PackageSpec(app_name="editor"),
        work_dir=tmp_path,
        output_dir=tmp_path / "AppImage-dist",
    )

    assert context.artifact_path.parent.name == "AppImage-dist"
