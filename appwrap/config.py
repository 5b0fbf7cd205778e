import re
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from appwrap.errors import ConfigError


APPIMAGETOOL_NAME = "appimagetool-x86_64.AppImage"
APPIMAGETOOL_URL = (
    "https://github.com/AppImage/AppImageKit/releases/download/continuous/"
    "appimagetool-x86_64.AppImage"
)
DEFAULT_ICON_PATH = Path("assets/icon-256.png")

# Names land unquoted in AppRun, the desktop entry and file names.
_NAME_PATTERN = re.compile(r"[A-Za-z0-9._+-]+")


class PackageSpec(BaseModel):
    app_name: str = Field(
        ...,
        description="Application name; used for the binary, desktop entry and artifact",
        examples=["editor"],
    )

    binary_path: Optional[Path] = Field(
        default=None,
        description="Prebuilt executable to package (default: target/release/<app_name>)",
    )

    icon_path: Path = Field(
        default=DEFAULT_ICON_PATH,
        description="Icon asset copied into the AppDir when present",
    )

    icon_name: Optional[str] = Field(
        default=None,
        description="Value of the desktop entry Icon key and icon file stem (default: app_name)",
        examples=["app_icon"],
    )

    output_name: Optional[str] = Field(
        default=None,
        description="File name of the produced image (default: <app_name>-<arch>.AppImage)",
    )

    arch: str = Field(
        default="x86_64",
        description="Target architecture embedded in the artifact name",
    )

    categories: List[str] = Field(
        default_factory=lambda: ["Utility"],
        description="Desktop entry categories",
    )

    @field_validator("app_name", "icon_name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value:
            raise ConfigError("Application and icon names cannot be empty")
        if "/" in value or "\\" in value:
            raise ConfigError(f"Name must not contain path separators: {value!r}")
        if not _NAME_PATTERN.fullmatch(value) or value in {".", ".."}:
            raise ConfigError(
                f"Name may only contain letters, digits and . _ + -: {value!r}"
            )
        return value

    @field_validator("output_name")
    @classmethod
    def validate_output_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not value:
            raise ConfigError("Output name cannot be empty")
        if "/" in value or "\\" in value:
            raise ConfigError("Output name must not contain path separators")
        return value

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, value: List[str]) -> List[str]:
        if not value:
            raise ConfigError("At least one desktop category is required")
        for category in value:
            if not category.strip() or ";" in category:
                raise ConfigError(f"Invalid desktop category: {category!r}")
        return value

    @model_validator(mode="after")
    def fill_defaults(self) -> "PackageSpec":
        # Derived defaults depend on app_name, so they are resolved after field validation.
        if self.binary_path is None:
            object.__setattr__(
                self, "binary_path", Path("target") / "release" / self.app_name
            )
        if self.icon_name is None:
            object.__setattr__(self, "icon_name", self.app_name)
        if self.output_name is None:
            object.__setattr__(
                self, "output_name", f"{self.app_name}-{self.arch}.AppImage"
            )
        return self

    @property
    def icon_filename(self) -> str:
        return f"{self.icon_name}.png"

    @property
    def desktop_filename(self) -> str:
        return f"{self.app_name}.desktop"

    class Config:
        frozen = True


class CompressionStrategy(BaseModel):
    name: str = Field(..., description="Label reported when this strategy wins")
    args: List[str] = Field(..., description="Arguments passed to upx before the binary path")

    class Config:
        frozen = True


DEFAULT_COMPRESSION = [
    CompressionStrategy(name="ultra-brute", args=["--ultra-brute"]),
    CompressionStrategy(name="best", args=["--best"]),
]


class BuildConfig(BaseModel):
    tool_name: str = Field(
        default=APPIMAGETOOL_NAME,
        description="File name of the cached packaging tool",
    )

    tool_url: str = Field(
        default=APPIMAGETOOL_URL,
        description="Download location of the packaging tool",
    )

    strip_executable: str = Field(
        default="strip",
        description="Symbol stripping tool",
    )

    upx_executable: str = Field(
        default="upx",
        description="Executable compressor",
    )

    compression: List[CompressionStrategy] = Field(
        default_factory=lambda: list(DEFAULT_COMPRESSION),
        description="Compression strategies, attempted in order until one succeeds",
    )

    image_compression: Literal["xz", "gzip", "zstd"] = Field(
        default="xz",
        description="Codec used by the packaging tool for the image filesystem",
    )

    skip_appstream: bool = Field(
        default=True,
        description="Do not generate or validate appstream metadata",
    )

    extract_and_run: bool = Field(
        default=True,
        description="Set APPIMAGE_EXTRACT_AND_RUN so the image runs without FUSE",
    )

    icon_policy: Literal["placeholder", "require"] = Field(
        default="placeholder",
        description="What to do when the icon asset is missing",
    )

    keep_appdir: bool = Field(
        default=False,
        description="Leave the assembled AppDir in place after packaging",
    )

    @field_validator("tool_name")
    @classmethod
    def validate_tool_name(cls, value: str) -> str:
        if not value or "/" in value:
            raise ConfigError("Tool name must be a plain file name")
        return value

    @field_validator("compression")
    @classmethod
    def validate_compression(
        cls, value: List[CompressionStrategy]
    ) -> List[CompressionStrategy]:
        if not value:
            raise ConfigError("At least one compression strategy is required")
        names = [strategy.name for strategy in value]
        if len(set(names)) != len(names):
            raise ConfigError(
                f"Compression strategy names must be unique: {', '.join(names)}"
            )
        return value

    class Config:
        frozen = True
