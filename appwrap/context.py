from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from appwrap.config import BuildConfig, PackageSpec
from appwrap.errors import ConfigError


@dataclass(frozen=True)
class BuildContext:
    """Everything a pipeline stage needs, with all paths resolved up front.

    Relative binary and icon paths from the PackageSpec are resolved against
    ``work_dir``; stages never consult the process working directory.
    """

    spec: PackageSpec
    work_dir: Path
    output_dir: Path
    config: BuildConfig = field(default_factory=BuildConfig)

    def __post_init__(self) -> None:
        # Success cleanup removes staging_dir, so the artifact must live outside it.
        if self.output_dir.is_relative_to(self.staging_dir):
            raise ConfigError(
                f"Output directory {self.output_dir} must not be inside the "
                f"staging directory {self.staging_dir}"
            )

    @classmethod
    def create(
        cls,
        spec: PackageSpec,
        *,
        config: Optional[BuildConfig] = None,
        work_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
    ) -> "BuildContext":
        root = (work_dir or Path.cwd()).resolve()
        return cls(
            spec=spec,
            config=config or BuildConfig(),
            work_dir=root,
            output_dir=(output_dir or root).resolve(),
        )

    @property
    def tool_path(self) -> Path:
        return self.work_dir / self.config.tool_name

    @property
    def staging_dir(self) -> Path:
        return self.work_dir / "AppImage"

    @property
    def appdir(self) -> Path:
        return self.staging_dir / "AppDir"

    @property
    def binary_source(self) -> Path:
        return self._resolve(self.spec.binary_path)

    @property
    def icon_source(self) -> Path:
        return self._resolve(self.spec.icon_path)

    @property
    def artifact_path(self) -> Path:
        return self.output_dir / self.spec.output_name

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.work_dir / path
