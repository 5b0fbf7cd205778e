from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppDirLayout:
    root: Path
    app_name: str
    icon_name: str

    @property
    def usr_dir(self) -> Path:
        return self.root / "usr"

    @property
    def bin_dir(self) -> Path:
        return self.usr_dir / "bin"

    @property
    def applications_dir(self) -> Path:
        return self.usr_dir / "share" / "applications"

    @property
    def binary(self) -> Path:
        return self.bin_dir / self.app_name

    @property
    def desktop_file(self) -> Path:
        return self.root / f"{self.app_name}.desktop"

    @property
    def icon_file(self) -> Path:
        return self.root / f"{self.icon_name}.png"

    @property
    def apprun(self) -> Path:
        return self.root / "AppRun"

    def all_dirs(self) -> list[Path]:
        return [
            self.root,
            self.usr_dir,
            self.bin_dir,
            self.applications_dir,
        ]

    def required_files(self) -> list[Path]:
        return [
            self.binary,
            self.desktop_file,
            self.icon_file,
            self.apprun,
        ]
