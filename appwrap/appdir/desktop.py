from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from appwrap.config import PackageSpec


@dataclass(frozen=True)
class DesktopEntry:
    name: str
    exec: str
    icon: str
    type: str = "Application"
    categories: Tuple[str, ...] = ("Utility",)

    @classmethod
    def from_spec(cls, spec: PackageSpec) -> "DesktopEntry":
        return cls(
            name=spec.app_name,
            exec=spec.app_name,
            icon=spec.icon_name,
            categories=tuple(spec.categories),
        )

    def render(self) -> str:
        lines = [
            "[Desktop Entry]",
            f"Name={self.name}",
            f"Exec={self.exec}",
            f"Icon={self.icon}",
            f"Type={self.type}",
            f"Categories={''.join(c + ';' for c in self.categories)}",
        ]
        return "\n".join(lines) + "\n"


def parse_desktop_entry(text: str) -> dict[str, str]:
    """Read the key/value pairs of a ``[Desktop Entry]`` group."""

    values: dict[str, str] = {}
    in_group = False

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("["):
            in_group = line == "[Desktop Entry]"
            continue
        if in_group and "=" in line:
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip()

    return values
