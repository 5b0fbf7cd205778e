from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from appwrap.appdir.desktop import DesktopEntry, parse_desktop_entry
from appwrap.appdir.icon import resolve_icon
from appwrap.appdir.launcher import render_apprun
from appwrap.appdir.layout import AppDirLayout
from appwrap.context import BuildContext
from appwrap.errors import AssembleError
from appwrap.optimize.binary import OptimizeStats, optimize_binary
from appwrap.utils.fs import (
    FilesystemError,
    copy_file,
    ensure_dir,
    is_executable,
    make_executable,
    remove_dir,
    remove_file,
    write_text,
)

logger = logging.getLogger(__name__)

Optimizer = Callable[[Path], OptimizeStats]


def assemble_appdir(
    context: BuildContext,
    *,
    optimizer: Optional[Optimizer] = None,
) -> AppDirLayout:

    spec = context.spec
    layout = AppDirLayout(
        root=context.appdir,
        app_name=spec.app_name,
        icon_name=spec.icon_name,
    )
    optimize = optimizer or _default_optimizer(context)

    try:
        reset_workspace(context)

        for directory in layout.all_dirs():
            ensure_dir(directory)

        _assemble_binary(context.binary_source, layout, optimize)

        write_text(layout.desktop_file, DesktopEntry.from_spec(spec).render())

        resolve_icon(
            context.icon_source,
            layout.icon_file,
            label=spec.app_name,
            policy=context.config.icon_policy,
        )

        write_text(layout.apprun, render_apprun(spec))
        make_executable(layout.apprun)

    except FilesystemError as exc:
        raise AssembleError(f"Failed to assemble AppDir: {exc}") from exc

    validate_layout(layout)
    logger.info("Assembled AppDir at %s", layout.root)
    return layout


def reset_workspace(context: BuildContext) -> None:
    remove_dir(context.staging_dir)
    remove_file(context.artifact_path)


def validate_layout(layout: AppDirLayout) -> None:
    for path in layout.required_files():
        if not path.is_file():
            raise AssembleError(f"AppDir layout incomplete, missing: {path}")

    entry = parse_desktop_entry(layout.desktop_file.read_text(encoding="utf-8"))
    icon = entry.get("Icon")
    if not icon or not (layout.root / f"{icon}.png").is_file():
        raise AssembleError(
            f"Desktop entry icon {icon!r} does not resolve inside {layout.root}"
        )
    if not (layout.bin_dir / entry.get("Exec", "")).is_file():
        raise AssembleError(
            f"Desktop entry Exec {entry.get('Exec')!r} is not in {layout.bin_dir}"
        )

    if not is_executable(layout.apprun):
        raise AssembleError(f"AppRun is not executable: {layout.apprun}")


def _assemble_binary(
    source: Path,
    layout: AppDirLayout,
    optimize: Optimizer,
) -> None:
    if not source.is_file():
        raise AssembleError(f"Application binary not found: {source}")

    copy_file(source, layout.binary)
    make_executable(layout.binary)
    optimize(layout.binary)


def _default_optimizer(context: BuildContext) -> Optimizer:
    config = context.config

    def optimize(binary: Path) -> OptimizeStats:
        return optimize_binary(
            binary,
            strip=config.strip_executable,
            upx=config.upx_executable,
            strategies=config.compression,
        )

    return optimize
