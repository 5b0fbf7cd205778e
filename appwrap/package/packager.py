from __future__ import annotations

import logging
import os
from pathlib import Path

from appwrap.appdir.assembler import validate_layout
from appwrap.appdir.layout import AppDirLayout
from appwrap.context import BuildContext
from appwrap.errors import PackageError
from appwrap.utils.fs import ensure_dir, remove_dir
from appwrap.utils.subprocess import SubprocessError, run_command

logger = logging.getLogger(__name__)

EXTRACT_AND_RUN_ENV = "APPIMAGE_EXTRACT_AND_RUN"


def package_appdir(
    context: BuildContext,
    layout: AppDirLayout,
    tool: Path,
) -> Path:
    """Turn an assembled AppDir into the final single-file image."""

    validate_layout(layout)

    config = context.config
    output_path = context.artifact_path
    ensure_dir(output_path.parent)

    if config.extract_and_run:
        os.environ[EXTRACT_AND_RUN_ENV] = "1"

    cmd = [
        str(tool),
        "--comp",
        config.image_compression,
    ]
    if config.skip_appstream:
        cmd.append("--no-appstream")
    cmd.extend([str(layout.root), str(output_path)])

    env = {**os.environ, "ARCH": context.spec.arch}

    logger.info("Packaging %s", output_path.name)
    try:
        run_command(cmd, env=env)
    except SubprocessError as exc:
        raise PackageError(
            f"Failed to create AppImage; AppDir kept at {layout.root}\n{exc}"
        ) from exc

    if not output_path.is_file():
        raise PackageError(
            f"Packaging tool reported success but {output_path} was not created"
        )

    if not config.keep_appdir:
        remove_dir(context.staging_dir)

    return output_path
