import os
import shutil
import stat
from pathlib import Path

from appwrap.errors import AppwrapError


class FilesystemError(AppwrapError):
    exit_code = 12


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to create directory: {path}"
        ) from exc


def remove_dir(path: Path) -> None:
    try:
        if path.is_symlink():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to remove directory: {path}"
        ) from exc


def remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except IsADirectoryError:
        remove_dir(path)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to remove file: {path}"
        ) from exc


def copy_file(source: Path, destination: Path) -> None:
    if not source.is_file():
        raise FilesystemError(f"Source file not found: {source}")

    try:
        shutil.copy2(source, destination)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to copy {source} to {destination}"
        ) from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to write file: {path}") from exc


def replace_file(source: Path, destination: Path) -> None:
    try:
        os.replace(source, destination)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to move {source} into place at {destination}"
        ) from exc


def make_executable(path: Path) -> None:
    try:
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise FilesystemError(
            f"Failed to mark file executable: {path}"
        ) from exc


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)
