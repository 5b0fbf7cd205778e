from __future__ import annotations

import logging
from pathlib import Path

import httpx

from appwrap.context import BuildContext
from appwrap.errors import ProvisionError
from appwrap.utils.fs import (
    FilesystemError,
    ensure_dir,
    make_executable,
    remove_file,
    replace_file,
)

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1 << 16


def ensure_tool(
    context: BuildContext,
    *,
    transport: httpx.BaseTransport | None = None,
) -> Path:
    """Return the cached packaging tool, downloading it on first use.

    An existing file is trusted as-is: it is neither re-downloaded nor
    re-validated.
    """

    tool_path = context.tool_path
    if tool_path.exists():
        logger.debug("Using cached packaging tool at %s", tool_path)
        return tool_path

    logger.info("Downloading %s", context.config.tool_name)
    download(context.config.tool_url, tool_path, transport=transport)

    try:
        make_executable(tool_path)
    except FilesystemError as exc:
        raise ProvisionError(str(exc)) from exc

    return tool_path


def download(
    url: str,
    destination: Path,
    *,
    transport: httpx.BaseTransport | None = None,
) -> None:
    partial = destination.with_name(destination.name + ".part")

    try:
        ensure_dir(destination.parent)
        with httpx.Client(
            transport=transport,
            follow_redirects=True,
            timeout=None,
        ) as client:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with partial.open("wb") as f:
                    for chunk in response.iter_bytes(_CHUNK_SIZE):
                        f.write(chunk)
        replace_file(partial, destination)

    except httpx.HTTPStatusError as exc:
        remove_file(partial)
        raise ProvisionError(
            f"Failed to download {url}: HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        remove_file(partial)
        raise ProvisionError(f"Failed to download {url}: {exc}") from exc
    except (OSError, FilesystemError) as exc:
        remove_file(partial)
        raise ProvisionError(
            f"Failed to write downloaded tool to {destination}: {exc}"
        ) from exc
