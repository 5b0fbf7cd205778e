from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from appwrap.errors import AssembleError
from appwrap.utils.fs import copy_file

logger = logging.getLogger(__name__)

PLACEHOLDER_SIZE = (256, 256)
PLACEHOLDER_BACKGROUND = (255, 255, 255, 255)
PLACEHOLDER_FOREGROUND = (0, 0, 0, 255)


def resolve_icon(
    source: Path,
    destination: Path,
    *,
    label: str,
    policy: str = "placeholder",
) -> bool:
    """Copy the icon asset, or synthesize one when it is missing.

    Returns True when the asset was copied and False when a placeholder was
    written.
    """

    if source.is_file():
        copy_file(source, destination)
        return True

    if policy == "require":
        raise AssembleError(f"Icon asset not found: {source}")

    logger.warning("Icon asset %s not found, generating a placeholder", source)
    write_placeholder_icon(destination, label=label)
    return False


def write_placeholder_icon(destination: Path, *, label: str) -> None:
    image = Image.new("RGBA", PLACEHOLDER_SIZE, PLACEHOLDER_BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
    x = (PLACEHOLDER_SIZE[0] - (right - left)) // 2 - left
    y = (PLACEHOLDER_SIZE[1] - (bottom - top)) // 2 - top
    draw.text((x, y), label, fill=PLACEHOLDER_FOREGROUND, font=font)

    try:
        image.save(destination, format="PNG")
    except OSError as exc:
        raise AssembleError(
            f"Failed to write placeholder icon: {destination}"
        ) from exc
