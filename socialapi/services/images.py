"""Storage of uploaded post images on the local filesystem."""

import logging
import shutil
import uuid
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from socialapi.config import get_settings

logger = logging.getLogger(__name__)

IMAGES_URL_PREFIX = "images"


def normalize_image_path(path: str) -> str:
    """Turn Windows separators into forward slashes, all of them."""
    return path.replace("\\", "/")


def images_dir() -> Path:
    """Directory uploaded images are written to."""
    return Path(get_settings().images_dir)


def _safe_name(filename: str | None) -> str:
    name = PurePosixPath(normalize_image_path(filename or "")).name
    return name or "image"


def save_image(fileobj: BinaryIO, filename: str | None) -> str:
    """Write an uploaded image and return its reference, e.g. ``images/<name>``."""
    directory = images_dir()
    directory.mkdir(parents=True, exist_ok=True)

    stored_name = f"{uuid.uuid4().hex}-{_safe_name(filename)}"
    with open(directory / stored_name, "wb") as out:
        shutil.copyfileobj(fileobj, out)

    logger.debug(f"Stored image {stored_name}")
    return normalize_image_path(f"{IMAGES_URL_PREFIX}/{stored_name}")


def clear_image(reference: str | None) -> None:
    """Delete the file behind an image reference.

    Only the basename is used, so a reference can never point outside the
    images directory. Missing files are logged and ignored.
    """
    if not reference:
        return
    target = images_dir() / _safe_name(reference)
    try:
        target.unlink()
        logger.debug(f"Removed image {target.name}")
    except FileNotFoundError:
        logger.warning(f"Image to remove does not exist: {reference}")
    except OSError as e:
        logger.error(f"Failed to remove image {reference}: {e}")
