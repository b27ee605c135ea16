"""Image loading from resource bundles"""

from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from PIL import Image

from ..config.paths import BundlePaths
from ..logging_config import get_logger

if TYPE_CHECKING:
    from ..core.bundle import ResourceBundle

logger = get_logger("images")


def find_image_path(
    bundle: "ResourceBundle",
    name: str,
    extensions: Iterable[str] = BundlePaths.IMAGE_EXTENSIONS,
) -> Optional[Path]:
    """Locate an image file inside a bundle.

    A name ending in one of the image extensions is looked up as-is.
    Otherwise each scale variant ("", "@2x", "@3x") is tried with every
    extension in order, so dotted names like "icon.v2" still get a suffix.
    A dotted name with no match is finally tried as a full file name.

    Args:
        bundle: Bundle to search
        name: Image name, e.g. "icon" or "icon.png"
        extensions: Extensions to try when name has none

    Returns:
        Path to the image file, or None if not found
    """
    if not name:
        return None

    extensions = tuple(extension.lstrip(".").lower() for extension in extensions)
    if Path(name).suffix.lstrip(".").lower() in extensions:
        return bundle.path_for_resource(name)

    for scale in BundlePaths.IMAGE_SCALES:
        for extension in extensions:
            path = bundle.path_for_resource(f"{name}{scale}", extension)
            if path is not None:
                return path

    if Path(name).suffix:
        return bundle.path_for_resource(name)
    return None


def load_image(
    bundle: "ResourceBundle",
    name: str,
    extensions: Iterable[str] = BundlePaths.IMAGE_EXTENSIONS,
) -> Optional[Image.Image]:
    """Load an image from a bundle.

    Args:
        bundle: Bundle to load from
        name: Image name
        extensions: Extensions to try when name has none

    Returns:
        Decoded PIL image, or None if the image does not exist

    Raises:
        OSError: If the file exists but cannot be decoded
    """
    path = find_image_path(bundle, name, extensions)
    if path is None:
        logger.debug("Image %s not found in %s", name, bundle.path)
        return None

    with Image.open(path) as image:
        # Decode now; the file is closed on exit
        image.load()
    return image


def to_ctk_image(image: Image.Image, size: tuple[int, int] = (24, 24)):
    """Wrap a PIL image for use in CustomTkinter widgets.

    Args:
        image: Decoded PIL image
        size: Display size in points

    Returns:
        customtkinter.CTkImage using the image for both light and dark modes
    """
    import customtkinter as ctk

    return ctk.CTkImage(light_image=image, dark_image=image, size=size)
