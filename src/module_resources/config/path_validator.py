"""Path validation utilities for bundle lookups.

Provides validation for names and paths used in bundle resolution to prevent:
- Path traversal out of the main bundle via crafted module names
- Lookups against roots that do not exist
"""

from pathlib import Path, PurePosixPath, PureWindowsPath

from ..logging_config import get_logger

logger = get_logger("path_validator")

# Characters that can never appear in a module or resource name
UNSAFE_NAME_CHARS = ['/', '\\', '\0']


def is_safe_module_name(name: str) -> bool:
    """Check if a module name can be used to build bundle paths.

    Args:
        name: The module name to validate

    Returns:
        True if the name is non-empty and cannot escape its parent directory
    """
    if not name or not name.strip():
        return False

    if any(char in name for char in UNSAFE_NAME_CHARS):
        logger.debug("Module name %r contains a path separator", name)
        return False

    if name in (".", ".."):
        logger.debug("Module name %r contains directory traversal", name)
        return False

    if PurePosixPath(name).is_absolute() or PureWindowsPath(name).is_absolute():
        return False

    return True


def is_path_under_root(path: Path, root: Path) -> bool:
    """Check if a path is under a given root directory.

    Args:
        path: The path to check
        root: The root directory

    Returns:
        True if path is under root, False otherwise
    """
    try:
        path_resolved = path.resolve()
        root_resolved = root.resolve()
        return path_resolved == root_resolved or root_resolved in path_resolved.parents
    except (OSError, ValueError) as e:
        logger.warning("Failed to check path relationship: %s", e)
        return False


def validate_bundle_root(bundle_root: Path) -> tuple[bool, str]:
    """Validate a main bundle root before using it for lookups.

    Args:
        bundle_root: The main bundle directory to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not bundle_root:
        return False, "Bundle root is empty"

    try:
        resolved = bundle_root.resolve()
    except (OSError, ValueError) as e:
        return False, f"Invalid path: {e}"

    if not resolved.exists():
        return False, "Bundle root does not exist"

    if not resolved.is_dir():
        return False, "Bundle root is not a directory"

    return True, ""
