"""Default paths and bundle layout conventions"""

import os
import sys
from pathlib import Path
from typing import Optional


class BundlePaths:
    """Default paths and naming conventions for resource bundles.

    All paths use environment variable expansion for portability.
    """

    # Bundle layout conventions
    FRAMEWORKS_DIR_NAME = "Frameworks"
    FRAMEWORK_SUFFIX = ".framework"
    BUNDLE_SUFFIX = ".bundle"
    LOCALIZATION_SUFFIX = ".lproj"
    RESOURCES_DIR_NAME = "Resources"
    BASE_LOCALIZATION = "Base"
    DEFAULT_STRINGS_TABLE = "Localizable"
    STRINGS_EXTENSION = "strings"
    TEMPLATE_EXTENSION = "xml"
    IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif", "webp")
    IMAGE_SCALES = ("", "@2x", "@3x")

    # Environment overrides
    HOME_ENV = "MODULE_RESOURCES_HOME"
    MAIN_BUNDLE_ENV = "MODULE_RESOURCES_MAIN_BUNDLE"
    STRICT_ENV = "MODULE_RESOURCES_STRICT"

    # Configuration file location
    CONFIG_DIR = Path(os.path.expandvars(os.environ.get(HOME_ENV, "~/.module_resources"))).expanduser()
    CONFIG_FILE = CONFIG_DIR / "configuration.xml"
    LOG_FILE = CONFIG_DIR / "module_resources.log"

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and ~ in path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expandvars(path_str.strip())).expanduser()

    @classmethod
    def main_bundle_path(cls, override: Optional[Path] = None) -> Path:
        """Get the root directory of the running application's main bundle.

        Resolution order: explicit override, MODULE_RESOURCES_MAIN_BUNDLE,
        the PyInstaller extraction directory when frozen, the directory of the
        __main__ script, and finally the current working directory.

        Args:
            override: Optional explicit main bundle path

        Returns:
            Absolute path to the main bundle directory
        """
        if override is not None:
            return Path(override)

        env_value = os.environ.get(cls.MAIN_BUNDLE_ENV)
        if env_value:
            return cls.expand_path(env_value)

        if getattr(sys, 'frozen', False):
            # Running as compiled executable (PyInstaller)
            meipass = getattr(sys, '_MEIPASS', None)
            if meipass:
                return Path(meipass)
            return Path(sys.executable).resolve().parent

        main_module = sys.modules.get("__main__")
        main_file = getattr(main_module, "__file__", None)
        if main_file:
            return Path(main_file).resolve().parent

        return Path.cwd()
