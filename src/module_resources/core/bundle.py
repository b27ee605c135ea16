"""Filesystem-backed resource bundles"""

import threading
from pathlib import Path
from typing import Optional

from ..config.path_validator import is_path_under_root
from ..config.paths import BundlePaths
from ..logging_config import get_logger
from .strings_table import load_strings_file
from .errors import StringsFormatError

logger = get_logger("bundle")


class ResourceBundle:
    """A directory holding a module's non-code assets.

    Bundles are immutable handles: the path never changes after opening.
    Resource lookups probe the bundle root first, then its Resources/
    directory, so both flat and framework-style layouts are supported.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._strings_tables: dict[str, dict[str, str]] = {}
        self._strings_lock = threading.Lock()

    @classmethod
    def open(cls, path: Optional[Path]) -> Optional["ResourceBundle"]:
        """Open a bundle at path.

        Args:
            path: Directory of the bundle

        Returns:
            ResourceBundle if path is an existing directory, None otherwise
        """
        if path is None:
            return None
        try:
            if not Path(path).is_dir():
                return None
        except OSError as e:
            logger.debug("Could not stat bundle %s: %s", path, e)
            return None
        return cls(Path(path))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        """Bundle directory name without its suffix (e.g. "Widgets")."""
        return self._path.stem

    def _search_roots(self) -> list[Path]:
        return [self._path, self._path / BundlePaths.RESOURCES_DIR_NAME]

    def path_for_resource(
        self,
        name: str,
        extension: Optional[str] = None,
        subdirectory: Optional[str] = None,
        localization: Optional[str] = None,
    ) -> Optional[Path]:
        """Locate a resource file or directory inside the bundle.

        Args:
            name: Resource name; the full file name when extension is None
            extension: Optional extension, with or without the leading dot
            subdirectory: Optional directory inside the bundle to search
            localization: Optional language code; <code>.lproj is searched first

        Returns:
            Path to the resource, or None if it does not exist
        """
        if not name:
            return None

        file_name = f"{name}.{extension.lstrip('.')}" if extension else name
        # Relative segments must not lead out of the bundle
        check_containment = ".." in file_name or ".." in (subdirectory or "")

        for root in self._search_roots():
            base = root / subdirectory if subdirectory else root
            candidates = []
            if localization:
                candidates.append(base / f"{localization}{BundlePaths.LOCALIZATION_SUFFIX}" / file_name)
            candidates.append(base / file_name)

            for candidate in candidates:
                try:
                    if not candidate.exists():
                        continue
                    if check_containment and not is_path_under_root(candidate, self._path):
                        logger.warning("Resource %s escapes bundle %s", file_name, self._path)
                        continue
                    return candidate
                except OSError as e:
                    logger.debug("Could not stat %s: %s", candidate, e)
        return None

    def url_for_resource(
        self,
        name: str,
        extension: Optional[str] = None,
        subdirectory: Optional[str] = None,
        localization: Optional[str] = None,
    ) -> Optional[str]:
        """Same as path_for_resource but returns a file:// URI."""
        path = self.path_for_resource(name, extension, subdirectory, localization)
        return path.resolve().as_uri() if path else None

    def localization_bundle(self, language: str) -> Optional["ResourceBundle"]:
        """Open the <language>.lproj bundle nested in this bundle.

        Args:
            language: Language code such as "en" or "zh-Hans"

        Returns:
            ResourceBundle for the localization, or None if missing
        """
        if not language:
            return None
        return ResourceBundle.open(self.path_for_resource(language, BundlePaths.LOCALIZATION_SUFFIX))

    def localized_string(self, key: str, value: Optional[str] = None, table: Optional[str] = None) -> str:
        """Look up a localized string in one of the bundle's .strings tables.

        The table is read from the bundle itself, then from Base.lproj.

        Args:
            key: Key to look up
            value: Fallback returned when the key is missing
            table: Table name without extension (defaults to "Localizable")

        Returns:
            The localized value, the fallback value, or the key itself
        """
        entries = self._strings_table(table or BundlePaths.DEFAULT_STRINGS_TABLE)
        if key in entries:
            return entries[key]
        return value if value else key

    def _strings_table(self, table: str) -> dict[str, str]:
        with self._strings_lock:
            cached = self._strings_tables.get(table)
        if cached is not None:
            return cached

        path = self.path_for_resource(table, BundlePaths.STRINGS_EXTENSION)
        if path is None:
            path = self.path_for_resource(
                table, BundlePaths.STRINGS_EXTENSION, localization=BundlePaths.BASE_LOCALIZATION
            )

        entries: dict[str, str] = {}
        if path is not None:
            try:
                entries = load_strings_file(path)
            except (OSError, StringsFormatError) as e:
                logger.warning("Could not read strings table %s: %s", path, e)

        with self._strings_lock:
            return self._strings_tables.setdefault(table, entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResourceBundle):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"ResourceBundle({str(self._path)!r})"
