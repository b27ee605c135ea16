"""Resolve module names to resource bundles, with memoization.

Resolution order (first match wins):
1. Cache hit
2. Dynamic library: <main>/Frameworks/<Module>.framework/<Module>.bundle
3. Static library: <main>/<Module>.bundle

Only successful resolutions are cached. A miss is retried in full on the
next call, since bundles may not be in place yet early in an app's life.
"""

import threading
from pathlib import Path
from typing import Any, Optional, Union

from ..config.path_validator import is_safe_module_name, validate_bundle_root
from ..config.paths import BundlePaths
from ..logging_config import get_logger
from .bundle import ResourceBundle
from .errors import missing_bundle_checklist
from .module_name import module_name_for

logger = get_logger("bundle_cache")

STRATEGY_CACHE = "cache"
STRATEGY_FRAMEWORK = "framework"
STRATEGY_STATIC = "static"

ModuleRef = Union[str, type, Any]


class BundleCache:
    """Thread-safe cache of resolved resource bundles.

    One instance is normally shared by everything that loads resources in a
    process; see module_resources.loader.get_default_loader().
    """

    def __init__(
        self,
        main_bundle_path: Optional[Path] = None,
        frameworks_dir_name: str = BundlePaths.FRAMEWORKS_DIR_NAME,
        framework_suffix: str = BundlePaths.FRAMEWORK_SUFFIX,
        bundle_suffix: str = BundlePaths.BUNDLE_SUFFIX,
        debug: bool = False,
    ):
        """Initialize the cache.

        Args:
            main_bundle_path: Root of the application's main bundle.
                Defaults to BundlePaths.main_bundle_path().
            frameworks_dir_name: Directory holding dynamic library frameworks
            framework_suffix: Suffix of framework directories
            bundle_suffix: Suffix of resource bundle directories
            debug: Log a diagnostic for every failed resolution
        """
        self.main_bundle_path = BundlePaths.main_bundle_path(main_bundle_path)
        self.frameworks_dir_name = frameworks_dir_name
        self.framework_suffix = framework_suffix
        self.bundle_suffix = bundle_suffix
        self.debug = debug

        self._bundles: dict[str, ResourceBundle] = {}
        self._lock = threading.Lock()

    def resolve(self, module: ModuleRef) -> Optional[ResourceBundle]:
        """Get the resource bundle of a module.

        Args:
            module: Module name, or a type whose module name is derived

        Returns:
            The cached or newly resolved ResourceBundle, or None if missing
        """
        bundle, _strategy = self.resolve_with_strategy(module)
        return bundle

    def resolve_with_strategy(self, module: ModuleRef) -> tuple[Optional[ResourceBundle], Optional[str]]:
        """Resolve a module and report how it was resolved.

        Returns:
            Tuple of (ResourceBundle or None, strategy)
            strategy is one of: cache, framework, static, or None on a miss
        """
        module_name = self.module_name(module)

        with self._lock:
            cached = self._bundles.get(module_name)
        if cached is not None:
            return cached, STRATEGY_CACHE

        bundle, strategy = self._find_bundle(module_name)

        if bundle is None:
            if self.debug:
                root_ok, reason = validate_bundle_root(self.main_bundle_path)
                if not root_ok:
                    logger.warning("Main bundle %s is unusable: %s", self.main_bundle_path, reason)
                logger.warning(
                    "No resource bundle found for module %r under %s, checked:\n%s",
                    module_name,
                    self.main_bundle_path,
                    "\n".join(missing_bundle_checklist(module_name)),
                )
            return None, None

        with self._lock:
            # Another thread may have resolved the same module meanwhile
            existing = self._bundles.setdefault(module_name, bundle)
        if existing is not bundle:
            return existing, STRATEGY_CACHE

        logger.debug(f"[bundle:resolve] {module_name} -> {strategy} ({bundle.path})")
        return bundle, strategy

    def find_bundle(self, module_name: str) -> Optional[ResourceBundle]:
        """Locate a module's bundle on disk without touching the cache."""
        bundle, _strategy = self._find_bundle(module_name)
        return bundle

    def _find_bundle(self, module_name: str) -> tuple[Optional[ResourceBundle], Optional[str]]:
        if not is_safe_module_name(module_name):
            logger.debug("Refusing to resolve unusable module name %r", module_name)
            return None, None

        bundle = self.framework_bundle(module_name)
        if bundle is not None:
            return bundle, STRATEGY_FRAMEWORK

        bundle = self.static_library_bundle(module_name)
        if bundle is not None:
            return bundle, STRATEGY_STATIC

        return None, None

    def framework_bundle(self, module_name: str) -> Optional[ResourceBundle]:
        """Find the resource bundle nested in a dynamic library framework.

        Args:
            module_name: Module identifier

        Returns:
            ResourceBundle if <Module>.framework contains <Module>.bundle
        """
        main_bundle = ResourceBundle.open(self.main_bundle_path)
        if main_bundle is None:
            return None

        frameworks_dir = main_bundle.path_for_resource(self.frameworks_dir_name)
        if frameworks_dir is None:
            return None

        framework = ResourceBundle.open(frameworks_dir / f"{module_name}{self.framework_suffix}")
        if framework is None:
            return None

        return ResourceBundle.open(framework.path_for_resource(module_name, self.bundle_suffix))

    def static_library_bundle(self, module_name: str) -> Optional[ResourceBundle]:
        """Find a resource bundle merged into the main bundle by a static library.

        Args:
            module_name: Module identifier

        Returns:
            ResourceBundle if <main>/<Module>.bundle exists
        """
        main_bundle = ResourceBundle.open(self.main_bundle_path)
        if main_bundle is None:
            return None

        return ResourceBundle.open(main_bundle.path_for_resource(f"{module_name}{self.bundle_suffix}"))

    @staticmethod
    def module_name(module: ModuleRef) -> str:
        """Normalize a module reference to its name."""
        if isinstance(module, str):
            return module
        return module_name_for(module)

    def is_cached(self, module_name: str) -> bool:
        with self._lock:
            return module_name in self._bundles

    def clear(self) -> None:
        """Drop every cached bundle."""
        with self._lock:
            self._bundles.clear()

    def __contains__(self, module_name: object) -> bool:
        return isinstance(module_name, str) and self.is_cached(module_name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bundles)

    def __repr__(self) -> str:
        return f"BundleCache(main={str(self.main_bundle_path)!r}, cached={len(self)})"
