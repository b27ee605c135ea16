"""Resource accessors bound to a bundle cache and a strictness policy.

ModuleResourceLoader is the entry point for UI code::

    loader = ModuleResourceLoader(strictness=Strictness.STRICT)
    icon = loader.load_image("icon", "Widgets")
    card = loader.load_view(CardView)
    title = loader.localized_string("settings.title", CardView, language="en")

In strict mode a module whose bundle cannot be found is a packaging error and
raises immediately. In lenient mode every accessor degrades to a safe default
(no image, the unmodified key, a freshly constructed view) and logs a warning.
"""

import threading
from typing import Any, Iterable, Optional, TypeVar

from PIL import Image

from .assets.images import load_image, to_ctk_image
from .assets.templates import ViewRegistry, ViewTemplate, default_registry
from .config.manager import ConfigurationManager
from .config.paths import BundlePaths
from .config.schema import LoaderConfiguration, Strictness
from .core.bundle import ResourceBundle
from .core.bundle_cache import BundleCache, ModuleRef
from .core.errors import MissingResourceBundleError, TemplateLoadError
from .core.module_name import module_name_for
from .logging_config import get_logger

logger = get_logger("loader")

V = TypeVar("V")


class ModuleResourceLoader:
    """Loads images, UI templates and strings from module resource bundles."""

    def __init__(
        self,
        cache: Optional[BundleCache] = None,
        strictness: Strictness = Strictness.LENIENT,
        registry: Optional[ViewRegistry] = None,
        image_extensions: Iterable[str] = BundlePaths.IMAGE_EXTENSIONS,
    ):
        self.cache = cache if cache is not None else BundleCache()
        self.strictness = strictness
        self.registry = registry if registry is not None else default_registry
        self.image_extensions = tuple(image_extensions)

    @classmethod
    def from_configuration(cls, config: LoaderConfiguration) -> "ModuleResourceLoader":
        """Build a loader from persisted settings."""
        settings = config.settings
        cache = BundleCache(main_bundle_path=settings.main_bundle_path, debug=settings.debug)
        return cls(
            cache=cache,
            strictness=settings.strictness,
            image_extensions=settings.image_extensions,
        )

    @property
    def is_strict(self) -> bool:
        return self.strictness is Strictness.STRICT

    def bundle(self, module: ModuleRef) -> Optional[ResourceBundle]:
        """Get a module's resource bundle (None if it cannot be found)."""
        return self.cache.resolve(module)

    def _require_bundle(self, module: ModuleRef, purpose: str) -> Optional[ResourceBundle]:
        bundle = self.cache.resolve(module)
        if bundle is not None:
            return bundle

        module_name = self.cache.module_name(module)
        if self.is_strict:
            raise MissingResourceBundleError(module_name, f"Needed to load {purpose}.")
        logger.warning("Resource bundle for module %r not found, cannot load %s", module_name, purpose)
        return None

    # Images

    def load_image(self, name: str, module: ModuleRef) -> Optional[Image.Image]:
        """Load an image from a module's bundle.

        Args:
            name: Image name, with or without extension
            module: Module name or a type belonging to the module

        Returns:
            Decoded PIL image, or None if missing (or undecodable, in lenient mode)

        Raises:
            MissingResourceBundleError: Bundle missing in strict mode
            OSError: Image cannot be decoded in strict mode
        """
        bundle = self._require_bundle(module, f"image '{name}'")
        if bundle is None:
            return None

        try:
            return load_image(bundle, name, self.image_extensions)
        except (OSError, ValueError) as e:
            if self.is_strict:
                raise
            logger.warning("Could not decode image %s from %s: %s", name, bundle.path, e)
            return None

    def load_ctk_image(self, name: str, module: ModuleRef, size: tuple[int, int] = (24, 24)):
        """Load an image wrapped as a customtkinter.CTkImage.

        Returns:
            CTkImage, or None when load_image() returns None
        """
        image = self.load_image(name, module)
        if image is None:
            return None
        return to_ctk_image(image, size)

    # Templates

    def load_template(self, name: str, module: ModuleRef) -> Optional[ViewTemplate]:
        """Load a UI template from a module's bundle.

        Args:
            name: Template name (XML file name without extension)
            module: Module name or a type belonging to the module

        Returns:
            Parsed ViewTemplate, or None in lenient mode when missing

        Raises:
            MissingResourceBundleError: Bundle missing in strict mode
            TemplateLoadError: Template missing or malformed in strict mode
        """
        bundle = self._require_bundle(module, f"template '{name}'")
        if bundle is None:
            return None

        path = bundle.path_for_resource(name, BundlePaths.TEMPLATE_EXTENSION)
        try:
            if path is None:
                raise TemplateLoadError(
                    name, f"Template '{name}.{BundlePaths.TEMPLATE_EXTENSION}' not found in {bundle.path}"
                )
            return ViewTemplate(name, path, self.registry)
        except TemplateLoadError as e:
            if self.is_strict:
                raise
            logger.warning("%s", e)
            return None

    def load_view(
        self,
        view_cls: type[V],
        module: Optional[ModuleRef] = None,
        name: Optional[str] = None,
        owner: Any = None,
    ) -> V:
        """Instantiate the view described by a template.

        The template is named after the class and looked up in the bundle of
        the class's module unless name or module are given. The first
        top-level object of the template must be an instance of view_cls.

        Args:
            view_cls: Expected view class
            module: Module name or type; defaults to view_cls's module
            name: Template name; defaults to view_cls.__name__
            owner: Optional owner receiving outlet bindings

        Returns:
            The instantiated view; in lenient mode a plain view_cls() on failure

        Raises:
            TemplateLoadError: In strict mode when the view cannot be loaded
        """
        module = module if module is not None else module_name_for(view_cls)
        name = name or view_cls.__name__
        module_name = self.cache.module_name(module)

        try:
            view = self._instantiate_view(view_cls, module, name, owner)
        except (MissingResourceBundleError, TemplateLoadError) as e:
            if self.is_strict:
                raise TemplateLoadError(name, _view_failure_message(name, module_name, str(e)))
            logger.warning("Could not load view %s from module %r: %s", name, module_name, e)
            # Production fallback: an empty view rather than a crash
            return view_cls()
        return view

    def _instantiate_view(self, view_cls: type[V], module: ModuleRef, name: str, owner: Any) -> V:
        bundle = self.cache.resolve(module)
        if bundle is None:
            raise MissingResourceBundleError(self.cache.module_name(module))

        path = bundle.path_for_resource(name, BundlePaths.TEMPLATE_EXTENSION)
        if path is None:
            raise TemplateLoadError(name, f"Template '{name}' not found in {bundle.path}")

        view = ViewTemplate(name, path, self.registry).first_object(view_cls, owner)
        if view is None:
            raise TemplateLoadError(
                name, f"First object of template '{name}' is not a {view_cls.__name__}"
            )
        return view

    # Strings

    def localized_string(
        self,
        key: str,
        module: ModuleRef,
        language: Optional[str] = None,
        table: Optional[str] = None,
        comment: str = "",
        value: Optional[str] = None,
    ) -> str:
        """Look up a localized string in a module's bundle.

        Args:
            key: String key
            module: Module name or a type belonging to the module
            language: Optional language code; reads <language>.lproj
            table: Strings table name (defaults to "Localizable")
            comment: Translator note, not used for lookup
            value: Fallback returned when the key is missing from the table

        Returns:
            The localized string, or key when the bundle is missing in lenient mode

        Raises:
            MissingResourceBundleError: Bundle or localization missing in strict mode
        """
        bundle = self._require_bundle(module, f"string '{key}'")
        if bundle is None:
            return key

        if language:
            localized = bundle.localization_bundle(language)
            if localized is None:
                module_name = self.cache.module_name(module)
                if self.is_strict:
                    raise MissingResourceBundleError(
                        module_name,
                        f"Localization '{language}{BundlePaths.LOCALIZATION_SUFFIX}' is missing from {bundle.path}.",
                    )
                logger.warning("Module %r has no %s localization", module_name, language)
                return key
            bundle = localized

        return bundle.localized_string(key, value=value, table=table)


def _view_failure_message(name: str, module_name: str, reason: str) -> str:
    return "\n".join([
        f"Cannot load {name} from module '{module_name or '<unnamed>'}': {reason}",
        "Check that:",
        "1. The template file name matches the view class name",
        "2. The bundle layout follows the framework or static library convention",
        "3. The template is packaged into the module's bundle",
    ])


_default_loader: Optional[ModuleResourceLoader] = None
_default_lock = threading.Lock()


def get_default_loader() -> ModuleResourceLoader:
    """Get the process-wide loader, creating it from saved configuration.

    Returns:
        The shared ModuleResourceLoader
    """
    global _default_loader
    with _default_lock:
        if _default_loader is None:
            config = ConfigurationManager().load_or_default()
            _default_loader = ModuleResourceLoader.from_configuration(config)
            logger.debug("Created default loader: %r", _default_loader.cache)
        return _default_loader


def set_default_loader(loader: Optional[ModuleResourceLoader]) -> None:
    """Replace (or reset, with None) the process-wide loader."""
    global _default_loader
    with _default_lock:
        _default_loader = loader
