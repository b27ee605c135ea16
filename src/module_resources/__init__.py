"""module-resources - Resource bundle lookup for modular UI component libraries.

This package provides:
    - Resolution of a module's resource bundle, whether the module ships as a
      dynamic library (Frameworks/<Module>.framework/<Module>.bundle) or is
      merged statically into the application (<Module>.bundle)
    - A thread-safe cache of resolved bundles (failures are never cached)
    - Accessors for images (Pillow / CustomTkinter), XML UI templates and
      localized .strings tables
    - A strict (development) or lenient (production) policy for missing resources

Package Structure:
    loader: ModuleResourceLoader, the accessor facade, and the default loader
    core: Module name derivation, ResourceBundle, BundleCache, errors
    assets: Image and UI template readers
    config: Bundle layout conventions, XML configuration, path validation

Quick Start::

    from module_resources import ModuleResourceLoader, Strictness

    loader = ModuleResourceLoader(strictness=Strictness.STRICT)
    bundle = loader.bundle("Widgets")
    icon = loader.load_image("icon", "Widgets")

Configuration:
    - Config file: ~/.module_resources/configuration.xml
    - Log file: ~/.module_resources/module_resources.log
    - MODULE_RESOURCES_STRICT=1 forces strict mode
"""

__version__ = "1.0.0"
__app_name__ = "module-resources"

from .config.schema import Strictness
from .core import (
    BundleCache,
    MissingResourceBundleError,
    ModuleResourcesError,
    ResourceBundle,
    StringsFormatError,
    TemplateLoadError,
    module_name_for,
    register_module_name,
    resource_module,
)
from .assets.templates import ViewRegistry, ViewTemplate, register_view
from .loader import ModuleResourceLoader, get_default_loader, set_default_loader
from .logging_config import get_logger, setup_logging

__all__ = [
    "Strictness",
    "BundleCache",
    "MissingResourceBundleError",
    "ModuleResourcesError",
    "ResourceBundle",
    "StringsFormatError",
    "TemplateLoadError",
    "module_name_for",
    "register_module_name",
    "resource_module",
    "ViewRegistry",
    "ViewTemplate",
    "register_view",
    "ModuleResourceLoader",
    "get_default_loader",
    "set_default_loader",
    "get_logger",
    "setup_logging",
]
