"""Core bundle resolution module.

This module contains the lookup-and-cache logic that maps modules to their
resource bundles.

Submodules:
    module_name: Derive module names from types (or explicit registration)
    bundle: ResourceBundle, a directory of assets with resource lookup
    bundle_cache: BundleCache resolving module names via framework then static layout
    strings_table: Parser for .strings localization tables
    errors: Exceptions raised by accessors in strict mode and by format readers
"""

from .bundle import ResourceBundle
from .bundle_cache import BundleCache
from .errors import (
    MissingResourceBundleError,
    ModuleResourcesError,
    StringsFormatError,
    TemplateLoadError,
)
from .module_name import (
    module_name_for,
    module_name_from_qualified_name,
    register_module_name,
    resource_module,
)

__all__ = [
    "ResourceBundle",
    "BundleCache",
    "MissingResourceBundleError",
    "ModuleResourcesError",
    "StringsFormatError",
    "TemplateLoadError",
    "module_name_for",
    "module_name_from_qualified_name",
    "register_module_name",
    "resource_module",
]
