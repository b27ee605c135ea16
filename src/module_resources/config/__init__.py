"""Configuration management module.

This module provides configuration storage, loading, and data models for the loader.

Submodules:
    manager: ConfigurationManager for loading/saving XML configuration
    schema: Data classes defining configuration structure (Strictness, LoaderSettings)
    paths: BundlePaths with bundle layout conventions and config file locations
    path_validator: Name and path validation to keep lookups inside the main bundle

The configuration is stored as XML in ~/.module_resources/configuration.xml
(or $MODULE_RESOURCES_HOME/configuration.xml).
"""

from .manager import ConfigurationManager
from .schema import LoaderConfiguration, LoaderSettings, Strictness
from .paths import BundlePaths

__all__ = [
    "ConfigurationManager",
    "LoaderConfiguration",
    "LoaderSettings",
    "Strictness",
    "BundlePaths",
]
