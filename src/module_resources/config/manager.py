"""Configuration management - load/save XML configuration"""

import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import BundlePaths
from .schema import LoaderConfiguration, LoaderSettings, Strictness
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages loader configuration persistence.

    Handles loading and saving configuration to XML format,
    including environment overrides and default configuration creation.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or BundlePaths.CONFIG_FILE
        self.config: Optional[LoaderConfiguration] = None

    def exists(self) -> bool:
        """Check if a configuration file is present."""
        return self.config_path.exists()

    def load(self) -> LoaderConfiguration:
        """Load configuration from XML file.

        Returns:
            LoaderConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")

        # Use defaults if Settings element is missing
        if settings_elem is not None:
            settings = LoaderSettings(
                strictness=Strictness.parse(self._get_text(settings_elem, "Strictness", "")),
                debug=self._parse_bool(settings_elem, "Debug", False),
                main_bundle_path=self._parse_path(settings_elem, "MainBundlePath"),
                image_extensions=self._parse_list(
                    settings_elem, "ImageExtensions", BundlePaths.IMAGE_EXTENSIONS
                ),
            )
        else:
            settings = LoaderSettings()

        self.config = LoaderConfiguration(settings=settings)
        logger.debug(f"Configuration loaded: strictness={settings.strictness.value}, debug={settings.debug}")
        return self.config

    def load_or_default(self) -> LoaderConfiguration:
        """Load configuration, falling back to defaults when missing or corrupt.

        Environment overrides are applied to the result.

        Returns:
            LoaderConfiguration object
        """
        if self.exists():
            try:
                self.load()
            except (ET.ParseError, OSError, ValueError) as e:
                # Corrupted config = use defaults
                logger.warning(f"Could not load config, using defaults: {e}")
                self.create_default()
        else:
            self.create_default()

        self.apply_environment()
        return self.config

    def apply_environment(self) -> None:
        """Apply environment variable overrides to the loaded configuration."""
        if self.config is None:
            raise ValueError("No configuration loaded")

        strict_value = os.environ.get(BundlePaths.STRICT_ENV)
        if strict_value:
            settings = self.config.settings
            settings.strictness = Strictness.parse(strict_value, default=settings.strictness)
            logger.debug("Strictness overridden from environment: %s", settings.strictness.value)

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        settings = self.config.settings
        root = ET.Element("ModuleResources", version="1.0")

        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "Strictness").text = settings.strictness.value
        ET.SubElement(settings_elem, "Debug").text = str(settings.debug).lower()
        ET.SubElement(settings_elem, "MainBundlePath").text = str(settings.main_bundle_path or "")
        ET.SubElement(settings_elem, "ImageExtensions").text = ",".join(settings.image_extensions)

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self) -> LoaderConfiguration:
        """Create a default configuration.

        Returns:
            New LoaderConfiguration with default values
        """
        self.config = LoaderConfiguration(settings=LoaderSettings())
        return self.config

    # Helper methods for XML parsing
    @staticmethod
    def _get_text(parent: ET.Element, tag: str, default: str = "") -> str:
        """Get text content of a child element."""
        elem = parent.find(tag)
        return elem.text if elem is not None and elem.text else default

    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.strip().lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return BundlePaths.expand_path(elem.text)
        return None

    @staticmethod
    def _parse_list(parent: ET.Element, tag: str, default: tuple[str, ...]) -> tuple[str, ...]:
        """Parse a comma separated list from child element."""
        elem = parent.find(tag)
        if elem is None or not elem.text:
            return default
        items = tuple(item.strip().lstrip(".").lower() for item in elem.text.split(",") if item.strip())
        return items or default
