"""Configuration data models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from .paths import BundlePaths


class Strictness(Enum):
    """How accessors react when a module's resources cannot be found"""
    STRICT = "strict"    # Raise with a diagnostic (development)
    LENIENT = "lenient"  # Degrade to a safe default (production)

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["Strictness"] = None) -> "Strictness":
        """Parse a strictness value, accepting common boolean spellings.

        Args:
            value: "strict", "lenient", or a truthy/falsy flag such as "1"
            default: Value returned when the input is empty or unrecognised

        Returns:
            The matching Strictness member
        """
        if default is None:
            default = cls.LENIENT
        normalized = (value or "").strip().lower()
        if normalized in ("strict", "1", "true", "yes", "on", "debug"):
            return cls.STRICT
        if normalized in ("lenient", "0", "false", "no", "off", "release"):
            return cls.LENIENT
        return default


@dataclass
class LoaderSettings:
    """Resource loader settings"""
    strictness: Strictness = Strictness.LENIENT
    debug: bool = False
    main_bundle_path: Optional[Path] = None
    image_extensions: tuple[str, ...] = BundlePaths.IMAGE_EXTENSIONS

    @property
    def is_strict(self) -> bool:
        return self.strictness is Strictness.STRICT


@dataclass
class LoaderConfiguration:
    """Complete persisted configuration"""
    settings: LoaderSettings = field(default_factory=LoaderSettings)
