"""Exceptions raised by the resource loader.

A bundle that cannot be found is never an exception by itself; resolution
returns None. These errors are raised by accessors running in strict mode
and by the format readers.
"""

from typing import Optional

from ..config.paths import BundlePaths


class ModuleResourcesError(Exception):
    """Base class for all module-resources errors"""


class MissingResourceBundleError(ModuleResourcesError):
    """A module's resource bundle could not be resolved in strict mode"""

    def __init__(self, module_name: str, detail: Optional[str] = None):
        self.module_name = module_name
        self.detail = detail
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        module = self.module_name or "<unnamed>"
        lines = [f"Resource bundle for module '{module}' is not configured correctly"]
        if self.detail:
            lines.append(self.detail)
        lines.extend(missing_bundle_checklist(module))
        return "\n".join(lines)


class TemplateLoadError(ModuleResourcesError):
    """A UI template could not be loaded or instantiated"""

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        super().__init__(message)


class StringsFormatError(ModuleResourcesError):
    """A .strings table could not be parsed"""

    def __init__(self, message: str, line: int = 0):
        self.line = line
        super().__init__(f"{message} (line {line})" if line else message)


def missing_bundle_checklist(module_name: str) -> list[str]:
    """Describe the two bundle layouts checked for a module.

    Args:
        module_name: The module whose bundle was not found

    Returns:
        Human readable lines, one per layout
    """
    bundle = f"{module_name}{BundlePaths.BUNDLE_SUFFIX}"
    framework = f"{module_name}{BundlePaths.FRAMEWORK_SUFFIX}"
    return [
        f"1. Static library: is {bundle} placed at the root of the main bundle?",
        f"2. Dynamic library: does {BundlePaths.FRAMEWORKS_DIR_NAME}/{framework} contain {bundle}?",
    ]
