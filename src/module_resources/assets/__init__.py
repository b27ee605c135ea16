"""Format-specific readers for bundle contents.

Submodules:
    images: find_image_path()/load_image() using Pillow, plus a CTkImage wrapper
    templates: ViewTemplate and ViewRegistry for XML UI templates

Bundle Directory Structure:
    Widgets.bundle/
        icon.png              - Images (optional @2x/@3x variants)
        CardView.xml          - UI templates, one per view class
        Localizable.strings   - Default string table
        en.lproj/
            Localizable.strings  - Language specific string table
"""

from .images import find_image_path, load_image, to_ctk_image
from .templates import ViewRegistry, ViewTemplate, default_registry, register_view

__all__ = [
    "find_image_path",
    "load_image",
    "to_ctk_image",
    "ViewRegistry",
    "ViewTemplate",
    "default_registry",
    "register_view",
]
