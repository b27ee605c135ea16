"""UI template loading and instantiation.

Templates are XML files stored in a bundle as <name>.xml. Each element below
the root describes one view object: the tag names a registered view class,
attributes become keyword arguments, and nested elements are created as
subviews::

    <template>
      <CardView title="Hello">
        <LabelView text="Subtitle" outlet="subtitle_label"/>
      </CardView>
    </template>

Two attributes are reserved: ``class`` gives a dotted import path for the
view class, and ``outlet`` names an owner attribute to bind the view to.
"""

import importlib
import threading
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from ..logging_config import get_logger
from ..core.errors import TemplateLoadError

logger = get_logger("templates")

CLASS_ATTR = "class"
OUTLET_ATTR = "outlet"
RESERVED_ATTRS = (CLASS_ATTR, OUTLET_ATTR)

T = TypeVar("T")


class ViewRegistry:
    """Maps template tags to view classes"""

    def __init__(self):
        self._views: dict[str, type] = {}
        self._lock = threading.Lock()

    def register(self, view_cls: type, name: Optional[str] = None) -> type:
        """Register a view class under its class name (or an explicit tag)."""
        with self._lock:
            self._views[name or view_cls.__name__] = view_cls
        return view_cls

    def view(self, name: Optional[str] = None) -> Callable[[type], type]:
        """Class decorator form of register."""
        def decorator(view_cls: type) -> type:
            return self.register(view_cls, name)
        return decorator

    def unregister(self, name: str) -> None:
        with self._lock:
            self._views.pop(name, None)

    def lookup(self, tag: str, class_path: Optional[str] = None) -> type:
        """Find the view class for a template element.

        Args:
            tag: Element tag
            class_path: Optional dotted path such as "widgets.cards.CardView"

        Returns:
            The view class

        Raises:
            LookupError: If the class cannot be found
        """
        if class_path:
            return _import_class(class_path)

        with self._lock:
            view_cls = self._views.get(tag)
        if view_cls is None:
            raise LookupError(f"No view class registered for <{tag}>")
        return view_cls

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._views


def _import_class(class_path: str) -> type:
    module_path, _, class_name = class_path.rpartition(".")
    if not module_path:
        raise LookupError(f"View class path '{class_path}' is not a dotted path")
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise LookupError(f"Cannot import '{module_path}': {e}")
    view_cls = getattr(module, class_name, None)
    if not isinstance(view_cls, type):
        raise LookupError(f"'{class_path}' is not a class")
    return view_cls


# Registry used when a template is loaded without an explicit one
default_registry = ViewRegistry()


def register_view(view_cls: type) -> type:
    """Register a view class in the default registry (usable as a decorator)."""
    return default_registry.register(view_cls)


class ViewTemplate:
    """A parsed UI template that can be instantiated any number of times"""

    def __init__(self, name: str, path: Path, registry: Optional[ViewRegistry] = None):
        """Parse a template file.

        Args:
            name: Template name (file name without extension)
            path: Path to the XML file
            registry: View registry (defaults to the module-level registry)

        Raises:
            TemplateLoadError: If the file cannot be read or parsed
        """
        self.name = name
        self.path = path
        self.registry = registry if registry is not None else default_registry

        try:
            self._root = ET.parse(path).getroot()
        except (OSError, ET.ParseError) as e:
            raise TemplateLoadError(name, f"Cannot read template '{name}' at {path}: {e}")

    def instantiate(self, owner: Any = None) -> list[Any]:
        """Create the template's top-level objects.

        Args:
            owner: Optional object whose attributes receive outlet bindings

        Returns:
            List of top-level view objects in document order

        Raises:
            TemplateLoadError: If a view class is unknown or fails to construct
        """
        return [self._build(element, owner) for element in self._root]

    def _build(self, element: ET.Element, owner: Any) -> Any:
        try:
            view_cls = self.registry.lookup(element.tag, element.get(CLASS_ATTR))
        except LookupError as e:
            raise TemplateLoadError(self.name, f"Template '{self.name}': {e}")

        kwargs = {key: value for key, value in element.attrib.items() if key not in RESERVED_ATTRS}
        try:
            view = view_cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise TemplateLoadError(
                self.name, f"Template '{self.name}': cannot create {view_cls.__name__}: {e}"
            )

        for child in element:
            subview = self._build(child, owner)
            add_subview = getattr(view, "add_subview", None)
            if callable(add_subview):
                add_subview(subview)
            else:
                logger.debug("%s has no add_subview(), dropping <%s>", view_cls.__name__, child.tag)

        outlet = element.get(OUTLET_ATTR)
        if outlet and owner is not None:
            setattr(owner, outlet, view)

        return view

    def first_object(self, view_cls: type[T], owner: Any = None) -> Optional[T]:
        """Instantiate the template and return its first top-level object.

        Returns:
            The first object if it is an instance of view_cls, otherwise None
        """
        objects = self.instantiate(owner)
        if objects and isinstance(objects[0], view_cls):
            return objects[0]
        return None

    def __repr__(self) -> str:
        return f"ViewTemplate({self.name!r}, {str(self.path)!r})"
