"""Derive module names from types"""

import re
from types import ModuleType
from typing import Any, Callable, TypeVar

# Attribute a type or module may set to declare its module name explicitly
MODULE_NAME_ATTR = "__resource_module__"

# Wrapper produced when a type is reflected through an extension context,
# e.g. "(extension in Widgets):Cards.CardView"
_EXTENSION_WRAPPER = re.compile(r"^\(extension in ([^():]*)\)\s*:?\s*")

T = TypeVar("T")


def module_name_from_qualified_name(qualified_name: str) -> str:
    """Extract the module token from a fully-qualified name.

    "Foo.Bar.Baz" -> "Foo", "(extension in Foo):Bar.Baz" -> "Foo".
    Returns an empty string when there is nothing to extract.
    """
    if not qualified_name:
        return ""

    name = qualified_name.strip()
    match = _EXTENSION_WRAPPER.match(name)
    if match:
        name = match.group(1)

    return name.split(".")[0].strip()


def qualified_name_for(type_handle: Any) -> str:
    """Build the module-qualified name of a type, function or module."""
    if isinstance(type_handle, ModuleType):
        return type_handle.__name__

    module = getattr(type_handle, "__module__", None) or ""
    qualname = getattr(type_handle, "__qualname__", None) or getattr(type_handle, "__name__", "")
    if module and qualname:
        return f"{module}.{qualname}"
    return module or qualname


def module_name_for(type_handle: Any) -> str:
    """Get the module name a type belongs to.

    An explicit ``__resource_module__`` declaration wins over the name
    inferred from the type's qualified name.

    Args:
        type_handle: A class, function or module object (not an instance)

    Returns:
        The module name, or an empty string if none can be derived
    """
    declared = getattr(type_handle, MODULE_NAME_ATTR, None)
    if isinstance(declared, str) and declared:
        return declared

    return module_name_from_qualified_name(qualified_name_for(type_handle))


def register_module_name(type_handle: T, name: str) -> T:
    """Declare the module name of a type explicitly.

    Args:
        type_handle: The class or module to tag
        name: The module name its resources are packaged under

    Returns:
        The same type_handle
    """
    if not name:
        raise ValueError("Module name must not be empty")
    setattr(type_handle, MODULE_NAME_ATTR, name)
    return type_handle


def resource_module(name: str) -> Callable[[T], T]:
    """Class decorator form of register_module_name.

    Example::

        @resource_module("Widgets")
        class CardView:
            ...
    """
    def decorator(cls: T) -> T:
        return register_module_name(cls, name)
    return decorator
