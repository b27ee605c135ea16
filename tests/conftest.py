"""Shared fixtures for module-resources tests.

Fixtures build fake application layouts on disk:

    app/
        Frameworks/<Module>.framework/<Module>.bundle/   (dynamic library)
        <Module>.bundle/                                 (static library)
"""

from pathlib import Path

import pytest
from PIL import Image

from module_resources.core.bundle_cache import BundleCache
from module_resources.loader import set_default_loader


def write_png(path: Path, size: tuple[int, int] = (4, 4), color=(255, 0, 0, 255)) -> Path:
    """Write a small solid-color PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


def make_static_bundle(app_root: Path, module: str) -> Path:
    """Create <app>/<module>.bundle and return its path."""
    bundle = app_root / f"{module}.bundle"
    bundle.mkdir(parents=True, exist_ok=True)
    return bundle


def make_framework_bundle(app_root: Path, module: str, nested: bool = True) -> Path:
    """Create <app>/Frameworks/<module>.framework[/<module>.bundle].

    Returns:
        Path of the nested bundle (or of the framework when nested is False)
    """
    framework = app_root / "Frameworks" / f"{module}.framework"
    framework.mkdir(parents=True, exist_ok=True)
    if not nested:
        return framework
    bundle = framework / f"{module}.bundle"
    bundle.mkdir(parents=True, exist_ok=True)
    return bundle


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """An empty main application bundle directory."""
    root = tmp_path / "App.app"
    root.mkdir()
    return root


@pytest.fixture
def cache(app_root: Path) -> BundleCache:
    return BundleCache(main_bundle_path=app_root)


@pytest.fixture(autouse=True)
def reset_default_loader():
    """Keep the process-wide loader from leaking between tests."""
    set_default_loader(None)
    yield
    set_default_loader(None)
