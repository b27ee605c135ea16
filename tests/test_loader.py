"""Tests for ModuleResourceLoader strict and lenient behaviour."""

from pathlib import Path
from textwrap import dedent

import pytest
from PIL import Image

from module_resources.assets.templates import ViewRegistry, ViewTemplate
from module_resources.config.manager import ConfigurationManager
from module_resources.config.paths import BundlePaths
from module_resources.config.schema import LoaderConfiguration, LoaderSettings, Strictness
from module_resources.core.errors import MissingResourceBundleError, TemplateLoadError
from module_resources.core.module_name import resource_module
from module_resources.loader import ModuleResourceLoader, get_default_loader, set_default_loader

from conftest import make_framework_bundle, make_static_bundle, write_png


@resource_module("Widgets")
class CardView:
    def __init__(self, title="empty"):
        self.title = title
        self.subviews = []

    def add_subview(self, view):
        self.subviews.append(view)


@resource_module("Widgets")
class BadgeView:
    def __init__(self, text=""):
        self.text = text


@pytest.fixture
def registry() -> ViewRegistry:
    registry = ViewRegistry()
    registry.register(CardView)
    registry.register(BadgeView)
    return registry


@pytest.fixture
def widgets_bundle(app_root) -> Path:
    """Static Widgets.bundle with an image, a template and strings."""
    bundle = make_static_bundle(app_root, "Widgets")
    write_png(bundle / "icon.png", size=(10, 10))
    (bundle / "CardView.xml").write_text(dedent("""
        <template>
          <CardView title="From template">
            <BadgeView text="new"/>
          </CardView>
        </template>
    """), encoding="utf-8")
    (bundle / "Localizable.strings").write_text('"title" = "Widgets";', encoding="utf-8")
    (bundle / "de.lproj").mkdir()
    (bundle / "de.lproj" / "Localizable.strings").write_text('"title" = "Bauteile";', encoding="utf-8")
    return bundle


@pytest.fixture
def lenient(cache, registry) -> ModuleResourceLoader:
    return ModuleResourceLoader(cache=cache, strictness=Strictness.LENIENT, registry=registry)


@pytest.fixture
def strict(cache, registry) -> ModuleResourceLoader:
    return ModuleResourceLoader(cache=cache, strictness=Strictness.STRICT, registry=registry)


class TestResolvedBundle:
    def test_bundle_accessor(self, lenient, widgets_bundle):
        assert lenient.bundle("Widgets").path == widgets_bundle
        assert lenient.bundle(CardView) is lenient.bundle("Widgets")

    def test_load_image(self, strict, widgets_bundle):
        image = strict.load_image("icon", "Widgets")

        assert isinstance(image, Image.Image)
        assert image.size == (10, 10)

    def test_load_image_by_type(self, strict, widgets_bundle):
        assert strict.load_image("icon", CardView) is not None

    def test_missing_image_in_existing_bundle(self, strict, lenient, widgets_bundle):
        assert strict.load_image("nope", "Widgets") is None
        assert lenient.load_image("nope", "Widgets") is None

    def test_load_template(self, strict, widgets_bundle):
        template = strict.load_template("CardView", "Widgets")

        assert isinstance(template, ViewTemplate)
        assert template.path == widgets_bundle / "CardView.xml"

    def test_load_view(self, strict, widgets_bundle):
        view = strict.load_view(CardView)

        assert isinstance(view, CardView)
        assert view.title == "From template"
        assert isinstance(view.subviews[0], BadgeView)

    def test_load_view_with_explicit_name(self, strict, widgets_bundle):
        (widgets_bundle / "FancyCard.xml").write_text(
            '<template><CardView title="Fancy"/></template>', encoding="utf-8"
        )

        assert strict.load_view(CardView, name="FancyCard").title == "Fancy"

    def test_localized_string(self, strict, widgets_bundle):
        assert strict.localized_string("title", "Widgets") == "Widgets"
        assert strict.localized_string("title", "Widgets", language="de") == "Bauteile"
        assert strict.localized_string("missing", "Widgets", language="de") == "missing"
        assert strict.localized_string("missing", CardView, value="Fallback") == "Fallback"

    def test_load_ctk_image(self, strict, widgets_bundle):
        ctk = pytest.importorskip("customtkinter")

        ctk_image = strict.load_ctk_image("icon", "Widgets", size=(32, 32))

        assert isinstance(ctk_image, ctk.CTkImage)
        assert ctk_image.cget("size") == (32, 32)
        assert ctk_image.cget("light_image").size == (10, 10)
        assert ctk_image.cget("dark_image") is ctk_image.cget("light_image")

    def test_framework_bundle_is_used(self, app_root, strict):
        bundle = make_framework_bundle(app_root, "Widgets")
        write_png(bundle / "icon.png", size=(3, 3))

        assert strict.load_image("icon", "Widgets").size == (3, 3)


class TestLenientMode:
    def test_missing_bundle_image_is_none(self, lenient):
        assert lenient.bundle("Widgets") is None
        assert lenient.load_image("icon", "Widgets") is None

    def test_missing_bundle_ctk_image_is_none(self, lenient):
        assert lenient.load_ctk_image("icon", "Widgets") is None

    def test_missing_bundle_string_is_key(self, lenient):
        assert lenient.localized_string("title", "Widgets") == "title"
        assert lenient.localized_string("title", "Widgets", language="de") == "title"

    def test_missing_language_is_key(self, lenient, widgets_bundle):
        assert lenient.localized_string("title", "Widgets", language="fr") == "title"

    def test_missing_bundle_template_is_none(self, lenient):
        assert lenient.load_template("CardView", "Widgets") is None

    def test_missing_template_is_none(self, lenient, widgets_bundle):
        assert lenient.load_template("Nope", "Widgets") is None

    def test_missing_bundle_view_is_fresh_instance(self, lenient):
        view = lenient.load_view(CardView)

        assert isinstance(view, CardView)
        assert view.title == "empty"
        assert view.subviews == []

    def test_wrong_first_object_is_fresh_instance(self, lenient, widgets_bundle):
        view = lenient.load_view(BadgeView, name="CardView")

        assert isinstance(view, BadgeView)
        assert view.text == ""

    def test_corrupt_image_is_none(self, lenient, widgets_bundle, caplog):
        (widgets_bundle / "broken.png").write_bytes(b"garbage")

        assert lenient.load_image("broken", "Widgets") is None
        assert "Could not decode image" in caplog.text

    def test_bundle_outside_main_bundle_is_not_used(self, tmp_path, app_root, cache, lenient):
        write_png(make_static_bundle(tmp_path, "Widgets") / "icon.png")

        assert lenient.cache is cache
        assert lenient.cache.main_bundle_path == app_root
        assert lenient.load_image("icon", "Widgets") is None

    def test_missing_bundle_is_logged(self, lenient, caplog):
        lenient.load_image("icon", "Widgets")

        assert "Widgets" in caplog.text

    def test_bundle_appearing_later_is_used(self, app_root, lenient):
        assert lenient.load_image("icon", "Widgets") is None

        write_png(make_static_bundle(app_root, "Widgets") / "icon.png")

        assert lenient.load_image("icon", "Widgets") is not None


class TestStrictMode:
    def test_missing_bundle_image_raises(self, strict):
        with pytest.raises(MissingResourceBundleError) as excinfo:
            strict.load_image("icon", "Widgets")

        message = str(excinfo.value)
        assert excinfo.value.module_name == "Widgets"
        assert "Widgets.bundle" in message
        assert "Frameworks/Widgets.framework" in message

    def test_missing_bundle_ctk_image_raises(self, strict):
        with pytest.raises(MissingResourceBundleError):
            strict.load_ctk_image("icon", "Widgets")

    def test_missing_bundle_string_raises(self, strict):
        with pytest.raises(MissingResourceBundleError):
            strict.localized_string("title", "Widgets")

    def test_missing_language_raises(self, strict, widgets_bundle):
        with pytest.raises(MissingResourceBundleError, match="fr.lproj"):
            strict.localized_string("title", "Widgets", language="fr")

    def test_missing_bundle_template_raises(self, strict):
        with pytest.raises(MissingResourceBundleError):
            strict.load_template("CardView", "Widgets")

    def test_missing_template_raises(self, strict, widgets_bundle):
        with pytest.raises(TemplateLoadError):
            strict.load_template("Nope", "Widgets")

    def test_missing_bundle_view_raises(self, strict):
        with pytest.raises(TemplateLoadError) as excinfo:
            strict.load_view(CardView)

        assert "CardView" in str(excinfo.value)
        assert "Widgets" in str(excinfo.value)

    def test_wrong_first_object_raises(self, strict, widgets_bundle):
        with pytest.raises(TemplateLoadError, match="not a BadgeView"):
            strict.load_view(BadgeView, name="CardView")

    def test_corrupt_image_raises(self, strict, widgets_bundle):
        (widgets_bundle / "broken.png").write_bytes(b"garbage")

        with pytest.raises(OSError):
            strict.load_image("broken", "Widgets")

    def test_empty_module_name_raises(self, strict):
        with pytest.raises(MissingResourceBundleError, match="<unnamed>"):
            strict.load_image("icon", "")


class TestConfiguration:
    def test_from_configuration(self, app_root):
        config = LoaderConfiguration(settings=LoaderSettings(
            strictness=Strictness.STRICT,
            debug=True,
            main_bundle_path=app_root,
            image_extensions=("jpg",),
        ))

        loader = ModuleResourceLoader.from_configuration(config)

        assert loader.is_strict
        assert loader.cache.main_bundle_path == app_root
        assert loader.cache.debug is True
        assert loader.image_extensions == ("jpg",)

    def test_default_loader_is_shared(self, tmp_path, monkeypatch):
        monkeypatch.setattr(BundlePaths, "CONFIG_FILE", tmp_path / "configuration.xml")
        monkeypatch.delenv("MODULE_RESOURCES_STRICT", raising=False)

        first = get_default_loader()

        assert get_default_loader() is first
        assert first.strictness is Strictness.LENIENT

    def test_default_loader_honours_environment(self, tmp_path, monkeypatch):
        monkeypatch.setattr(BundlePaths, "CONFIG_FILE", tmp_path / "configuration.xml")
        monkeypatch.setenv("MODULE_RESOURCES_STRICT", "1")

        assert get_default_loader().is_strict

    def test_set_default_loader(self, lenient):
        set_default_loader(lenient)

        assert get_default_loader() is lenient

    def test_injected_cache_is_kept(self, cache, registry):
        loader = ModuleResourceLoader(cache=cache, registry=registry)

        assert len(cache) == 0
        assert loader.cache is cache
        assert loader.registry is registry

    def test_default_loader_uses_configured_main_bundle(self, tmp_path, monkeypatch, app_root, widgets_bundle):
        config_file = tmp_path / "configuration.xml"
        monkeypatch.setattr(BundlePaths, "CONFIG_FILE", config_file)
        monkeypatch.delenv("MODULE_RESOURCES_STRICT", raising=False)
        manager = ConfigurationManager(config_file)
        manager.config = LoaderConfiguration(settings=LoaderSettings(
            strictness=Strictness.STRICT,
            debug=True,
            main_bundle_path=app_root,
        ))
        manager.save()

        loader = get_default_loader()

        assert loader.cache.main_bundle_path == app_root
        assert loader.cache.debug is True
        assert loader.load_image("icon", "Widgets").size == (10, 10)
        assert loader.localized_string("title", "Widgets", language="de") == "Bauteile"
