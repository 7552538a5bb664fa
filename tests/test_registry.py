"""Tests for the generator registry."""

import pytest

from xsdgen.codegen import get_generator, list_supported_languages
from xsdgen.codegen.core.config import GeneratorConfig
from xsdgen.codegen.languages import GoGenerator, RubyGenerator, TypeScriptGenerator
from xsdgen.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_language_info,
    get_registry,
    is_language_supported,
    list_all_language_info,
)


@pytest.fixture
def registry():
    registry = GeneratorRegistry()
    registry.register("go", GoGenerator, aliases=["golang"])
    return registry


class TestRegistration:
    def test_resolve_alias(self, registry):
        assert registry.resolve_language("GoLang") == "go"
        assert registry.get_generator_class("golang") is GoGenerator

    def test_unknown_language(self, registry):
        with pytest.raises(RegistryError, match="No generator registered for language: c"):
            registry.resolve_language("c")

    def test_rejects_non_generators(self, registry):
        with pytest.raises(RegistryError):
            registry.register("text", str)

    def test_alias_conflicts(self, registry):
        registry.register("typescript", TypeScriptGenerator, aliases=["ts"])

        with pytest.raises(RegistryError, match="conflicts with existing primary"):
            registry.register("ruby", RubyGenerator, aliases=["go"])
        with pytest.raises(RegistryError, match="already points to 'typescript'"):
            registry.register("rb", RubyGenerator, aliases=["ts"])

    def test_existing_registration_is_kept(self, registry):
        registry.register("go", TypeScriptGenerator)
        assert registry.get_generator_class("go") is GoGenerator

        registry.register("go", TypeScriptGenerator, replace=True)
        assert registry.get_generator_class("go") is TypeScriptGenerator

    def test_unregister_removes_aliases(self, registry):
        registry.unregister("go")

        assert not registry.is_supported("go")
        assert not registry.is_supported("golang")
        assert registry.list_languages() == []

    def test_list_all_names(self, registry):
        assert registry.list_all_names() == {"go": ["go", "golang"]}


class TestCreateGenerator:
    def test_default_config(self, registry):
        generator = registry.create_generator("golang")

        assert isinstance(generator, GoGenerator)
        assert generator.config.use_tabs is True

    def test_dict_config(self, registry):
        generator = registry.create_generator("go", {"package_name": "ota"})
        assert generator.config.package_name == "ota"

    def test_config_object(self, registry):
        config = GeneratorConfig(package_name="custom")
        assert registry.create_generator("go", config).config is config

    def test_config_file(self, registry, tmp_path):
        path = tmp_path / "go.json"
        path.write_text('{"package_name": "fromfile"}')

        assert registry.create_generator("go", str(path)).config.package_name == "fromfile"

    def test_bad_config(self, registry, tmp_path):
        with pytest.raises(RegistryError, match="Failed to create go generator"):
            registry.create_generator("go", tmp_path / "missing.json")

        with pytest.raises(RegistryError, match="Invalid config type"):
            registry.create_generator("go", 42)


class TestGlobalRegistry:
    def test_builtin_languages(self):
        assert list_supported_languages() == ["go", "java", "ruby", "rust", "typescript"]

    @pytest.mark.parametrize("alias", ["golang", "ts", "rs", "rb", "JAVA"])
    def test_aliases(self, alias):
        assert is_language_supported(alias)

    def test_c_is_not_supported(self):
        assert not is_language_supported("c")

    def test_global_registry_is_shared(self):
        assert get_registry() is get_registry()

    def test_language_info(self):
        info = get_language_info("ts")

        assert info["name"] == "typescript"
        assert info["file_extension"] == ".ts"
        assert info["class"] == "TypeScriptGenerator"
        assert info["aliases"] == ["ts"]
        assert info["module"] == "xsdgen.codegen.languages.typescript.generator"

    def test_all_language_info(self):
        extensions = {
            name: info["file_extension"] for name, info in list_all_language_info().items()
        }
        assert extensions == {
            "go": ".go",
            "java": ".java",
            "ruby": ".rb",
            "rust": ".rs",
            "typescript": ".ts",
        }

    def test_generator_language_matches_registration(self):
        for language in list_supported_languages():
            assert get_generator(language).language_name == language
