"""
LanguageRegistry のユニットテスト

ジェネレータの登録・検索・一覧を検証する。
"""

from __future__ import annotations

import pytest

from recgen.languages import (
    LanguageGenerator,
    LanguageRegistry,
    PlaywrightPythonGenerator,
    RobocorpLanguageGenerator,
    create_default_registry,
)


class TestLanguageRegistry:
    """レジストリの登録・検索テスト。"""

    def test_default_registry_lists_generators(self):
        """標準レジストリに robocorp と python が id 順に登録されていること。"""
        registry = create_default_registry()
        assert [info.id for info in registry.list_all()] == ["python", "robocorp"]

    def test_get_returns_registered_generator(self):
        """id で登録済みのジェネレータを取得できること。"""
        registry = create_default_registry()
        assert isinstance(registry.get("robocorp"), RobocorpLanguageGenerator)
        assert isinstance(registry.get("python"), PlaywrightPythonGenerator)

    def test_get_unknown_language(self):
        """未登録の id で KeyError になり、利用可能な id が示されること。"""
        registry = create_default_registry()
        with pytest.raises(KeyError, match="robocorp"):
            registry.get("java")

    def test_has(self):
        """has が登録状況を返すこと。"""
        registry = create_default_registry()
        assert registry.has("python") is True
        assert registry.has("csharp") is False

    def test_duplicate_registration(self):
        """同じ id の二重登録で ValueError になること。"""
        registry = LanguageRegistry()
        registry.register(RobocorpLanguageGenerator())
        with pytest.raises(ValueError):
            registry.register(RobocorpLanguageGenerator())

    def test_register_non_generator(self):
        """Protocol を満たさないオブジェクトの登録で TypeError になること。"""
        registry = LanguageRegistry()
        with pytest.raises(TypeError):
            registry.register(object())  # type: ignore[arg-type]

    def test_generators_satisfy_protocol(self):
        """標準ジェネレータが LanguageGenerator Protocol を満たすこと。"""
        assert isinstance(RobocorpLanguageGenerator(), LanguageGenerator)
        assert isinstance(PlaywrightPythonGenerator(), LanguageGenerator)

    def test_locator_style_passed_to_generators(self):
        """create_default_registry の locator_style が各ジェネレータに渡されること。"""
        from recgen.actions.schema import ActionInContext

        registry = create_default_registry(locator_style="selector")
        action = ActionInContext.model_validate({
            "frame": {"pageAlias": "page", "isMainFrame": True},
            "action": {"name": "check", "selector": "#agree"},
        })
        assert registry.get("python").generate_action(action) == '    page.check("#agree")'
