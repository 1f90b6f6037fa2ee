"""Tests for request context access."""

import logging
from types import SimpleNamespace

import pytest

from guardql.context import (
    PERMISSIONS_CONTEXT_KEY,
    get_granted_permissions,
    get_permissions_context,
    inject_permissions_context,
    is_authenticated,
)
from guardql.core.entities.guard_config import GuardConfig
from guardql.core.services.permissions import (
    PermissionsContext,
    create_permissions_context,
)


class TestGetPermissionsContext:
    """Tests for get_permissions_context."""

    def test_returns_injected_context(self) -> None:
        permissions_context = create_permissions_context(["x"])
        context = {PERMISSIONS_CONTEXT_KEY: permissions_context}

        assert get_permissions_context(context) is permissions_context

    def test_lazily_created_from_dict(self) -> None:
        context = {"granted_permissions": ["x"]}

        permissions_context = get_permissions_context(context)

        assert permissions_context.granted_permissions == frozenset({"x"})
        assert context[PERMISSIONS_CONTEXT_KEY] is permissions_context
        assert get_permissions_context(context) is permissions_context

    def test_lazily_created_on_object(self) -> None:
        context = SimpleNamespace(granted_permissions={"x"})

        permissions_context = get_permissions_context(context)

        assert getattr(context, PERMISSIONS_CONTEXT_KEY) is permissions_context

    def test_nothing_granted(self) -> None:
        assert get_permissions_context({}).granted_permissions is None

    def test_debug_config(self) -> None:
        permissions_context = get_permissions_context({}, GuardConfig(debug=True))

        assert permissions_context.get_error_message(["a"]) == (
            "Missing Permissions: a"
        )

    def test_custom_keys(self) -> None:
        config = GuardConfig(
            permissions_context_key="perms",
            granted_permissions_key="scopes",
        )
        context = {"scopes": ["read"]}

        permissions_context = get_permissions_context(context, config)

        assert context["perms"] is permissions_context
        assert permissions_context.granted_permissions == frozenset({"read"})

    def test_missing_context_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="guardql.context"):
            permissions_context = get_permissions_context(None)

        assert isinstance(permissions_context, PermissionsContext)
        assert "without a request context" in caplog.text
        assert "cannot hold a permissions context" in caplog.text


class TestInjectPermissionsContext:
    """Tests for inject_permissions_context."""

    def test_dict(self) -> None:
        context: dict = {}
        permissions_context = create_permissions_context()

        inject_permissions_context(context, permissions_context)

        assert context[PERMISSIONS_CONTEXT_KEY] is permissions_context

    def test_unsupported_context(self) -> None:
        with pytest.raises(TypeError):
            inject_permissions_context(object(), create_permissions_context())


class TestIsAuthenticated:
    """Tests for is_authenticated."""

    def test_flag(self) -> None:
        assert is_authenticated({"is_authenticated": True}) is True
        assert is_authenticated({"is_authenticated": 0}) is False
        assert is_authenticated({}) is False

    def test_callable(self) -> None:
        assert is_authenticated({"is_authenticated": lambda: True}) is True

    def test_object_context(self) -> None:
        assert is_authenticated(SimpleNamespace(is_authenticated=True)) is True

    @pytest.mark.asyncio
    async def test_async_callable(self) -> None:
        async def check() -> bool:
            return True

        assert await is_authenticated({"is_authenticated": check}) is True


def test_get_granted_permissions() -> None:
    assert get_granted_permissions({"granted_permissions": ["x"]}) == ["x"]
    assert get_granted_permissions({}) is None
