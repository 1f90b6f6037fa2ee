"""Unit tests for GuardedGraphQLHTTPHandler."""

from unittest.mock import AsyncMock, MagicMock

import pytest

ariadne = pytest.importorskip("ariadne")

from guardql.adapters.ariadne.handler import GuardedGraphQLHTTPHandler  # noqa: E402
from guardql.context import PERMISSIONS_CONTEXT_KEY  # noqa: E402
from guardql.core.entities.guard_config import GuardConfig  # noqa: E402
from guardql.core.services.permissions import PermissionsContext  # noqa: E402


def _make_handler(context_value=None, **kwargs) -> GuardedGraphQLHTTPHandler:
    """Create a handler as GraphQL.configure would leave it."""
    handler = GuardedGraphQLHTTPHandler(**kwargs)
    handler.context_value = context_value
    return handler


class TestGetContextForRequest:
    @pytest.mark.asyncio
    async def test_default_context(self):
        handler = _make_handler()
        request = MagicMock()

        context = await handler.get_context_for_request(request, {})

        assert context["request"] is request
        assert isinstance(context[PERMISSIONS_CONTEXT_KEY], PermissionsContext)
        assert context[PERMISSIONS_CONTEXT_KEY].granted_permissions is None

    @pytest.mark.asyncio
    async def test_granted_permissions_callback(self):
        callback = MagicMock(return_value=["read"])
        handler = _make_handler(granted_permissions=callback)
        request = MagicMock()

        context = await handler.get_context_for_request(request, {})

        callback.assert_called_once_with(request, context)
        permissions_context = context[PERMISSIONS_CONTEXT_KEY]
        assert permissions_context.granted_permissions == frozenset({"read"})

    @pytest.mark.asyncio
    async def test_async_callbacks(self):
        handler = _make_handler(
            granted_permissions=AsyncMock(return_value={"a", "b"}),
            is_authenticated=AsyncMock(return_value=1),
        )

        context = await handler.get_context_for_request(MagicMock(), {})

        permissions_context = context[PERMISSIONS_CONTEXT_KEY]
        assert permissions_context.granted_permissions == frozenset({"a", "b"})
        assert context["is_authenticated"] is True

    @pytest.mark.asyncio
    async def test_granted_permissions_from_context_value(self):
        def context_value(request, data):
            return {"request": request, "granted_permissions": ["x"]}

        handler = _make_handler(context_value=context_value)

        context = await handler.get_context_for_request(MagicMock(), {})

        permissions_context = context[PERMISSIONS_CONTEXT_KEY]
        assert permissions_context.granted_permissions == frozenset({"x"})

    @pytest.mark.asyncio
    async def test_static_context_is_copied(self):
        static = {"granted_permissions": ["x"]}
        handler = _make_handler(context_value=static)

        first = await handler.get_context_for_request(MagicMock(), {})
        second = await handler.get_context_for_request(MagicMock(), {})

        assert PERMISSIONS_CONTEXT_KEY not in static
        assert first is not static
        assert first[PERMISSIONS_CONTEXT_KEY] is not second[PERMISSIONS_CONTEXT_KEY]

    @pytest.mark.asyncio
    async def test_fresh_cache_per_request(self):
        handler = _make_handler(granted_permissions=lambda request, context: [])

        first = await handler.get_context_for_request(MagicMock(), {})
        second = await handler.get_context_for_request(MagicMock(), {})

        assert (
            first[PERMISSIONS_CONTEXT_KEY].cache
            is not second[PERMISSIONS_CONTEXT_KEY].cache
        )

    @pytest.mark.asyncio
    async def test_custom_context_key(self):
        config = GuardConfig(permissions_context_key="perms", debug=True)
        handler = _make_handler(config=config)

        context = await handler.get_context_for_request(MagicMock(), {})

        assert PERMISSIONS_CONTEXT_KEY not in context
        assert context["perms"].get_error_message(["a", "b"]) == (
            "Missing Permissions: a, b"
        )

    @pytest.mark.asyncio
    async def test_debug_logging(self, capsys):
        handler = _make_handler(
            granted_permissions=lambda request, context: ["b", "a"],
            debug=True,
        )

        await handler.get_context_for_request(MagicMock(), {})

        assert "[GUARD] Granted: ['a', 'b']" in capsys.readouterr().out


class TestCreatePermissionsContext:
    def test_override(self):
        class CustomHandler(GuardedGraphQLHTTPHandler):
            def create_permissions_context(self, granted):
                context = super().create_permissions_context(granted)
                context.get_error_message = lambda missing: "Nope"
                return context

        handler = CustomHandler()

        permissions_context = handler.create_permissions_context(["x"])

        assert permissions_context.get_error_message(["y"]) == "Nope"
