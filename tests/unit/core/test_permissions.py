"""Tests for missing-permissions strategies and PermissionsContext."""

import asyncio

import pytest

from guardql.core.services.permissions import (
    PermissionsContext,
    create_permissions_context,
    debug_filter_missing_permissions,
    debug_get_error_message,
    prod_filter_missing_permissions,
    prod_get_error_message,
)

REQUIRED = ["x", "y", "z"]


class TestDebugFilterMissingPermissions:
    """Tests for debug_filter_missing_permissions."""

    def test_returns_all_if_nothing_granted(self) -> None:
        assert debug_filter_missing_permissions(None, REQUIRED) is REQUIRED

    def test_returns_all_missing_in_order(self) -> None:
        assert debug_filter_missing_permissions({"x"}, REQUIRED) == ["y", "z"]
        assert debug_filter_missing_permissions({"y"}, REQUIRED) == ["x", "z"]

    def test_returns_none_if_all_granted(self) -> None:
        assert debug_filter_missing_permissions(set(REQUIRED), REQUIRED) is None
        assert debug_filter_missing_permissions({"w", *REQUIRED}, REQUIRED) is None

    def test_empty_requirement(self) -> None:
        assert debug_filter_missing_permissions(None, []) is None

    def test_tuple_requirement_gives_list(self) -> None:
        assert debug_filter_missing_permissions(None, ("a", "b")) == ["a", "b"]


class TestProdFilterMissingPermissions:
    """Tests for prod_filter_missing_permissions."""

    def test_returns_first_if_nothing_granted(self) -> None:
        assert prod_filter_missing_permissions(None, REQUIRED) == ["x"]

    def test_returns_first_missing(self) -> None:
        assert prod_filter_missing_permissions({"x"}, REQUIRED) == ["y"]
        assert prod_filter_missing_permissions({"x", "y"}, REQUIRED) == ["z"]

    def test_returns_none_if_all_granted(self) -> None:
        assert prod_filter_missing_permissions(set(REQUIRED), REQUIRED) is None

    def test_empty_requirement(self) -> None:
        assert prod_filter_missing_permissions(frozenset(), []) is None


class TestErrorMessages:
    """Tests for error message strategies."""

    def test_debug_is_verbose(self) -> None:
        assert debug_get_error_message(["x", "y"]) == "Missing Permissions: x, y"

    def test_prod_is_terse(self) -> None:
        assert prod_get_error_message() == "Missing Permissions"
        assert prod_get_error_message(["x"]) == "Missing Permissions"


class TestPermissionsContext:
    """Tests for PermissionsContext.check_missing_permissions."""

    def test_granted_requirement(self) -> None:
        ctx = create_permissions_context(REQUIRED, debug=True)

        assert ctx.check_missing_permissions(["x"], "ck1") is None

    def test_cache_returns_same_list(self) -> None:
        ctx = create_permissions_context(REQUIRED, debug=True)

        missing = ctx.check_missing_permissions(["a", "b"], "ck2")
        assert missing == ["a", "b"]

        ctx.check_missing_permissions(["x"], "other")
        assert ctx.check_missing_permissions(["a", "b"], "ck2") is missing

    def test_cache_keeps_none(self) -> None:
        calls = []

        def counting_filter(granted, required):
            calls.append(required)
            return None

        ctx = PermissionsContext(
            granted_permissions=frozenset({"x"}),
            filter_missing_permissions=counting_filter,
        )

        assert ctx.check_missing_permissions(["x"], "ck") is None
        assert ctx.check_missing_permissions(["x"], "ck") is None
        assert len(calls) == 1

    def test_cache_key_wins_over_requirement(self) -> None:
        """The caller chooses cache keys unique per evaluation."""
        ctx = create_permissions_context(None, debug=True)

        first = ctx.check_missing_permissions(["a"], "same")
        assert ctx.check_missing_permissions(["b"], "same") is first

    def test_no_granted_permission(self) -> None:
        ctx = create_permissions_context(None, debug=True)

        assert ctx.check_missing_permissions(["x", "y"], "ck1") == ["x", "y"]

    def test_default_strategies_are_prod(self) -> None:
        ctx = create_permissions_context(None)

        assert ctx.check_missing_permissions(["x", "y"], "ck1") == ["x"]
        assert ctx.get_error_message(["x"]) == "Missing Permissions"

    def test_debug_strategies(self) -> None:
        ctx = create_permissions_context(None, debug=True)

        assert ctx.filter_missing_permissions is debug_filter_missing_permissions
        assert ctx.get_error_message is debug_get_error_message

    def test_custom_strategies(self) -> None:
        ctx = create_permissions_context(
            ["x"],
            filter_missing_permissions=lambda granted, required: ["custom"],
            get_error_message=lambda missing: "nope",
        )

        assert ctx.check_missing_permissions(["x"], "ck") == ["custom"]
        assert ctx.get_error_message(["custom"]) == "nope"

    def test_field_details_do_not_reach_the_filter(self) -> None:
        seen = []
        ctx = create_permissions_context(
            ["x"],
            filter_missing_permissions=lambda *args: seen.append(args),
        )

        ctx.check_missing_permissions(
            ["y"], "ck", source={}, args={"id": 1}, context={}, info=None
        )

        assert seen == [(frozenset({"x"}), ["y"])]

    def test_granted_permissions_are_frozen(self) -> None:
        ctx = create_permissions_context(["x", "x", "y"])

        assert ctx.granted_permissions == frozenset({"x", "y"})

    def test_fresh_contexts_do_not_share_cache(self) -> None:
        first = create_permissions_context(None, debug=True)
        second = create_permissions_context(["a"], debug=True)

        assert first.check_missing_permissions(["a"], "ck") == ["a"]
        assert second.check_missing_permissions(["a"], "ck") is None


class TestAsyncFilter:
    """Tests for deferred filter strategies."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_one_computation(self) -> None:
        calls = []

        async def slow_filter(granted, required):
            calls.append(required)
            await asyncio.sleep(0.01)
            return ["x"]

        ctx = create_permissions_context(None, filter_missing_permissions=slow_filter)

        results = await asyncio.gather(
            ctx.check_missing_permissions(["x"], "ck"),
            ctx.check_missing_permissions(["x"], "ck"),
            ctx.check_missing_permissions(["x"], "ck"),
        )

        assert len(calls) == 1
        assert results[0] is results[1] is results[2]
        # Completed value is returned synchronously afterwards
        assert ctx.check_missing_permissions(["x"], "ck") is results[0]

    @pytest.mark.asyncio
    async def test_failed_computation_is_not_cached(self) -> None:
        attempts = []

        async def flaky_filter(granted, required):
            attempts.append(required)
            if len(attempts) == 1:
                raise RuntimeError("permission source down")
            return None

        ctx = create_permissions_context(None, filter_missing_permissions=flaky_filter)

        with pytest.raises(RuntimeError):
            await ctx.check_missing_permissions(["x"], "ck")

        assert "ck" not in ctx.cache
        assert await ctx.check_missing_permissions(["x"], "ck") is None
        assert len(attempts) == 2
