"""Tests for mutation actions: result shape and revalidation."""

from unittest.mock import MagicMock

import pytest

from services.actions import ActionResult, MeasureActions, ProductActions
from services.api import ApiError
from services.revalidation import MEASURES_ROUTE, PRODUCTS_ROUTE, RouteCache

from .conftest import AUTHOR_ID


@pytest.fixture
def cache():
    cache = RouteCache()
    cache.get_or_load(MEASURES_ROUTE, lambda: "measures page")
    cache.get_or_load(PRODUCTS_ROUTE, lambda: "products page")
    return cache


@pytest.fixture
def repo():
    return MagicMock()


class TestMeasureActions:

    def test_create_success(self, repo, cache):
        repo.create.return_value = {"id": "m1", "code": "GRAM"}

        result = MeasureActions(repo, cache).create({"code": "GRAM", "translations": []})

        assert result == ActionResult(success=True, data={"id": "m1", "code": "GRAM"})
        assert cache.peek(MEASURES_ROUTE) is None
        # products page embeds the measure list
        assert cache.peek(PRODUCTS_ROUTE) is None

    def test_api_error_surfaces_message(self, repo, cache):
        repo.update.side_effect = ApiError("Measure not found", 404)

        result = MeasureActions(repo, cache).update("m1", {"translations": []})

        assert result.success is False
        assert result.error == "Measure not found"
        assert result.data is None
        assert cache.peek(MEASURES_ROUTE) == "measures page"

    def test_unexpected_error_uses_fallback(self, repo, cache):
        repo.delete.side_effect = RuntimeError("socket closed")

        result = MeasureActions(repo, cache).delete("m1")

        assert result == ActionResult(
            success=False, error="Failed to delete measure. Please try again."
        )
        assert cache.peek(MEASURES_ROUTE) == "measures page"

    def test_delete_success_has_no_data(self, repo, cache):
        repo.delete.return_value = None

        result = MeasureActions(repo, cache).delete("m1")

        assert result.success is True
        assert result.data is None
        repo.delete.assert_called_once_with("m1")


class TestProductActions:

    def test_create_stamps_configured_author(self, repo, cache, author):
        repo.create.side_effect = lambda payload: {"productId": "p1", **payload}
        request = {"productName": "Milk"}

        result = ProductActions(repo, cache, author=author).create(request)

        assert result.success is True
        assert result.data["author"] == author
        assert "author" not in request
        assert cache.peek(PRODUCTS_ROUTE) is None
        assert cache.peek(MEASURES_ROUTE) == "measures page"

    def test_create_keeps_given_author(self, repo, cache, author):
        given = {"id": AUTHOR_ID, "name": "Someone else"}

        ProductActions(repo, cache, author=author).create({"productName": "Milk", "author": given})

        assert repo.create.call_args.args[0]["author"] == given

    def test_create_without_author_configured(self, repo, cache):
        ProductActions(repo, cache).create({"productName": "Milk"})

        assert "author" not in repo.create.call_args.args[0]

    @pytest.mark.parametrize("verb", ["create", "update", "delete"])
    def test_failures_never_raise(self, repo, cache, verb):
        for method in (repo.create, repo.update, repo.delete):
            method.side_effect = ValueError("bad")
        actions = ProductActions(repo, cache)

        if verb == "create":
            result = actions.create({"productName": "Milk"})
        elif verb == "update":
            result = actions.update("p1", {"productId": "p1"})
        else:
            result = actions.delete("p1")

        assert result.success is False
        assert result.error == f"Failed to {verb} product. Please try again."
