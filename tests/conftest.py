"""Pytest fixtures shared by the console tests."""

from __future__ import annotations

import json
from unittest.mock import MagicMock
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from services.catalog import build_catalog
from services.config_manager import NorthConfig

BASE_URL = "http://north.test/api"
AUTHOR_ID = "3f2b8c1e-7d4a-4e8b-9c6f-1a2b3c4d5e6f"


def make_response(status=200, payload=None, json_error=False):
    """Stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    if json_error:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


class FakeNorthApi:
    """In-memory North API answering requests.Session.request calls."""

    def __init__(self, base_url: str = BASE_URL):
        self.prefix = urlsplit(base_url).path.rstrip("/")
        self.measures = {}
        self.products = {}
        self.calls = []
        self._seq = 0

    def _next_id(self, kind: str) -> str:
        self._seq += 1
        return f"{kind}-{self._seq}"

    def request(self, method, url, headers=None, data=None, timeout=None):
        parts_url = urlsplit(url)
        path = parts_url.path[len(self.prefix):]
        query = {k: v[0] for k, v in parse_qs(parts_url.query).items()}
        body = json.loads(data) if data else None
        self.calls.append((method, path, body))
        parts = [unquote(p) for p in path.split("/") if p]

        if parts[:1] == ["measures"]:
            return self._measures(method, parts[1:], query, body)
        if parts[:1] == ["products"]:
            return self._products(method, parts[1:], body)
        return make_response(404, {"message": "Not found"})

    def _measures(self, method, rest, query, body):
        if not rest:
            if method == "GET":
                items = list(self.measures.values())
                loc = query.get("locale")
                if loc:
                    items = [m for m in items if any(t["locale"] == loc for t in m["translations"])]
                return make_response(200, items)
            if method == "POST":
                if any(m["code"] == body["code"] for m in self.measures.values()):
                    return make_response(409, {"message": f"Measure {body['code']} already exists"})
                measure = {"id": self._next_id("m"), **body}
                self.measures[measure["id"]] = measure
                return make_response(201, measure)
        if rest[:1] == ["by-code"] and method == "GET":
            for m in self.measures.values():
                if m["code"] == rest[1]:
                    return make_response(200, m)
            return make_response(404, {"message": "Measure not found"})
        if len(rest) == 1 and rest[0] in self.measures:
            mid = rest[0]
            if method == "GET":
                return make_response(200, self.measures[mid])
            if method == "PUT":
                self.measures[mid].update(body)
                return make_response(200, self.measures[mid])
            if method == "DELETE":
                del self.measures[mid]
                return make_response(204)
        return make_response(404, {"message": "Measure not found"})

    def _products(self, method, rest, body):
        if not rest:
            if method == "GET":
                return make_response(200, list(self.products.values()))
            if method == "POST":
                product = {"productId": self._next_id("p"), **body}
                self.products[product["productId"]] = product
                return make_response(201, product)
        if rest == ["search"] and method == "POST":
            q = body["query"].lower()
            return make_response(
                200, [p for p in self.products.values() if q in p["productName"].lower()]
            )
        if len(rest) == 1 and rest[0] in self.products:
            pid = rest[0]
            if method == "GET":
                return make_response(200, self.products[pid])
            if method == "PUT":
                self.products[pid] = dict(body)
                return make_response(200, self.products[pid])
            if method == "DELETE":
                del self.products[pid]
                return make_response(204)
        return make_response(404, {"message": "Product not found"})


@pytest.fixture
def config():
    return NorthConfig(base_url=BASE_URL)


@pytest.fixture
def author():
    return {"id": AUTHOR_ID, "name": "Catalog Bot"}


@pytest.fixture
def session():
    """Mocked requests.Session for client tests."""
    return MagicMock()


@pytest.fixture
def north_api():
    return FakeNorthApi()


@pytest.fixture
def catalog(north_api, author):
    """Fully wired console backed by the in-memory API."""
    cfg = NorthConfig(base_url=BASE_URL, author=author)
    return build_catalog(cfg, session=north_api)


def _measure(mid, code, *translations):
    return {
        "id": mid,
        "code": code,
        "translations": [
            {"locale": loc, "measureName": name, "measureShortName": short}
            for loc, name, short in translations
        ],
    }


@pytest.fixture
def measures():
    return [
        _measure("m-kg", "KILOGRAM", ("en", "Kilogram", "kg"), ("ru", "Килограмм", "кг")),
        _measure("m-g", "GRAM", ("en", "Gram", "g"), ("ru", "Грамм", "г")),
        _measure("m-kcal", "KCAL", ("en", "Kilocalorie", "kcal")),
        _measure("m-ml", "MILLILITER", ("ru", "Миллилитр", "мл")),
    ]


def _snapshot(measure, locale="en"):
    t = next(t for t in measure["translations"] if t["locale"] == locale)
    return {
        "id": measure["id"],
        "code": measure["code"],
        "measureName": t["measureName"],
        "measureShortName": t["measureShortName"],
    }


@pytest.fixture
def products(measures):
    kg, g, kcal = measures[0], measures[1], measures[2]

    def product(pid, name, calories, categories=None):
        p = {
            "productId": pid,
            "productName": name,
            "productCalories": {"title": "Calories", "shortTitle": "Cal",
                                "nutritionalValue": calories, "measure": _snapshot(kcal)},
            "productProteins": {"title": "Proteins", "shortTitle": "Prot",
                                "nutritionalValue": 3.2, "measure": _snapshot(g)},
            "productFats": {"title": "Fats", "shortTitle": "Fat",
                            "nutritionalValue": 1.5, "measure": _snapshot(g)},
            "productCarbohydrates": {"title": "Carbohydrates", "shortTitle": "Carb",
                                     "nutritionalValue": 4.8, "measure": _snapshot(g)},
            "weight": {"weightValue": 1.0, "measure": _snapshot(kg)},
            "author": {"id": AUTHOR_ID},
        }
        if categories is not None:
            p["categories"] = categories
        return p

    return [
        product("p-milk", "Milk", 64.0, ["Dairy", "Drinks"]),
        product("p-apple", "apple", 52.0, ["Fruit"]),
        product("p-bread", "Bread", 265.0),
    ]
