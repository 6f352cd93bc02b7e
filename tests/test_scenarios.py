"""End-to-end flows through the wired console and the in-memory API."""

import pytest

from admin.views.helpers import filter_measures, filter_products
from admin.views.measure_form import MeasureForm, ValidationError, build_measure_payload
from admin.views.product_form import ProductForm, build_product_payload

from .conftest import AUTHOR_ID


def test_created_measure_follows_locale_filter(catalog, north_api):
    payload = build_measure_payload(MeasureForm(
        code="gram",
        translations=[{"locale": "en", "measureName": "Gram", "measureShortName": "g"}],
    ))

    result = catalog.measure_actions.create(payload)

    assert result.success is True
    assert result.data["code"] == "GRAM"

    data = catalog.measures_page()
    assert [m["code"] for m in filter_measures(data.measures, "en")] == ["GRAM"]
    assert filter_measures(data.measures, "ru") == []
    assert data.available_locales == ["en"]


def test_duplicate_code_surfaces_api_message(catalog, north_api):
    body = {"code": "GRAM", "translations": [
        {"locale": "en", "measureName": "Gram", "measureShortName": "g"},
    ]}
    assert catalog.measure_actions.create(body).success

    result = catalog.measure_actions.create(body)

    assert result.success is False
    assert result.error == "Measure GRAM already exists"


def test_measure_change_refreshes_products_page(catalog, north_api, measures):
    for m in measures:
        north_api.measures[m["id"]] = m
    before = catalog.products_page()
    assert len(before.measures) == 4

    assert catalog.measure_actions.delete("m-ml").success

    assert len(catalog.products_page().measures) == 3


def test_validation_failures_never_reach_the_api(catalog, north_api, measures):
    with pytest.raises(ValidationError):
        build_measure_payload(MeasureForm(code="", translations=[]))
    with pytest.raises(ValidationError):
        build_product_payload(ProductForm(name="Milk"), measures, "en")

    assert north_api.calls == []


def test_create_and_edit_product(catalog, north_api, measures):
    for m in measures:
        north_api.measures[m["id"]] = m
    form = ProductForm(
        name="Milk", calories="64", calories_measure_id="m-kcal",
        proteins="3.2", proteins_measure_id="m-g",
        fats="1.5", fats_measure_id="m-g",
        carbs="4.8", carbs_measure_id="m-g",
        weight="1", weight_measure_id="m-kg",
        categories=["Dairy"],
    )

    created = catalog.product_actions.create(build_product_payload(form, measures, "en"))

    assert created.success is True
    product = created.data
    assert product["author"]["id"] == AUTHOR_ID

    form.name = "Whole milk"
    form.categories = [""]
    payload = build_product_payload(form, measures, "en", product=product)
    updated = catalog.product_actions.update(product["productId"], payload)

    assert updated.success is True
    stored = north_api.products[product["productId"]]
    assert stored["productName"] == "Whole milk"
    assert "categories" not in stored
    assert stored["author"]["id"] == AUTHOR_ID

    page = catalog.products_page()
    assert [p["productName"] for p in filter_products(page.products, "whole")] == ["Whole milk"]
