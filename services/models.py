"""
Shapes of the North API payloads.

Entities travel through the console as plain JSON dicts; these TypedDicts
document the keys the pages and forms rely on.
"""

from __future__ import annotations
from typing import List, TypedDict


class MeasureTranslation(TypedDict):
    locale: str
    measureName: str
    measureShortName: str


class MeasureDetail(TypedDict):
    id: str
    code: str
    translations: List[MeasureTranslation]


class Measure(TypedDict):
    """Single-locale measure snapshot embedded in products."""
    id: str
    code: str
    measureName: str
    measureShortName: str


class _AuthorBase(TypedDict):
    id: str


class Author(_AuthorBase, total=False):
    name: str
    email: str


class NutritionalValue(TypedDict):
    title: str
    shortTitle: str
    nutritionalValue: float
    measure: Measure


class Weight(TypedDict):
    weightValue: float
    measure: Measure


class _ProductFields(TypedDict):
    productName: str
    productCalories: NutritionalValue
    productProteins: NutritionalValue
    productFats: NutritionalValue
    productCarbohydrates: NutritionalValue
    weight: Weight


class ProductCreateRequest(_ProductFields, total=False):
    author: Author
    categories: List[str]


class Product(ProductCreateRequest):
    productId: str


class ProductSearchRequest(TypedDict):
    query: str
