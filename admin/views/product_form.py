# admin/views/product_form.py
"""
Product dialog form: prefill from a product, resolve measure snapshots for
the active locale and validate before saving.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .measure_form import ValidationError

logger = logging.getLogger(__name__)

# (form attribute, product key, title, short title)
NUTRIENTS: Tuple[Tuple[str, str, str, str], ...] = (
    ("calories", "productCalories", "Calories", "Cal"),
    ("proteins", "productProteins", "Proteins", "Prot"),
    ("fats", "productFats", "Fats", "Fat"),
    ("carbs", "productCarbohydrates", "Carbohydrates", "Carb"),
)


@dataclass
class ProductForm:
    name: str = ""
    calories: str = ""
    calories_measure_id: str = ""
    proteins: str = ""
    proteins_measure_id: str = ""
    fats: str = ""
    fats_measure_id: str = ""
    carbs: str = ""
    carbs_measure_id: str = ""
    weight: str = ""
    weight_measure_id: str = ""
    categories: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_product(cls, product: Dict[str, Any]) -> "ProductForm":
        form = cls(name=str(product.get("productName", "")))
        for attr, key, _, _ in NUTRIENTS:
            nv = product.get(key) or {}
            value = nv.get("nutritionalValue")
            setattr(form, attr, "" if value is None else str(value))
            setattr(form, f"{attr}_measure_id", str((nv.get("measure") or {}).get("id", "")))
        weight = product.get("weight") or {}
        value = weight.get("weightValue")
        form.weight = "" if value is None else str(value)
        form.weight_measure_id = str((weight.get("measure") or {}).get("id", ""))
        form.categories = list(product.get("categories") or []) or [""]
        return form


def measure_for_locale(measure: Dict[str, Any], locale: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Single-locale snapshot of a measure.

    Falls back to the first translation when locale is missing; returns None
    when the measure has no translations at all.
    """
    translations = measure.get("translations") or []
    chosen = next((t for t in translations if t.get("locale") == locale), None)
    if chosen is None and translations:
        chosen = translations[0]
        logger.warning(
            "Measure %s has no '%s' translation, using '%s'",
            measure.get("code"), locale, chosen.get("locale"),
        )
    if chosen is None:
        return None
    return {
        "id": measure.get("id"),
        "code": measure.get("code"),
        "measureName": chosen.get("measureName"),
        "measureShortName": chosen.get("measureShortName"),
    }


def measure_options(measures: List[Dict[str, Any]], locale: Optional[str]) -> Dict[str, str]:
    """Selector labels keyed by measure id, e.g. {'m1': 'GRAM (g)'}."""
    options: Dict[str, str] = {}
    for m in measures:
        translations = m.get("translations") or []
        t = next((t for t in translations if t.get("locale") == locale), None)
        if t is None and translations:
            t = translations[0]
        code = str(m.get("code", ""))
        options[str(m.get("id"))] = f"{code} ({t.get('measureShortName')})" if t else code
    return options


def _parse_number(raw: Any) -> Optional[float]:
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def build_product_payload(
    form: ProductForm,
    measures: List[Dict[str, Any]],
    locale: Optional[str],
    product: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Validate the form and build the request body.

    Args:
        form: Raw dialog input
        measures: Full measures available to the selectors
        locale: Active locale for measure snapshots
        product: The product being edited; None when creating

    Returns:
        A ProductCreateRequest when product is None, otherwise a copy of
        product with the edited fields replaced

    Raises:
        ValidationError: When any field is missing or malformed
    """
    name = (form.name or "").strip()
    if not name:
        raise ValidationError("Product name is required")

    attrs = [a for a, _, _, _ in NUTRIENTS] + ["weight"]
    numbers = {a: _parse_number(getattr(form, a)) for a in attrs}
    if any(v is None for v in numbers.values()):
        raise ValidationError("All nutritional values and weight must be valid numbers")

    measure_ids = {a: (getattr(form, f"{a}_measure_id") or "").strip() for a in attrs}
    if not all(measure_ids.values()):
        raise ValidationError("All measures must be selected")

    by_id = {str(m.get("id")): m for m in measures}
    details = {a: by_id.get(mid) for a, mid in measure_ids.items()}
    if any(d is None for d in details.values()):
        raise ValidationError("Invalid measure selected")

    snapshots = {a: measure_for_locale(d, locale) for a, d in details.items()}
    if any(s is None for s in snapshots.values()):
        raise ValidationError("Failed to get measure translations")

    payload: Dict[str, Any] = copy.deepcopy(product) if product else {}
    payload["productName"] = name
    for attr, key, title, short in NUTRIENTS:
        payload[key] = {
            "title": title,
            "shortTitle": short,
            "nutritionalValue": numbers[attr],
            "measure": snapshots[attr],
        }
    payload["weight"] = {"weightValue": numbers["weight"], "measure": snapshots["weight"]}

    categories = [c.strip() for c in form.categories if c and c.strip()]
    if categories:
        payload["categories"] = categories
    else:
        payload.pop("categories", None)
    return payload
