# admin/views/measure_form.py
"""Measure dialog form: prefill from a measure and validate before saving."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


class ValidationError(ValueError):
    """Form input rejected before any network call."""
    pass


TRANSLATION_FIELDS = ("locale", "measureName", "measureShortName")


def empty_translation() -> Dict[str, str]:
    return {"locale": "", "measureName": "", "measureShortName": ""}


@dataclass
class MeasureForm:
    code: str = ""
    translations: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_measure(cls, measure: Dict[str, Any]) -> "MeasureForm":
        return cls(
            code=str(measure.get("code", "")),
            translations=[
                {k: str(t.get(k, "")) for k in TRANSLATION_FIELDS}
                for t in measure.get("translations") or []
            ],
        )


def build_measure_payload(form: MeasureForm) -> Dict[str, Any]:
    """
    Validate the form and build the {code, translations} request body.

    Raises:
        ValidationError: On missing code, no translations, incomplete
            translations or duplicate locales
    """
    code = (form.code or "").strip().upper()
    if not code:
        raise ValidationError("Code is required")

    if not form.translations:
        raise ValidationError("At least one translation is required")

    translations = [
        {k: str(t.get(k) or "").strip() for k in TRANSLATION_FIELDS}
        for t in form.translations
    ]
    if any(not all(t.values()) for t in translations):
        raise ValidationError("All translation fields must be filled")

    locales = [t["locale"] for t in translations]
    if len(locales) != len(set(locales)):
        raise ValidationError("Duplicate locales are not allowed")

    return {"code": code, "translations": translations}
