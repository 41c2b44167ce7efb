from __future__ import annotations

"""Load localized message templates from ``messages.yaml``."""

from importlib import resources
from typing import Dict, Union

import yaml
from jinja2 import Template

from .logic import MIN_DAILY_KCAL
from .schema import NonPositiveInput, PlanResult, UnsafeTargetLoss

DEFAULT_LANGUAGE = "ja"


def _load_messages() -> dict:
    """Return dictionary of message definitions from YAML."""
    with resources.files(__package__).joinpath("messages.yaml").open(
        "r", encoding="utf-8"
    ) as fh:
        return yaml.safe_load(fh)


_data = _load_messages()

LANGUAGES = tuple(_data)
TEMPLATES: Dict[str, Dict[str, Template]] = {
    lang: {
        "unsafe_target_loss": Template(info["unsafe_target_loss"]),
        "result": Template(info["result"]),
        "default_hint": Template(info["default_hint"]),
    }
    for lang, info in _data.items()
}


def _lang(language: str | None) -> str:
    return language if language in _data else DEFAULT_LANGUAGE


def _kg(value: float) -> str:
    """Format a weight without a trailing ``.0``."""
    return f"{value:g}"


def text(key: str, language: str | None = None) -> str:
    """Return a plain message such as ``welcome`` or ``retry``."""
    return _data[_lang(language)][key]


def question(field: str, language: str | None = None) -> str:
    return _data[_lang(language)]["questions"][field]


def default_hint(value: object, language: str | None = None) -> str:
    return TEMPLATES[_lang(language)]["default_hint"].render(value=value)


def activity_label(key: str, language: str | None = None) -> str:
    return _data[_lang(language)]["activity_levels"][key]


def sex_label(sex: str, language: str | None = None) -> str:
    return _data[_lang(language)]["sex"][sex]


def render_failure(
    failure: Union[NonPositiveInput, UnsafeTargetLoss], language: str | None = None
) -> str:
    """Return the message shown instead of results for a rejected request."""
    lang = _lang(language)
    if isinstance(failure, UnsafeTargetLoss):
        return TEMPLATES[lang]["unsafe_target_loss"].render(limit_kg=failure.limit_kg)
    return _data[lang]["non_positive_input"]


def render_result(result: PlanResult, language: str | None = None) -> str:
    """Return the results panel for a computed plan."""
    return TEMPLATES[_lang(language)]["result"].render(
        r=result,
        loss=_kg(result.target_loss_kg),
        floor=MIN_DAILY_KCAL,
    )
