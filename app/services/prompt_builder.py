"""
Prompt assembly for tote artwork.

Looks up country, theme and time-of-day fragments from the static tables in
app.prompts.tote_art.constants and joins them into one positive prompt. The
negative prompt is a fixed denylist. Output depends only on the inputs and
the tables.
"""
from dataclasses import dataclass
from typing import List, Optional

from app.prompts.tote_art.constants import (
    BASE_STYLE,
    COUNTRY_ALIASES,
    COUNTRY_LANDMARKS,
    COUNTRY_MOTIFS,
    DEFAULT_COUNTRY,
    DEFAULT_THEME,
    DEFAULT_TIME_OF_DAY,
    ERA_MEDIUM_LINES,
    GENERIC_THEME_SCENES,
    NEGATIVE_PROMPT,
    PREAMBLE_LINES,
    THEME_ALIASES,
    THEME_STYLES,
    TIME_OF_DAY_ALIASES,
    TIME_OF_DAY_HINTS,
    UNIVERSAL_EXCLUSIONS,
)


@dataclass(frozen=True)
class Prompt:
    prompt: str
    negative_prompt: str


def normalize_key(value: Optional[str], aliases: dict = None) -> str:
    """Lower-case a table key and fold spaces/hyphens to underscores."""
    if not value:
        return ""
    key = "_".join(str(value).strip().lower().replace("-", " ").split())
    if aliases:
        key = aliases.get(key, key)
    return key


def resolve_country(country: Optional[str]) -> str:
    key = normalize_key(country, COUNTRY_ALIASES)
    return key if key in COUNTRY_MOTIFS else DEFAULT_COUNTRY


def resolve_theme(theme: Optional[str]) -> str:
    key = normalize_key(theme, THEME_ALIASES)
    return key if key in THEME_STYLES else DEFAULT_THEME


def resolve_time_of_day(time_of_day: Optional[str]) -> str:
    key = normalize_key(time_of_day, TIME_OF_DAY_ALIASES)
    return key if key in TIME_OF_DAY_HINTS else DEFAULT_TIME_OF_DAY


def build_prompt(
    country: Optional[str],
    theme: Optional[str],
    time_of_day: Optional[str],
    scene: Optional[str] = None,
) -> Prompt:
    """
    Build the positive and negative prompt for one preview.

    Unknown or missing keys fall back to DEFAULT_COUNTRY, DEFAULT_THEME and
    DEFAULT_TIME_OF_DAY. `scene` is an optional landmark/scene fragment placed
    right after the preamble so each slot can show a different view.
    """
    parts: List[str] = list(PREAMBLE_LINES)
    if scene:
        parts.append(scene)
    parts.append(COUNTRY_MOTIFS[resolve_country(country)])
    parts.append(THEME_STYLES[resolve_theme(theme)])
    parts.append(TIME_OF_DAY_HINTS[resolve_time_of_day(time_of_day)])
    parts.extend(ERA_MEDIUM_LINES)
    parts.append(BASE_STYLE)
    parts.extend(UNIVERSAL_EXCLUSIONS)

    return Prompt(prompt=", ".join(parts), negative_prompt=NEGATIVE_PROMPT)


def scene_pool(country: Optional[str], theme: Optional[str]) -> List[str]:
    """
    Scene variants for the preview slots: the country's landmarks when the
    country is known, otherwise the generic scenes for the theme.
    """
    country_key = normalize_key(country, COUNTRY_ALIASES)
    if country_key in COUNTRY_LANDMARKS:
        return list(COUNTRY_LANDMARKS[country_key])

    theme_key = normalize_key(theme, THEME_ALIASES)
    if theme_key in GENERIC_THEME_SCENES:
        return list(GENERIC_THEME_SCENES[theme_key])
    return list(GENERIC_THEME_SCENES[DEFAULT_THEME])
