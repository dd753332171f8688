import itertools

from app.prompts.tote_art.constants import (
    COUNTRY_LANDMARKS,
    COUNTRY_MOTIFS,
    DEFAULT_COUNTRY,
    GENERIC_THEME_SCENES,
    NEGATIVE_PROMPT,
    THEME_STYLES,
    TIME_OF_DAY_HINTS,
)
from app.services.prompt_builder import build_prompt, normalize_key, scene_pool


def test_build_prompt_is_deterministic_for_every_combination():
    for country, theme, time_of_day in itertools.product(COUNTRY_MOTIFS, THEME_STYLES, TIME_OF_DAY_HINTS):
        first = build_prompt(country, theme, time_of_day)
        second = build_prompt(country, theme, time_of_day)
        assert first == second
        assert first.prompt.encode("utf-8") == second.prompt.encode("utf-8")


def test_prompt_contains_looked_up_fragments():
    result = build_prompt("morocco", "peaceful", "nighttime")
    assert COUNTRY_MOTIFS["morocco"] in result.prompt
    assert THEME_STYLES["peaceful"] in result.prompt
    assert TIME_OF_DAY_HINTS["nighttime"] in result.prompt
    assert "no people" in result.prompt
    assert "no readable text" in result.prompt
    assert "not photorealistic" in result.prompt


def test_unknown_keys_fall_back_to_defaults():
    result = build_prompt("atlantis", "vaporwave", "dusk")
    assert result == build_prompt(DEFAULT_COUNTRY, "peaceful", "daytime")


def test_missing_keys_fall_back_to_defaults():
    assert build_prompt(None, None, None) == build_prompt("turkey", "peaceful", "daytime")


def test_negative_prompt_is_independent_of_input():
    assert build_prompt("egypt", "nature", "daytime").negative_prompt == NEGATIVE_PROMPT
    assert build_prompt("iran", "minimal", "nighttime").negative_prompt == NEGATIVE_PROMPT


def test_scene_is_placed_in_prompt():
    scene = COUNTRY_LANDMARKS["jordan"][0]
    result = build_prompt("jordan", "nature", "daytime", scene=scene)
    assert scene in result.prompt
    assert scene not in build_prompt("jordan", "nature", "daytime").prompt


def test_keys_are_normalized_and_aliased():
    assert normalize_key("  City Vibrant ") == "city_vibrant"
    assert build_prompt("Saudi Arabia", "city-vibrant", "Night") == build_prompt("saudi", "city_vibrant", "nighttime")


def test_scene_pool_uses_country_landmarks():
    assert scene_pool("morocco", "nature") == COUNTRY_LANDMARKS["morocco"]


def test_scene_pool_falls_back_to_theme_scenes():
    assert scene_pool(None, "nature") == GENERIC_THEME_SCENES["nature"]
    assert scene_pool("", "unknown") == GENERIC_THEME_SCENES["peaceful"]


def test_scene_pool_returns_a_copy():
    pool = scene_pool("egypt", None)
    pool.clear()
    assert len(COUNTRY_LANDMARKS["egypt"]) == 3
