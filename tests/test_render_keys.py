import re
from datetime import datetime, timezone

from app.utils.render_keys import (
    build_render_key,
    make_job_id,
    make_order_id,
    next_key_millis,
    slugify,
    tag_safe,
)


def test_slugify():
    assert slugify("Bilal Khan") == "bilal-khan"
    assert slugify("  Zoë & Renée!! ") == "zoe-renee"
    assert slugify("--city__vibrant--") == "city-vibrant"
    assert slugify(None) == ""
    assert len(slugify("a" * 200)) == 60


def test_tag_safe_strips_disallowed_characters():
    assert tag_safe("Khān <script>") == "Khan script"
    assert tag_safe("a@b.com/x=y+z:1") == "a@b.com/x=y+z:1"
    assert tag_safe("🙂 Layla") == "Layla"


def test_tag_safe_truncates():
    assert len(tag_safe("x" * 500)) == 256


def test_render_key_layout():
    now = datetime(2025, 10, 30, 21, 15, tzinfo=timezone.utc)
    key = build_render_key("Bilal Khan", "peaceful", "daytime", "Morocco", now=now)
    assert re.fullmatch(r"renders/2025/10/30/bilal-khan_peaceful_daytime_morocco_\d+\.png", key)


def test_render_key_omits_blank_parts():
    now = datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert re.fullmatch(r"renders/2025/01/02/layla_\d+\.png", build_render_key("Layla", now=now))
    assert re.fullmatch(r"renders/2025/01/02/design_\d+\.png", build_render_key(now=now))


def test_same_inputs_produce_distinct_keys():
    now = datetime(2025, 10, 30, tzinfo=timezone.utc)
    first = build_render_key("Bilal", "peaceful", now=now)
    second = build_render_key("Bilal", "peaceful", now=now)
    assert first != second


def test_key_millis_are_strictly_increasing():
    first = next_key_millis(1000)
    second = next_key_millis(1000)
    third = next_key_millis(5)
    assert first < second < third


def test_order_id_format():
    order_id = make_order_id(datetime(2025, 3, 4, tzinfo=timezone.utc))
    assert re.fullmatch(r"FD-2025-03-04-[A-Z0-9]{6}", order_id)


def test_job_id_format():
    assert re.fullmatch(r"job_\d+_[0-9a-f]{6}", make_job_id())
    assert make_job_id() != make_job_id()
