import re
import secrets
import string
import threading
import time
import unicodedata
import uuid
from datetime import datetime, timezone
from typing import Optional

SLUG_MAX_LENGTH = 60
TAG_VALUE_MAX_LENGTH = 256

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_TAG_UNSAFE_RE = re.compile(r"[^A-Za-z0-9 _.:/=+@-]")

_millis_lock = threading.Lock()
_last_millis = 0


def strip_diacritics(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def slugify(value, max_length: int = SLUG_MAX_LENGTH) -> str:
    """'Bilal Khan!' -> 'bilal-khan'"""
    if value is None:
        return ""
    slug = strip_diacritics(str(value)).lower()
    slug = _NON_ALNUM_RE.sub("-", slug).strip("-")
    return slug[:max_length].strip("-")


def tag_safe(value, max_length: int = TAG_VALUE_MAX_LENGTH) -> str:
    """Reduce a value to the S3 object tag character set."""
    if value is None:
        return ""
    cleaned = _TAG_UNSAFE_RE.sub("", strip_diacritics(str(value)))
    return cleaned[:max_length].strip()


def next_key_millis(now_millis: Optional[int] = None) -> int:
    """
    Epoch millis for an object key, strictly increasing within this process.
    """
    global _last_millis
    if now_millis is None:
        now_millis = int(time.time() * 1000)
    with _millis_lock:
        if now_millis <= _last_millis:
            now_millis = _last_millis + 1
        _last_millis = now_millis
    return now_millis


def build_render_key(
    name: str = "",
    theme: str = "",
    time_of_day: str = "",
    country: str = "",
    now: Optional[datetime] = None,
) -> str:
    """
    renders/YYYY/MM/DD/<name>_<theme>_<timeOfDay>_<country>_<millis>.png

    Blank parts are omitted; "design" stands in when all of them are blank.
    """
    now = now or datetime.now(timezone.utc)
    millis = next_key_millis(int(now.timestamp() * 1000))
    day = now.astimezone(timezone.utc)

    parts = [slugify(part) for part in (name, theme, time_of_day, country)]
    base = "_".join(part for part in parts if part) or "design"
    return f"renders/{day:%Y}/{day:%m}/{day:%d}/{base}_{millis}.png"


def make_order_id(now: Optional[datetime] = None) -> str:
    """Human-readable order id for staff, e.g. FD-2025-10-30-K3X9QZ"""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    alphabet = string.ascii_uppercase + string.digits
    suffix = "".join(secrets.choice(alphabet) for _ in range(6))
    return f"FD-{now:%Y-%m-%d}-{suffix}"


def make_job_id() -> str:
    """Correlation tag for one generation request. Not an idempotency key."""
    return f"job_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"
