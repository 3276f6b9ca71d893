"""
Tag Model & Normalizer
======================
Canonicalizes free-form comment template tags ("level:E",
"category:organization", "ls:Self Regulation", "next-steps", "ontario", ...)
into typed values, and derives a template's level, emoji and categories.

Tags arrive either as a list or as a legacy comma-separated string.
Every helper here is best-effort: no match gives None/False, never an error.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

LEVELS = ("E", "G", "S", "NS", "NextSteps", "END")

DEFAULT_LEVEL_EMOJI = {
    "E": "🟢",
    "G": "🟡",
    "S": "🟠",
    "NS": "🔴",
    "NextSteps": "🧭",
    "END": "🏁",
}

# Filter values accepted over HTTP, upper-cased
LEVEL_PARAM_VALUES = {"E": "E", "G": "G", "S": "S", "NS": "NS", "NEXTSTEPS": "NextSteps", "END": "END"}

JURISDICTION_TAGS = {"ontario", "canada", "usa", "united states", "uk", "united kingdom", "australia"}

_LEVELS_BY_LOWER = {lv.lower(): lv for lv in LEVELS}
_QUOTES_RE = re.compile(r"[‘’“”'\"]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(label) -> str:
    """Canonical category slug: "Arts & Crafts" -> "arts-and-crafts"."""
    s = str(label or "").lower()
    s = s.replace("&", "and")
    s = _QUOTES_RE.sub("", s)
    s = _NON_ALNUM_RE.sub("-", s)
    return s.strip("-")


def canonical_level(value) -> Optional[str]:
    """Return the canonical spelling of a level, or None if it isn't one."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value in LEVELS:
        return value
    return _LEVELS_BY_LOWER.get(value.lower())


def normalize_level_param(raw) -> Optional[str]:
    """Map an HTTP level filter (E|G|S|NS|NEXTSTEPS|END, any case) to a level."""
    return LEVEL_PARAM_VALUES.get(str(raw or "").strip().upper())


# ═══════════════════════════════════════════════════════
# TAG LISTS
# ═══════════════════════════════════════════════════════

def split_tags(raw) -> List[str]:
    """Accept a list, a CSV string or None and return trimmed, non-empty tags."""
    if raw is None:
        return []
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, (list, tuple, set)):
        items = list(raw)
    else:
        return []
    return [str(t).strip() for t in items if t is not None and str(t).strip()]


def dedupe_tags(tags: Iterable[str]) -> List[str]:
    """Case-insensitive dedupe; the first spelling and order are kept."""
    seen = set()
    out = []
    if tags is not None and not isinstance(tags, (str, list, tuple, set)):
        tags = list(tags)
    for tag in split_tags(tags):
        key = tag.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(tag)
    return out


def with_level_tag(tags, level: Optional[str]) -> List[str]:
    """Append level:<L> unless a level tag is already present."""
    base = split_tags(tags)
    if level and not any(t.lower().startswith("level:") for t in base):
        base.append(f"level:{level}")
    return dedupe_tags(base)


# ═══════════════════════════════════════════════════════
# TYPED TAGS
# ═══════════════════════════════════════════════════════

@dataclass(frozen=True)
class LevelTag:
    level: Optional[str]
    raw: str


@dataclass(frozen=True)
class CategoryTag:
    slug: str
    label: Optional[str]
    raw: str


@dataclass(frozen=True)
class NextStepsTag:
    raw: str


@dataclass(frozen=True)
class JurisdictionTag:
    code: str
    raw: str


@dataclass(frozen=True)
class OpenerTag:
    raw: str


@dataclass(frozen=True)
class OpaqueTag:
    raw: str


Tag = Union[LevelTag, CategoryTag, NextStepsTag, JurisdictionTag, OpenerTag, OpaqueTag]


def parse_tag(raw: str) -> Tag:
    """Classify one raw tag string."""
    text = str(raw or "").strip()
    low = text.lower()

    if low.startswith("level:"):
        return LevelTag(canonical_level(text.split(":", 1)[1]), text)
    if low.startswith("category:"):
        return CategoryTag(slugify(text.split(":", 1)[1]), None, text)
    if low.startswith("ls:"):
        label = text.split(":", 1)[1].strip()
        return CategoryTag(slugify(label), label, text)
    if low == "next-steps":
        return NextStepsTag(text)
    if low.startswith("jur:"):
        return JurisdictionTag(low.split(":", 1)[1].strip(), text)
    if low in JURISDICTION_TAGS:
        return JurisdictionTag(low, text)
    if low in ("opener", "opening"):
        return OpenerTag(text)
    return OpaqueTag(text)


def parse_tags(raw) -> List[Tag]:
    return [parse_tag(t) for t in split_tags(raw)]


def category_slugs(tags) -> List[str]:
    """Slugs from category:<slug> and ls:<Label> tags, deduped in order."""
    out = []
    for tag in parse_tags(tags):
        if isinstance(tag, CategoryTag) and tag.slug and tag.slug not in out:
            out.append(tag.slug)
    return out


def explicit_category_slugs(tags) -> List[str]:
    """Slugs from category:<slug> tags only."""
    out = []
    for tag in parse_tags(tags):
        if isinstance(tag, CategoryTag) and tag.label is None and tag.slug not in out:
            out.append(tag.slug)
    return out


def jurisdictions(tags) -> List[str]:
    return [t.code for t in parse_tags(tags) if isinstance(t, JurisdictionTag)]


# ═══════════════════════════════════════════════════════
# LEVELS
# ═══════════════════════════════════════════════════════

def extract_level(template: dict, emoji_map: Optional[Dict[str, str]] = None) -> Tuple[Optional[str], Optional[str]]:
    """
    Derive (level, emoji) for a template row.

    A canonical `level` column wins. Otherwise the first level:<X> tag is used.
    Values outside LEVELS are treated as absent.
    """
    emoji_map = DEFAULT_LEVEL_EMOJI if emoji_map is None else emoji_map
    level = canonical_level((template or {}).get("level"))

    if level is None:
        for tag in parse_tags((template or {}).get("tags")):
            if isinstance(tag, LevelTag):
                level = tag.level
                break

    emoji = emoji_map.get(level) if level else None
    return level, emoji


# Ordered most specific first; the first matching rule wins.
LEVEL_RULES = (
    (re.compile(r"(next step|should|encouraged to|would benefit)", re.I), "NextSteps"),
    (re.compile(r"(needs|requires|finds it challenging|avoids|with modified timelines)", re.I), "NS"),
    (re.compile(r"(developing|with (some|occasional) reminders|emerging|benefits from)", re.I), "S"),
    (re.compile(r"(consistently|reliably|always|regularly)", re.I), "G"),
    (re.compile(r"(exemplary|outstanding|exceptional|beyond requirements|lead(er|ership))", re.I), "E"),
    (re.compile(r"(best of luck|successful year|strong start)", re.I), "END"),
)


def infer_level_from_text(text, rules=LEVEL_RULES) -> Optional[str]:
    """Guess a level from comment wording. Advisory only (used by backfill)."""
    text = str(text or "")
    for pattern, level in rules:
        if pattern.search(text):
            return level
    return None


# ═══════════════════════════════════════════════════════
# CLASSIFIERS
# ═══════════════════════════════════════════════════════

_NEXT_STEPS_TEXT_RE = re.compile(r"next|support|improv|goal|target|should|encouraged", re.I)


def has_category(tags, category_id) -> bool:
    """True if the tags place a template in the given category slug or label."""
    target = slugify(category_id)
    if not target:
        return False
    if target in category_slugs(tags):
        return True
    # Loose fallback for hand-made tags like "responsibility" or "ls-responsibility"
    return any(target in t.lower() for t in split_tags(tags))


def is_next_steps(tags, text) -> bool:
    low = [t.lower() for t in split_tags(tags)]
    if "next-steps" in low or "level:nextsteps" in low:
        return True
    return bool(_NEXT_STEPS_TEXT_RE.search(str(text or "")))


def is_opener(tags) -> bool:
    return any(isinstance(t, OpenerTag) for t in parse_tags(tags))
