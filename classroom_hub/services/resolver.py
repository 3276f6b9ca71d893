"""
Template Resolver / Placeholder Filler
======================================
Fills {{name}} placeholders in comment templates from a render context and
composes ordered snippets into one report-card comment.

Missing placeholders resolve to an empty string; nothing here raises on
bad input.
"""
import re
from typing import Dict, Iterable, List, Optional

PLACEHOLDER_RE = re.compile(r"\{\{\s*([\w.\-]+)\s*\}\}")

# Older single-brace spellings found in imported comment banks
LEGACY_MARKERS = {
    "Name": "first",
    "name": "first",
    "HeSheThey": "They",
    "heSheThey": "they",
    "heshethey": "they",
    "himherthem": "them",
    "hishertheir": "their",
    "his/hertheir": "their",
    "himselfherselfthemselves": "their",
    "GRADE": None,
}

_LEGACY_RE = re.compile(
    r"(?<!\{)\{(" + "|".join(re.escape(k) for k in LEGACY_MARKERS) + r")\}(?!\})"
)

_LEADING_NOISE_RE = re.compile(r"^[^\w\"'(\[{]+\s*")
_LEADING_MARKER_RE = re.compile(r"^\s*\[(?:E|G|S|N|NS|NextSteps|Next|Opener|Opening)\]\s*", re.I)

DEFAULT_PRONOUNS = ("they", "them", "their")
_POSSESSIVE = {"he": "his", "she": "hers"}
_REFLEXIVE = {"he": "himself", "she": "herself"}


def normalize_placeholders(text: str) -> str:
    """Rewrite legacy markers ({Name}, {hishertheir}, ...) as {{...}} placeholders."""
    def _sub(match):
        target = LEGACY_MARKERS[match.group(1)]
        return "{{%s}}" % target if target else ""
    return _LEGACY_RE.sub(_sub, text or "")


def fill_template(text: str, context: Optional[Dict[str, str]]) -> str:
    """Replace every {{name}} with context[name], or '' when absent."""
    context = context or {}

    def _sub(match):
        value = context.get(match.group(1))
        return "" if value is None else str(value)
    return PLACEHOLDER_RE.sub(_sub, normalize_placeholders(text))


def placeholders_in(text: str) -> List[str]:
    """Placeholder names used by a template, in order of first use."""
    out = []
    for name in PLACEHOLDER_RE.findall(normalize_placeholders(text)):
        if name not in out:
            out.append(name)
    return out


# ═══════════════════════════════════════════════════════
# PRONOUNS
# ═══════════════════════════════════════════════════════

def _cap(s: str) -> str:
    return s[:1].upper() + s[1:]


def split_pronouns(pronouns: Optional[str]) -> Dict[str, str]:
    """Parse 'subj/obj/possAdj' (default they/them/their) into all pronoun forms."""
    parts = [p.strip() for p in (pronouns or "").lower().split("/")]
    subj, obj, poss_adj = [
        parts[i] if i < len(parts) and parts[i] else DEFAULT_PRONOUNS[i]
        for i in range(3)
    ]
    poss_pron = _POSSESSIVE.get(subj, "theirs")
    reflexive = _REFLEXIVE.get(subj, "themselves")
    return {
        "they": subj,
        "them": obj,
        "their": poss_adj,
        "theirs": poss_pron,
        "themselves": reflexive,
        "They": _cap(subj),
        "Them": _cap(obj),
        "Their": _cap(poss_adj),
        "Theirs": _cap(poss_pron),
        "Themselves": _cap(reflexive),
    }


def pronouns_from_gender(gender: Optional[str]) -> str:
    return {
        "male": "he/him/his",
        "female": "she/her/her",
        "nonbinary": "they/them/their",
    }.get((gender or "").strip().lower(), "")


# ═══════════════════════════════════════════════════════
# RENDER CONTEXT
# ═══════════════════════════════════════════════════════

def student_guardians(student: Optional[dict]) -> List[dict]:
    """Guardians from `parents`, `guardians` or `links[].guardian`, whichever is present."""
    if not student:
        return []
    for key in ("parents", "guardians"):
        if student.get(key):
            return list(student[key])
    guardians = []
    for link in student.get("links") or []:
        g = link.get("guardian") or {}
        entry = {
            "name": g.get("name") or "",
            "email": g.get("email"),
            "phone": g.get("phone"),
            "relationship": link.get("relationship"),
        }
        if entry["name"] or entry["email"] or entry["phone"]:
            guardians.append(entry)
    return guardians


def build_context(student: Optional[dict] = None, guardians: Optional[List[dict]] = None,
                  target_guardian_email: Optional[str] = None, subject: Optional[str] = None,
                  term: Optional[str] = None, teacher_name: Optional[str] = None,
                  extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Build the placeholder values for one render."""
    s = student or {}
    all_guardians = guardians if guardians is not None else student_guardians(s)
    guardian = next(
        (g for g in all_guardians if target_guardian_email and g.get("email") == target_guardian_email),
        all_guardians[0] if all_guardians else {},
    )

    pronouns = s.get("pronouns") or pronouns_from_gender(s.get("gender"))
    forms = split_pronouns(pronouns)

    if subject and str(subject).strip():
        subject_or_class = str(subject).strip()
    else:
        classrooms = [
            (e.get("classroom") or {}).get("name")
            for e in s.get("enrollments") or []
        ]
        subject_or_class = next((c for c in classrooms if c), "class")

    first = s.get("first") or ""
    context = {
        "first": first,
        "First": _cap(first),
        "last": s.get("last") or "",
        "grade": str(s.get("grade") or ""),
        "gender": s.get("gender") or "",
        "pronouns": s.get("pronouns") or "",
        **forms,
        "guardian_name": guardian.get("name") or "",
        "guardian_email": guardian.get("email") or "",
        "guardian_phone": guardian.get("phone") or "",
        "guardian_relationship": guardian.get("relationship") or "",
        "subject_or_class": subject_or_class,
        "teacher_name": teacher_name or "Teacher",
        "term": term or "",
        # aliases used by seeded and AI-generated templates
        "student_first": first,
        "student_last": s.get("last") or "",
        "he_she": forms["they"],
        "him_her": forms["them"],
        "his_her": forms["their"],
    }
    context.update({k: "" if v is None else str(v) for k, v in (extra or {}).items()})
    return context


# ═══════════════════════════════════════════════════════
# COMPOSITION
# ═══════════════════════════════════════════════════════

def strip_markers(text: str) -> str:
    """Drop leading emoji/punctuation and [E]/[NextSteps]-style markers."""
    s = text or ""
    while True:
        stripped = _LEADING_MARKER_RE.sub("", _LEADING_NOISE_RE.sub("", s))
        if stripped == s:
            return s.strip()
        s = stripped


def compose(parts: Iterable[str], context: Optional[Dict[str, str]] = None) -> str:
    """Fill each part, strip markers, drop empties, and join with single spaces."""
    filled = (strip_markers(fill_template(p, context)).strip() for p in parts)
    return " ".join(p for p in filled if p)


class Selection:
    """Caller-owned ordered list of selected template ids."""

    def __init__(self, ids=None):
        self.ids = list(ids or [])

    def __iter__(self):
        return iter(self.ids)

    def __len__(self):
        return len(self.ids)

    def add(self, template_id):
        self.ids.append(template_id)
        return self

    def move(self, index, to):
        if not 0 <= index < len(self.ids):
            return self
        to = max(0, min(to, len(self.ids) - 1))
        self.ids.insert(to, self.ids.pop(index))
        return self

    def move_up(self, index):
        return self.move(index, index - 1) if index > 0 else self

    def move_down(self, index):
        return self.move(index, index + 1)

    def remove(self, index):
        if 0 <= index < len(self.ids):
            self.ids.pop(index)
        return self
