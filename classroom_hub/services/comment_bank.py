"""
Comment Bank Routines
=====================
Seeding, tag/level repair passes, rendering and AI-assisted drafting on top
of a TemplateStore.

Batch routines never stop on a single bad row: each item failure is logged
and counted, and the result reports created/updated/skipped/failed totals.
"""
import json
import logging
import re

from sqlalchemy.exc import SQLAlchemyError

from .errors import CommentBankError, ValidationError
from .ontario_dataset import ONTARIO_CATEGORIES, ONTARIO_DATA, starter_bank
from .resolver import build_context, compose, fill_template, normalize_placeholders
from .tags import (
    DEFAULT_LEVEL_EMOJI, LEVELS, JURISDICTION_TAGS, canonical_level, dedupe_tags,
    infer_level_from_text, is_next_steps, slugify, with_level_tag,
)

logger = logging.getLogger(__name__)

ONTARIO_SLUGS = {slugify(label) for label in ONTARIO_CATEGORIES}

# Seed-era aliases folded onto canonical names when matching texts
_ALIASES = {
    "student_first": "first",
    "he_she": "they",
    "him_her": "them",
    "his_her": "their",
}
_ALIAS_RE = re.compile(r"\{\{\s*(" + "|".join(_ALIASES) + r")\s*\}\}")
_WS_RE = re.compile(r"\s+")

_BATCH_ERRORS = (CommentBankError, SQLAlchemyError)


def collapse_ws(text):
    return _WS_RE.sub(" ", text or "").strip()


def seed_text(raw):
    """Text as the seed writes it: canonical placeholders, single spaces."""
    return collapse_ws(normalize_placeholders(raw))


def match_key(text):
    """Comparison key that treats alias placeholders as their canonical form."""
    return _ALIAS_RE.sub(lambda m: "{{%s}}" % _ALIASES[m.group(1)], seed_text(text))


def dataset_entries():
    """Yield (category label, level, raw text) for the built-in Ontario bank."""
    for category, entries in ONTARIO_DATA.items():
        for level, raw in entries:
            yield category, level, raw


def context_from_payload(payload):
    """Build a render context from a request body."""
    payload = payload or {}
    return build_context(
        student=payload.get("student"),
        guardians=payload.get("guardians"),
        target_guardian_email=payload.get("guardianEmail"),
        subject=payload.get("subject"),
        term=payload.get("term"),
        teacher_name=payload.get("teacherName"),
        extra=payload.get("extra"),
    )


def _result(**counts):
    return {"ok": True, **counts}


class CommentBank:
    """Seed, backfill, render and drafting operations over a TemplateStore."""

    def __init__(self, store, ai=None, settings=None, emoji_map=None):
        self.store = store
        self.ai = ai
        self.settings = settings
        self.emoji_map = dict(emoji_map or store.emoji_map or DEFAULT_LEVEL_EMOJI)

    def levels_mapping(self):
        return {"levels": list(LEVELS), "emoji": dict(self.emoji_map)}

    def categories(self):
        if self.settings is None:
            return [{"id": slugify(label), "label": label} for label in ONTARIO_CATEGORIES]
        return self.settings.ls_categories()

    # ═══════════════════════════════════════════════════════
    # SEEDING
    # ═══════════════════════════════════════════════════════

    def seed_ontario(self, mode="upsert"):
        """
        Write the built-in Ontario learning-skills bank.

        mode "upsert": merge tags/level into rows with the same text, create the rest
        mode "create": only create rows whose text is not stored yet
        """
        if mode not in ("upsert", "create"):
            raise ValueError(f"Unknown seed mode '{mode}'")

        created = updated = skipped = failed = 0
        for category, level, raw in dataset_entries():
            try:
                outcome = self._ensure_seeded(category, level, raw, mode)
            except _BATCH_ERRORS as e:
                logger.warning("Seeding '%s' failed: %s", raw[:60], e)
                failed += 1
                continue
            if outcome == "created":
                created += 1
            elif outcome == "updated":
                updated += 1
            else:
                skipped += 1

        logger.info("Ontario seed (%s): %d created, %d updated, %d skipped, %d failed",
                    mode, created, updated, skipped, failed)
        return _result(mode=mode, created=created, updated=updated, skipped=skipped,
                       failed=failed, total=created + updated + skipped + failed)

    def _ensure_seeded(self, category, level, raw, mode):
        text = seed_text(raw)
        if not text:
            return "skipped"

        tags = ["learning", "ontario", f"ls:{category}", f"category:{slugify(category)}", f"level:{level}"]
        if level == "NextSteps":
            tags.append("next-steps")

        existing = self.store.find_by_text(text)
        if existing is None:
            self.store.create(text=text, tags=tags, level=level)
            return "created"
        if mode != "upsert":
            return "skipped"

        merged = dedupe_tags(existing["tags"] + tags)
        if merged == existing["tags"] and existing["level"] == level:
            return "skipped"
        return "updated" if self.store.update(existing["id"], tags=merged, level=level) else "skipped"

    def seed_jurisdiction(self, jurisdiction):
        """Starter bank for a jurisdiction, only when none of its templates exist yet."""
        jur = str(jurisdiction or "").strip().lower() or "generic"
        if self.store.count_tagged(jur):
            return {"ok": True, "seeded": False, "created": 0}

        created = 0
        for item in starter_bank(jur):
            try:
                self.store.create(text=item["text"], subject=item.get("subject"), tags=item["tags"])
                created += 1
            except _BATCH_ERRORS as e:
                logger.warning("Starter template '%s' failed: %s", item["text"][:60], e)
        return {"ok": True, "seeded": True, "created": created}

    # ═══════════════════════════════════════════════════════
    # BACKFILLS
    # ═══════════════════════════════════════════════════════

    def backfill_ontario_tags(self):
        """Add category:, next-steps and ontario tags that can be derived from existing ones."""
        rows = self.store.all()
        updated = failed = 0
        for row in rows:
            current = list(row["tags"])
            tags = self._derived_ontario_tags(current, row["text"])
            if tags == current:
                continue
            try:
                if self.store.update(row["id"], tags=tags):
                    updated += 1
            except _BATCH_ERRORS as e:
                logger.warning("Tag backfill for %s failed: %s", row["id"], e)
                failed += 1
        return _result(updated=updated, failed=failed, total=len(rows))

    @staticmethod
    def _derived_ontario_tags(tags, text):
        low = [t.lower() for t in tags]
        out = list(tags)

        ls_slug = next((slugify(t.split(":", 1)[1]) for t in low if t.startswith("ls:")), None)
        has_category = any(t.startswith("category:") for t in low)
        if not has_category and ls_slug in ONTARIO_SLUGS:
            out.append(f"category:{ls_slug}")

        if "next-steps" not in low and is_next_steps(tags, text):
            out.append("next-steps")

        has_jurisdiction = any(t.startswith("jur:") or t in JURISDICTION_TAGS for t in low)
        looks_ontario = ls_slug in ONTARIO_SLUGS or any(
            t.startswith("category:") and slugify(t.split(":", 1)[1]) in ONTARIO_SLUGS for t in low
        )
        if not has_jurisdiction and looks_ontario:
            out.append("ontario")
        return dedupe_tags(out)

    def backfill_from_dataset(self):
        """Give rows whose text matches the built-in bank their missing ls:/category:/level: tags."""
        by_text = {}
        for category, level, raw in dataset_entries():
            by_text.setdefault(match_key(raw), (category, level))

        rows = self.store.all()
        updated = skipped = failed = 0
        for row in rows:
            meta = by_text.get(match_key(row["text"]))
            if meta is None:
                skipped += 1
                continue
            category, level = meta
            low = [t.lower() for t in row["tags"]]
            need_ls = not any(t.startswith("ls:") for t in low)
            need_category = not any(t.startswith("category:") for t in low)
            need_level = row["level"] is None
            if not (need_ls or need_category or need_level):
                skipped += 1
                continue

            tags = list(row["tags"])
            if need_ls:
                tags.append(f"ls:{category}")
            if need_category:
                tags.append(f"category:{slugify(category)}")
            if level == "NextSteps":
                tags.append("next-steps")
            if need_level:
                tags.append(f"level:{level}")
            try:
                ok = self.store.update(row["id"], tags=tags, level=level if need_level else None)
            except _BATCH_ERRORS as e:
                logger.warning("Dataset backfill for %s failed: %s", row["id"], e)
                failed += 1
                continue
            if ok:
                updated += 1
            else:
                skipped += 1
        return _result(updated=updated, skipped=skipped, failed=failed, total=len(rows))

    def backfill_levels(self):
        """Infer a level for rows that have none. Stored levels are left alone."""
        rows = self.store.all()
        updated = skipped = failed = 0
        for row in rows:
            level = None if row["level"] else infer_level_from_text(row["text"])
            if level is None:
                skipped += 1
                continue
            try:
                ok = self.store.update(row["id"], tags=with_level_tag(row["tags"], level), level=level)
            except _BATCH_ERRORS as e:
                logger.warning("Level backfill for %s failed: %s", row["id"], e)
                failed += 1
                continue
            if ok:
                updated += 1
            else:
                skipped += 1
        return _result(updated=updated, skipped=skipped, failed=failed, total=len(rows))

    # ═══════════════════════════════════════════════════════
    # RENDERING
    # ═══════════════════════════════════════════════════════

    def render(self, template_id=None, text=None, context=None):
        """Fill one stored template (by id) or a literal text."""
        if template_id is not None:
            text = self.store.get(template_id)["text"]
        return {"text": fill_template(text or "", context)}

    def compose_selection(self, ids=None, texts=None, context=None):
        """Compose stored templates (in the given order) or literal snippets."""
        for name, value in (("ids", ids), ("texts", texts)):
            if value is not None and not isinstance(value, list):
                raise ValidationError(f"'{name}' must be a list")
        parts = [self.store.get(i)["text"] for i in ids] if ids else list(texts or [])
        return {"text": compose(parts, context)}

    # ═══════════════════════════════════════════════════════
    # AI DRAFTING
    # ═══════════════════════════════════════════════════════

    def generate(self, subject=None, grade_band=None, tone="positive", length="medium",
                 placeholders=None, level=None, target_level=None):
        """One AI-written comment sentence; a fixed sentence when AI is unavailable."""
        chosen = canonical_level(level) or canonical_level(target_level)
        placeholders = placeholders if isinstance(placeholders, list) else []

        context_bits = []
        if subject:
            context_bits.append(f"subject={subject};")
        if grade_band:
            context_bits.append(f"gradeBand={grade_band};")
        if chosen:
            context_bits.append(f"level={chosen};")

        prompt = f"""Write one teacher report-card comment sentence in {tone or 'positive'} tone and {length or 'medium'} length.
Use ONLY these placeholders if needed: {json.dumps(placeholders)}.
Context: {' '.join(context_bits)}

Rules:
- Use gender-neutral placeholders ({{{{they}}}}, {{{{them}}}}, {{{{their}}}}) when needed.
- Prefer {{{{first}}}} to refer to the student.
- Single sentence. Specific and helpful.
Return JSON: {{"text": "..."}} only."""

        if subject:
            fallback_text = f"{{{{first}}}} showed steady growth in {subject} this term and would benefit from focusing on {{{{next_step}}}}."
        else:
            fallback_text = "{{first}} demonstrated positive learning habits this term and should continue to build on {{strength}}."
        fallback = {"text": fallback_text}

        reply = self.ai.generate(prompt, fallback) if self.ai else fallback
        text = reply.get("text") if isinstance(reply, dict) else None
        text = str(text or fallback_text).strip()
        return {"text": text, "level": chosen, "emoji": self.emoji_map.get(chosen) if chosen else None}

    def suggest(self, partial_text="", placeholders=None, tone="positive", subject=None,
                grade_band=None, category=None):
        """Short completions to insert at the cursor while a teacher types."""
        lead = f"{partial_text.strip()} " if partial_text and partial_text.strip() else ""
        topic = subject or "{{subject_or_class}}"
        fallback = {"suggestions": [
            f"{lead}{{{{first}}}} has shown steady progress in {topic}.",
            f"{lead}Encourage {{{{them}}}} to keep practicing, especially with {{{{next_step}}}}.",
            f"{lead}{{{{They}}}} demonstrates strong {{{{strength}}}} during class activities.",
            f"{lead}In {topic}, {{{{first}}}} is engaged and participates often.",
            f"{lead}Next, we will focus on {{{{next_step}}}} to build confidence.",
            f"{lead}{{{{Their}}}} effort this term has been consistent.",
        ]}
        allowed = ", ".join(placeholders or []) or "{{first}}, {{they}}, {{their}}, {{subject_or_class}}, {{next_step}}, {{strength}}"
        prompt = f"""You generate SHORT, clean, partial comment completions for a teacher.
They will be inserted into an existing textarea at the cursor.

Context:
- Tone: {tone}
- Category: {category or 'n/a'}
- Subject: {subject or 'n/a'}
- Grade band: {grade_band or 'n/a'}
- Allowed placeholders (use at least one in most suggestions): {allowed}

Return strict JSON: {{"suggestions": [string, ...]}} with 5 to 8 one-sentence items.

partialText:
\"\"\"{partial_text or ''}\"\"\""""

        reply = self.ai.generate(prompt, fallback) if self.ai else fallback
        items = reply.get("suggestions") if isinstance(reply, dict) else None
        out = []
        for s in items if isinstance(items, list) else []:
            s = str(s or "").strip()
            if s and s not in out:
                out.append(s)
        return {"suggestions": out or fallback["suggestions"]}

    def compose_ai(self, kind="generate", student=None, settings=None, context=None, text=None, draft=None):
        """
        Generate, rephrase, condense or proofread a comment draft.

        Learning-skills mode returns {text}; subject mode returns
        {opener, evidence, nextSteps, conclusion}. Placeholders are kept.
        """
        student = student or {}
        context = context or {}
        draft = draft or {}
        if settings is None:
            settings = self.settings.load() if self.settings else {}
        flags = student.get("flags") or {}
        learning = context.get("mode") == "learning"

        lines = [
            "You are a helpful teacher assistant creating report card comments.",
            f"Student: {student.get('first') or ''} {student.get('last') or ''}, grade {student.get('grade') or ''}",
        ]
        if flags.get("iep"):
            lines.append("IEP: yes")
        if flags.get("ell"):
            lines.append("ELL: yes")
        if student.get("courses"):
            lines.append(f"Courses: {', '.join(student['courses'])}")
        lines.append(f"Jurisdiction: {settings.get('jurisdiction') or 'generic'}, Term: {context.get('term') or ''}")
        lines.append(f"Mode: {context.get('mode') or ''} {'(subject: %s)' % context['subject'] if context.get('subject') else ''}")
        lines.append({
            "generate": "Task: generate a clean, teacher-ready comment.",
            "rephrase": "Task: rephrase the comment to be clearer, same meaning.",
            "condense": "Task: shorten the comment while keeping key points.",
            "proofread": "Task: fix grammar/tone, keep content and meaning.",
        }.get(kind, "Task: generate a clean, teacher-ready comment."))

        if learning:
            current = text or ""
        else:
            current = "\n".join([
                f"Opener: {draft.get('opener') or ''}",
                f"Evidence: {draft.get('evidence') or ''}",
                f"Next: {draft.get('next') or draft.get('nextSteps') or ''}",
                f"Conclusion: {draft.get('conclusion') or ''}",
            ])
        if current:
            lines.append(f"Current draft:\n{current}")
        lines.append("Rules: Write in plain language, no emojis unless already present, "
                     "keep placeholder braces like {{first}} or {{they}} if included.")

        temperature = 0.2 if kind in ("condense", "proofread") else 0.7
        out = self.ai.complete_text("\n".join(lines), None, temperature=temperature) if self.ai else None
        if not out:
            return self._compose_fallback(learning, student, context)

        if learning:
            return {"text": out}
        sections = re.split(r"\n{2,}", out)
        return {
            "opener": sections[0] if sections else "",
            "evidence": sections[1] if len(sections) > 1 else "",
            "nextSteps": sections[2] if len(sections) > 2 else "",
            "conclusion": "\n\n".join(sections[3:]),
        }

    @staticmethod
    def _compose_fallback(learning, student, context):
        if learning:
            support = "With targeted language supports, " if (student.get("flags") or {}).get("ell") else ""
            return {"text": f"{{{{First}}}} has shown steady progress this term. "
                            f"{support}{{{{they}}}} is building confidence and consistency."}
        return {
            "opener": f"{{{{First}}}} has been engaged in {context.get('subject') or 'class'}.",
            "evidence": "{{They}} demonstrates growing accuracy and independence on recent tasks.",
            "nextSteps": "We will focus on goal-setting and consistent routines.",
            "conclusion": "I'm proud of {{their}} effort.",
        }

    def compose_email(self, kind="generate", student=None, topic=None, tone=None, subject=None, body=None):
        """Deterministic parent email draft, tidied or condensed on request."""
        name = (student or {}).get("first") or "The student"
        subject = subject or ""
        body = body or ""

        if kind == "generate" or (not subject and not body):
            subject = _EMAIL_SUBJECTS.get((topic or "general").lower(), _EMAIL_SUBJECTS["general"]).format(name=name)
            opener = _EMAIL_OPENERS.get(tone or "Neutral", _EMAIL_OPENERS["Neutral"]).format(name=name)
            body = _EMAIL_BODY.format(opener=opener, name=name)

        if kind in ("rephrase", "proofread"):
            subject = collapse_ws(subject)
            body = collapse_ws(body).replace(" ,", ",")
        elif kind == "condense":
            subject = collapse_ws(subject)
            body = first_sentences(collapse_ws(body), 4)
        return {"subject": subject, "body": body}


_EMAIL_SUBJECTS = {
    "progress": "Quick update about {name}",
    "concern": "Support plan for {name}",
    "positive": "Celebrating {name}'s success",
    "attendance": "Attendance update for {name}",
    "behavior": "Classroom update for {name}",
    "assignment": "Assignment update for {name}",
    "meeting": "Request to meet about {name}",
    "general": "Update about {name}",
}

_EMAIL_OPENERS = {
    "Neutral": "Hello, I wanted to share a brief update about {name}.",
    "Warm": "Hello, I hope you're well. I wanted to share a quick update about {name}.",
    "Professional": "Hello, I'm reaching out with an update regarding {name}.",
    "Encouraging": "Hi! I'm excited to share a quick update about {name}.",
    "Direct": "Hello, a quick update about {name}.",
}

_EMAIL_BODY = """{opener}

Recently, {name} has shown steady progress in class. I've noticed positive steps with daily routines and participation.

Next, we'll focus on goal-setting and using feedback to improve work. Any support you can offer at home (e.g., checking the planner) would be appreciated.

Thank you for your partnership,
{{{{teacher_name}}}}"""

_SENTENCE_END_RE = re.compile(r"[.!?]\s+")


def first_sentences(text, n):
    parts = [p.rstrip(".!?") for p in _SENTENCE_END_RE.split(text or "") if p.strip()]
    return (". ".join(parts[:n]) + ".") if parts else ""
