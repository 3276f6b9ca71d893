"""
Test: Comment bank routines: Ontario seed, starter banks, backfills, rendering and drafting.
"""
import pytest
from sqlalchemy.exc import SQLAlchemyError

from classroom_hub.services.comment_bank import (
    CommentBank, dataset_entries, first_sentences, match_key, seed_text,
)
from classroom_hub.services.errors import NotFound, ValidationError
from classroom_hub.services.ontario_dataset import ONTARIO_DATA
from classroom_hub.services.resolver import Selection, build_context, fill_template


def _unique_seed_texts():
    return {seed_text(raw) for _, _, raw in dataset_entries()}


class TestSeedText:
    def test_legacy_markers_normalized(self):
        assert seed_text("  {Name}  shares {hishertheir}\nideas. ") == "{{first}} shares {{their}} ideas."

    def test_alias_matching(self):
        assert match_key("{{student_first}} shares {{his_her}} ideas.") == match_key("{Name} shares {hishertheir} ideas.")


class TestSeedOntario:
    def test_first_run_creates_everything(self, bank):
        result = bank.seed_ontario()
        assert result["ok"] is True
        assert result["failed"] == 0
        assert result["created"] == len(_unique_seed_texts())
        assert result["total"] == sum(len(v) for v in ONTARIO_DATA.values())

    def test_second_run_keeps_count(self, bank, join_store):
        bank.seed_ontario()
        first_count = len(join_store.all())
        second = bank.seed_ontario()
        assert second["created"] == 0
        assert len(join_store.all()) == first_count

    def test_seeded_tags(self, bank, join_store):
        bank.seed_ontario()
        label, entries = next(iter(ONTARIO_DATA.items()))
        level, raw = entries[0]
        row = join_store.find_by_text(seed_text(raw))
        for tag in ("learning", "ontario", f"ls:{label}", "category:responsibility", f"level:{level}"):
            assert tag in row["tags"]
        assert row["level"] == level

    def test_create_mode_skips_existing(self, bank, join_store):
        level, raw = ONTARIO_DATA["Responsibility"][0]
        join_store.create(text=seed_text(raw))
        result = bank.seed_ontario(mode="create")
        assert result["skipped"] >= 1
        assert join_store.find_by_text(seed_text(raw))["tags"] == []

    def test_upsert_merges_tags(self, bank, join_store):
        level, raw = ONTARIO_DATA["Responsibility"][0]
        join_store.create(text=seed_text(raw), tags=["custom"])
        result = bank.seed_ontario(mode="upsert")
        assert result["updated"] >= 1
        row = join_store.find_by_text(seed_text(raw))
        assert row["tags"][0] == "custom"
        assert "category:responsibility" in row["tags"]
        assert row["level"] == level

    def test_seeded_sentence_renders_possessive(self, bank, join_store):
        bank.seed_ontario()
        row = next(t for t in join_store.all() if "maximize" in t["text"])
        assert row["text"].endswith("to maximize {{their}} potential.")
        ctx = build_context({"first": "Sam", "pronouns": "she/her/her"})
        assert bank.render(template_id=row["id"], context=ctx)["text"].endswith("to maximize her potential.")

    def test_failed_item_counted(self, bank, join_store, monkeypatch):
        _, raw = ONTARIO_DATA["Responsibility"][0]
        broken = seed_text(raw)
        real_create = join_store.create

        def create(text, **kwargs):
            if text == broken:
                raise SQLAlchemyError("disk full")
            return real_create(text, **kwargs)

        monkeypatch.setattr(join_store, "create", create)
        result = bank.seed_ontario()
        assert result["failed"] == 1
        assert result["created"] == len(_unique_seed_texts()) - 1
        assert join_store.find_by_text(broken) is None

    def test_unknown_mode(self, bank):
        with pytest.raises(ValueError):
            bank.seed_ontario(mode="replace")

    def test_works_on_every_shape(self, store, raising_ai):
        bank = CommentBank(store, ai=raising_ai)
        first = bank.seed_ontario()
        assert first["failed"] == 0
        count = len(store.all())
        bank.seed_ontario()
        assert len(store.all()) == count


class TestSeedJurisdiction:
    def test_seeds_once(self, bank, join_store):
        first = bank.seed_jurisdiction("UK")
        assert first == {"ok": True, "seeded": True, "created": 18}
        assert join_store.count_tagged("uk") == 18
        assert bank.seed_jurisdiction("uk") == {"ok": True, "seeded": False, "created": 0}


class TestBackfills:
    def test_ontario_tags(self, bank, join_store):
        t = join_store.create(text="Sam stays calm.", tags=["ls:Self Regulation"])
        result = bank.backfill_ontario_tags()
        assert result["updated"] == 1
        tags = join_store.get(t["id"])["tags"]
        assert "category:self-regulation" in tags
        assert "ontario" in tags
        assert "next-steps" not in tags

    def test_ontario_tags_next_steps_and_jurisdiction(self, bank, join_store):
        t = join_store.create(text="Set a goal each week.", tags=["category:organization", "uk"])
        bank.backfill_ontario_tags()
        tags = join_store.get(t["id"])["tags"]
        assert "next-steps" in tags
        assert "ontario" not in tags

    def test_ontario_tags_idempotent(self, bank, join_store):
        join_store.create(text="Sam stays calm.", tags=["ls:Self Regulation"])
        bank.backfill_ontario_tags()
        assert bank.backfill_ontario_tags()["updated"] == 0

    def test_from_dataset(self, bank, join_store):
        t = join_store.create(text="{{student_first}} consistently engages in lessons and contributes meaningfully to discussions.")
        other = join_store.create(text="Not from the bank.")
        result = bank.backfill_from_dataset()
        assert result == {"ok": True, "updated": 1, "skipped": 1, "failed": 0, "total": 2}
        row = join_store.get(t["id"])
        assert "ls:Responsibility" in row["tags"]
        assert "category:responsibility" in row["tags"]
        assert row["level"] == "E"
        assert join_store.get(other["id"])["tags"] == []

    def test_levels_inferred(self, bank, join_store):
        t = join_store.create(text="Sam consistently submits work.")
        result = bank.backfill_levels()
        assert result["updated"] == 1
        assert join_store.get(t["id"])["level"] == "G"

    def test_levels_failure_counted(self, bank, join_store, monkeypatch):
        bad = join_store.create(text="Sam consistently submits work.")
        good = join_store.create(text="Sam is developing routines.")
        real_update = join_store.update

        def update(template_id, **kwargs):
            if template_id == bad["id"]:
                raise SQLAlchemyError("locked")
            return real_update(template_id, **kwargs)

        monkeypatch.setattr(join_store, "update", update)
        result = bank.backfill_levels()
        assert result["failed"] == 1
        assert result["updated"] == 1
        assert join_store.get(good["id"])["level"] == "S"

    def test_explicit_level_kept(self, bank, join_store):
        t = join_store.create(text="Sam needs reminders.", level="E")
        result = bank.backfill_levels()
        assert result["updated"] == 0
        assert result["skipped"] == 1
        assert join_store.get(t["id"])["level"] == "E"


class TestRendering:
    def test_render_by_id(self, bank, join_store):
        t = join_store.create(text="{{First}} helps {{them}}self.")
        assert bank.render(template_id=t["id"], context={"First": "Sam", "them": "him"}) == {"text": "Sam helps himself."}

    def test_render_unknown_id(self, bank):
        with pytest.raises(NotFound):
            bank.render(template_id="9999")

    def test_compose_selection_order(self, bank, join_store):
        a = join_store.create(text="{{first}} listens well.")
        b = join_store.create(text="🟡 {{first}} asks questions.")
        c = join_store.create(text="[E] Welcome back, {{first}}.")
        selection = Selection([a["id"], b["id"], c["id"]]).move(2, 0)
        ctx = {"first": "Sam"}
        assert bank.compose_selection(ids=list(selection), context=ctx) == {
            "text": "Welcome back, Sam. Sam listens well. Sam asks questions."
        }

    def test_compose_texts(self, bank):
        assert bank.compose_selection(texts=["{{first}} reads.", ""], context={"first": "Sam"}) == {"text": "Sam reads."}

    def test_compose_rejects_non_list(self, bank, join_store):
        t = join_store.create(text="{{first}} reads.")
        with pytest.raises(ValidationError):
            bank.compose_selection(ids=str(t["id"]))
        with pytest.raises(ValidationError):
            bank.compose_selection(texts="{{first}} reads.")

    def test_default_categories_match_seed_labels(self, bank):
        assert {"id": "self-regulation", "label": "Self Regulation"} in bank.categories()


class TestDrafting:
    def test_generate_fallback_on_error(self, bank, raising_ai):
        result = bank.generate(subject="Math", level="E")
        assert result["text"].startswith("{{first}} showed steady growth in Math")
        assert result["level"] == "E"
        assert result["emoji"] == "🟢"
        assert raising_ai.calls == 1

    def test_generate_uses_reply(self, join_store, canned_ai):
        bank = CommentBank(join_store, ai=canned_ai('```json\n{"text": " {{first}} shines. "}\n```'))
        assert bank.generate(target_level="NS") == {"text": "{{first}} shines.", "level": "NS", "emoji": "🔴"}

    def test_suggest_dedupes(self, join_store, canned_ai):
        bank = CommentBank(join_store, ai=canned_ai('{"suggestions": ["A.", "A.", " ", "B."]}'))
        assert bank.suggest(partial_text="Sam")["suggestions"] == ["A.", "B."]

    def test_suggest_fallback(self, bank):
        suggestions = bank.suggest(partial_text="Great work.")["suggestions"]
        assert len(suggestions) == 6
        assert all(s.startswith("Great work. ") for s in suggestions)

    def test_compose_ai_learning_fallback(self, bank):
        result = bank.compose_ai(kind="rephrase", student={"first": "Sam", "flags": {"ell": True}},
                                 context={"mode": "learning"}, text="Sam works hard.")
        assert result["text"].startswith("{{First}} has shown steady progress this term.")
        assert "With targeted language supports" in result["text"]

    def test_compose_ai_subject_sections(self, join_store, canned_ai):
        bank = CommentBank(join_store, ai=canned_ai("Opening line.\n\nEvidence line.\n\nNext line.\n\nEnd one.\n\nEnd two."))
        result = bank.compose_ai(kind="generate", context={"mode": "subject", "subject": "Math"}, settings={})
        assert result == {
            "opener": "Opening line.",
            "evidence": "Evidence line.",
            "nextSteps": "Next line.",
            "conclusion": "End one.\n\nEnd two.",
        }

    def test_compose_email_generate(self, bank):
        result = bank.compose_email(kind="generate", student={"first": "Sam"}, topic="Concern", tone="Direct")
        assert result["subject"] == "Support plan for Sam"
        assert result["body"].startswith("Hello, a quick update about Sam.")
        assert result["body"].endswith("{{teacher_name}}")

    def test_compose_email_condense(self, bank):
        result = bank.compose_email(kind="condense", subject="  Hi   there ", body="One. Two! Three? Four. Five.")
        assert result == {"subject": "Hi there", "body": "One. Two. Three. Four."}

    def test_compose_email_proofread(self, bank):
        result = bank.compose_email(kind="proofread", subject="Update", body="Hello  there ,\n friend")
        assert result["body"] == "Hello there, friend"

    def test_first_sentences(self):
        assert first_sentences("", 3) == ""
        assert first_sentences("Only one", 3) == "Only one."


class TestHelpers:
    def test_fill_matches_seeded_alias(self):
        assert fill_template("{{student_first}} did well.", {"student_first": "Sam"}) == "Sam did well."

    def test_levels_mapping(self, bank):
        mapping = bank.levels_mapping()
        assert mapping["levels"] == ["E", "G", "S", "NS", "NextSteps", "END"]
        assert mapping["emoji"]["END"] == "🏁"

    def test_categories_from_settings(self, bank):
        assert bank.categories()[0] == {"id": "responsibility", "label": "Responsibility"}
