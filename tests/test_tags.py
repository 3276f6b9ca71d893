"""
Test: Tag normalizer: slugs, tag parsing, level extraction and category matching.
"""
import pytest

from classroom_hub.services.tags import (
    DEFAULT_LEVEL_EMOJI, LEVELS, CategoryTag, JurisdictionTag, LevelTag, NextStepsTag,
    OpaqueTag, OpenerTag, category_slugs, dedupe_tags, extract_level, has_category,
    infer_level_from_text, is_next_steps, is_opener, normalize_level_param, parse_tag,
    slugify, split_tags, with_level_tag,
)


class TestSlugify:
    def test_spaces(self):
        assert slugify("Self Regulation") == "self-regulation"

    def test_ampersand(self):
        assert slugify("Arts & Crafts") == "arts-and-crafts"

    def test_noise_trimmed(self):
        assert slugify("  ---Weird!!Case--- ") == "weird-case"

    def test_quotes_removed(self):
        assert slugify("Teacher’s \"Pick\"") == "teachers-pick"

    def test_none(self):
        assert slugify(None) == ""


class TestTagLists:
    def test_split_csv(self):
        assert split_tags(" learning, ontario ,,level:E ") == ["learning", "ontario", "level:E"]

    def test_split_none(self):
        assert split_tags(None) == []

    def test_dedupe_keeps_first_spelling(self):
        assert dedupe_tags(["Level:G", "ontario", "level:g", "ONTARIO"]) == ["Level:G", "ontario"]

    def test_with_level_tag_appends(self):
        assert with_level_tag(["learning"], "S") == ["learning", "level:S"]

    def test_with_level_tag_keeps_existing(self):
        assert with_level_tag(["level:E"], "S") == ["level:E"]


class TestParseTag:
    def test_level(self):
        assert parse_tag("LEVEL:nextsteps") == LevelTag("NextSteps", "LEVEL:nextsteps")

    def test_unknown_level(self):
        assert parse_tag("level:X").level is None

    def test_category(self):
        assert parse_tag("category:organization") == CategoryTag("organization", None, "category:organization")

    def test_ls_label(self):
        tag = parse_tag("ls:Independent Work")
        assert isinstance(tag, CategoryTag)
        assert tag.slug == "independent-work"
        assert tag.label == "Independent Work"

    def test_other_variants(self):
        assert isinstance(parse_tag("next-steps"), NextStepsTag)
        assert parse_tag("jur:BC") == JurisdictionTag("bc", "jur:BC")
        assert isinstance(parse_tag("United Kingdom"), JurisdictionTag)
        assert isinstance(parse_tag("opener"), OpenerTag)
        assert isinstance(parse_tag("topic:Progress"), OpaqueTag)

    def test_category_slugs(self):
        assert category_slugs(["ls:Self Regulation", "category:self-regulation", "category:initiative"]) == [
            "self-regulation", "initiative",
        ]


class TestExtractLevel:
    @pytest.mark.parametrize("level", LEVELS)
    def test_single_level_tag(self, level):
        assert extract_level({"tags": ["learning", f"level:{level}"]}) == (level, DEFAULT_LEVEL_EMOJI[level])

    def test_no_level(self):
        assert extract_level({"tags": ["learning"], "level": None}) == (None, None)

    def test_column_wins(self):
        assert extract_level({"level": "E", "tags": ["level:NS"]}) == ("E", DEFAULT_LEVEL_EMOJI["E"])

    def test_non_canonical_column_ignored(self):
        assert extract_level({"level": "excellent", "tags": ["level:S"]}) == ("S", DEFAULT_LEVEL_EMOJI["S"])

    def test_custom_emoji_map(self):
        assert extract_level({"tags": ["level:G"]}, {"G": "*"}) == ("G", "*")

    def test_http_level_param(self):
        assert normalize_level_param("nextsteps") == "NextSteps"
        assert normalize_level_param("end") == "END"
        assert normalize_level_param("bogus") is None


class TestInferLevel:
    def test_next_steps_first(self):
        assert infer_level_from_text("Sam should consistently review notes.") == "NextSteps"

    def test_ns(self):
        assert infer_level_from_text("Sam requires frequent prompting.") == "NS"

    def test_s(self):
        assert infer_level_from_text("Sam is developing routines.") == "S"

    def test_g_before_e(self):
        assert infer_level_from_text("Sam consistently shows exemplary focus.") == "G"

    def test_e(self):
        assert infer_level_from_text("Sam is an outstanding role model.") == "E"

    def test_end(self):
        assert infer_level_from_text("Best of luck next year!") == "END"

    def test_no_match(self):
        assert infer_level_from_text("Sam likes art.") is None

    def test_custom_rules(self):
        import re
        assert infer_level_from_text("great", [(re.compile("great"), "E")]) == "E"


class TestClassifiers:
    def test_ls_label_matches_slug(self):
        assert has_category(["ls:Self Regulation"], "self-regulation")

    def test_other_category(self):
        assert not has_category(["category:organization"], "responsibility")

    def test_label_argument(self):
        assert has_category(["category:independent-work"], "Independent Work")

    def test_loose_fallback(self):
        assert has_category(["ls-responsibility"], "responsibility")

    def test_empty_category(self):
        assert not has_category(["category:organization"], "")

    def test_next_steps_tag(self):
        assert is_next_steps(["level:NextSteps"], "")

    def test_next_steps_text(self):
        assert is_next_steps([], "Set a goal for each class.")

    def test_not_next_steps(self):
        assert not is_next_steps(["level:E"], "Sam is kind.")

    def test_opener(self):
        assert is_opener(["learning", "opener"])
        assert not is_opener(["learning"])
