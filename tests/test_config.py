"""
Test: Configuration, settings file and AI generator fallbacks.
"""
import json

from classroom_hub.config import Config, load_level_emoji
from classroom_hub.services.ai_service import TextGenerator, _strip_fences
from classroom_hub.services.settings_service import DEFAULT_SETTINGS, SettingsProvider
from classroom_hub.services.tags import DEFAULT_LEVEL_EMOJI


class TestLevelEmojiConfig:
    def test_default(self):
        assert Config(level_emoji_json="").level_emoji == DEFAULT_LEVEL_EMOJI

    def test_override(self):
        assert Config(level_emoji_json='{"E": "A", "G": "B"}').level_emoji == {"E": "A", "G": "B"}

    def test_bad_json_falls_back(self):
        assert load_level_emoji("{not json") == DEFAULT_LEVEL_EMOJI

    def test_non_object_falls_back(self):
        assert load_level_emoji("[1, 2]") == DEFAULT_LEVEL_EMOJI

    def test_parsed_once(self):
        config = Config(level_emoji_json='{"E": "A"}')
        config.update({"level_emoji_json": "{}"})
        assert config.level_emoji == {"E": "A"}

    def test_to_dict_hides_keys(self):
        data = Config(openai_api_key="sk-secret").to_dict()
        assert data["ai_configured"] is True
        assert "sk-secret" not in json.dumps(data)


class TestSettingsProvider:
    def test_missing_file_defaults(self, settings):
        assert settings.load() == DEFAULT_SETTINGS

    def test_corrupt_file_defaults(self, settings, settings_file):
        with open(settings_file, "w") as f:
            f.write("{oops")
        assert settings.load()["jurisdiction"] == "ontario"

    def test_reread_every_call(self, settings, settings_file):
        settings.save({"jurisdiction": "uk"})
        with open(settings_file, "w") as f:
            json.dump({"jurisdiction": "australia"}, f)
        assert settings.load()["jurisdiction"] == "australia"

    def test_ls_categories_fill_ids(self, tmp_path):
        provider = SettingsProvider(str(tmp_path / "nested" / "s.json"))
        provider.save({"lsCategories": ["Self Regulation", {"id": "org", "label": "Organization"}, {"label": ""}]})
        assert provider.ls_categories() == [
            {"id": "self-regulation", "label": "Self Regulation"},
            {"id": "org", "label": "Organization"},
        ]


class TestTextGenerator:
    def test_no_key_returns_fallback(self):
        fallback = {"text": "x"}
        assert TextGenerator(model="gpt-4o-mini").generate("prompt", fallback) is fallback

    def test_provider_by_prefix(self):
        assert TextGenerator(model="claude-haiku").provider == "anthropic"
        assert TextGenerator(model="gpt-4o").provider == "openai"

    def test_anthropic_key_required_for_claude(self):
        assert TextGenerator(openai_api_key="sk", model="claude-sonnet").available is False

    def test_raising_provider(self, raising_ai):
        fallback = {"suggestions": []}
        assert raising_ai.generate("prompt", fallback) is fallback
        assert raising_ai.complete_text("prompt", "fallback") == "fallback"

    def test_non_json_reply(self, canned_ai):
        fallback = {"text": "x"}
        assert canned_ai("Sure! Here you go.").generate("prompt", fallback) is fallback

    def test_fenced_json(self, canned_ai):
        assert canned_ai('```json\n{"a": 1}\n```', model="claude-haiku").generate("p", None) == {"a": 1}

    def test_strip_fences_plain(self):
        assert _strip_fences('  {"a": 1} ') == '{"a": 1}'

    def test_empty_text_uses_fallback(self, canned_ai):
        assert canned_ai("").complete_text("p", "fallback") == "fallback"
