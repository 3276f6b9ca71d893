"""
Shared test fixtures for the comment bank.
Every database is a fresh SQLite file under tmp_path, built with
TemplateStore.create_schema for the storage shape under test.
Zero network calls: the AI generator is a stub that raises on every call.
"""
import pytest
from sqlalchemy import create_engine

from classroom_hub.app import create_app
from classroom_hub.config import Config
from classroom_hub.services.ai_service import TextGenerator
from classroom_hub.services.comment_bank import CommentBank
from classroom_hub.services.settings_service import SettingsProvider
from classroom_hub.services.template_store import SCHEMA_SHAPES, TemplateStore


class RaisingGenerator(TextGenerator):
    """Looks configured, but every provider call blows up."""

    def __init__(self):
        super().__init__(openai_api_key="test-key", model="gpt-4o-mini")
        self.calls = 0

    def _complete(self, system, prompt, temperature, json_mode):
        self.calls += 1
        raise RuntimeError("provider unavailable")


class CannedGenerator(TextGenerator):
    """Returns a fixed raw reply for every call."""

    def __init__(self, reply, model="gpt-4o-mini"):
        super().__init__(openai_api_key="test-key", anthropic_api_key="test-key", model=model)
        self.reply = reply
        self.prompts = []

    def _complete(self, system, prompt, temperature, json_mode):
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def make_engine(tmp_path):
    """Factory: an engine over an empty schema of the given shape."""
    def _make(shape="join"):
        engine = create_engine(f"sqlite:///{tmp_path / (shape + '.db')}", future=True)
        TemplateStore.create_schema(engine, shape)
        return engine
    return _make


@pytest.fixture(params=SCHEMA_SHAPES)
def store(request, make_engine):
    """A TemplateStore for each storage shape."""
    return TemplateStore(make_engine(request.param))


@pytest.fixture
def join_store(make_engine):
    return TemplateStore(make_engine("join"))


@pytest.fixture
def tags_store(make_engine):
    return TemplateStore(make_engine("tags"))


@pytest.fixture
def legacy_store(make_engine):
    return TemplateStore(make_engine("legacy"))


@pytest.fixture
def settings_file(tmp_path):
    return str(tmp_path / "settings.json")


@pytest.fixture
def settings(settings_file):
    return SettingsProvider(settings_file)


@pytest.fixture
def raising_ai():
    return RaisingGenerator()


@pytest.fixture
def canned_ai():
    """Factory: a generator that always replies with the given raw text."""
    return CannedGenerator


@pytest.fixture
def bank(join_store, raising_ai, settings):
    return CommentBank(join_store, ai=raising_ai, settings=settings)


@pytest.fixture
def app(make_engine, raising_ai, settings, settings_file):
    config = Config(level_emoji_json="", settings_file=settings_file)
    app = create_app(config=config, engine=make_engine("join"), ai=raising_ai, settings=settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
