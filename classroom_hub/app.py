#!/usr/bin/env python3
"""
Classroom Hub - Comment Bank Service
====================================
Run: python3 -m classroom_hub.app
Then call: http://localhost:3000/api/comments
"""
import logging

from flask import Flask
from flask_cors import CORS
from sqlalchemy import create_engine

from classroom_hub.config import Config, HOST, PORT, DEBUG
from classroom_hub.routes import register_routes
from classroom_hub.services.ai_service import TextGenerator
from classroom_hub.services.comment_bank import CommentBank
from classroom_hub.services.errors import StorageShapeUnsupported
from classroom_hub.services.settings_service import SettingsProvider
from classroom_hub.services.template_store import TemplateStore

logger = logging.getLogger(__name__)


def open_store(engine, config):
    """Probe the database; create an empty schema of the configured shape if none exists."""
    try:
        return TemplateStore(engine, emoji_map=config.level_emoji)
    except StorageShapeUnsupported:
        logger.info("No comment template tables found; creating '%s' schema", config.schema_shape)
        TemplateStore.create_schema(engine, config.schema_shape)
        return TemplateStore(engine, emoji_map=config.level_emoji)


def create_app(config=None, engine=None, ai=None, settings=None):
    config = config or Config()
    app = Flask(__name__)
    CORS(app)

    # ══════════════════════════════════════════════════════════════
    # STORAGE
    # ══════════════════════════════════════════════════════════════
    if engine is None:
        engine = create_engine(config.database_url, pool_pre_ping=True, future=True)
    store = open_store(engine, config)

    # ══════════════════════════════════════════════════════════════
    # SERVICES
    # ══════════════════════════════════════════════════════════════
    ai = ai or TextGenerator.from_config(config)
    settings = settings or SettingsProvider(config.settings_file)
    comment_bank = CommentBank(store, ai=ai, settings=settings, emoji_map=config.level_emoji)

    register_routes(app, comment_bank, settings)
    app.config['CLASSROOM_HUB'] = config.to_dict()
    return app


# ══════════════════════════════════════════════════════════════
# MAIN
# ══════════════════════════════════════════════════════════════

if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print()
    print("+" + "=" * 50 + "+")
    print("|  Classroom Hub - Comment Bank                    |")
    print("+" + "=" * 50 + "+")
    print(f"|  API: http://localhost:{PORT}/api/comments".ljust(51) + "|")
    print("|  Press Ctrl+C to stop                            |")
    print("+" + "=" * 50 + "+")
    print()

    create_app().run(host=HOST, port=PORT, debug=DEBUG)
