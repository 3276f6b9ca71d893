"""
Classroom Hub Services
======================

Business logic for the comment bank.

Services:
- tags: tag parsing, level extraction and category matching
- template_store: schema-tolerant template storage
- resolver: placeholder filling and snippet composition
- comment_bank: seeding, backfills and AI drafting
- ai_service: OpenAI / Anthropic text generation with fallbacks
- settings_service: tenant settings file
"""

# Services are imported directly when needed to avoid circular imports
# Example: from classroom_hub.services.template_store import TemplateStore

__all__ = [
    'tags',
    'template_store',
    'resolver',
    'comment_bank',
    'ai_service',
    'settings_service',
]
