"""
Comment bank API routes.
Handles listing, creating and deleting templates, skill/category lookups,
seeding and backfills, rendering, and AI-assisted generation.
"""
import logging

from flask import Blueprint, current_app, request, jsonify

from classroom_hub.services.comment_bank import context_from_payload
from classroom_hub.services.errors import CommentBankError, ValidationError
from classroom_hub.services.tags import normalize_level_param

logger = logging.getLogger(__name__)

comments_bp = Blueprint('comments', __name__)


def _bank():
    return current_app.extensions['classroom_hub']['comment_bank']


def _body():
    return request.get_json(silent=True) or {}


def _level_arg():
    return normalize_level_param(request.args.get('level'))


@comments_bp.errorhandler(CommentBankError)
def handle_comment_bank_error(e):
    if e.status_code >= 500:
        logger.error("Comment bank error: %s", e)
    return jsonify({"error": str(e)}), e.status_code


# ══════════════════════════════════════════════════════════════
# TEMPLATES
# ══════════════════════════════════════════════════════════════

@comments_bp.route('/api/comments', methods=['GET'])
def list_comments():
    """List templates, optionally filtered by ?level= and ?q=."""
    raw_level = (request.args.get('level') or '').strip()
    level = None if raw_level.lower() in ('', 'all') else normalize_level_param(raw_level)
    if raw_level and raw_level.lower() != 'all' and level is None:
        return jsonify([])
    return jsonify(_bank().store.list(level=level, q=request.args.get('q')))


@comments_bp.route('/api/comments', methods=['POST'])
def create_comment():
    data = _body()
    template = _bank().store.create(
        text=data.get('text'),
        subject=data.get('subject'),
        grade_band=data.get('gradeBand'),
        tags=data.get('tags'),
        level=data.get('level'),
        category=data.get('category'),
        skill_ids=data.get('skillIds'),
    )
    return jsonify(template), 201


@comments_bp.route('/api/comments', methods=['DELETE'])
def delete_comment_by_query():
    template_id = request.args.get('id')
    if not template_id:
        raise ValidationError("An id is required")
    return jsonify(_bank().store.remove(template_id))


@comments_bp.route('/api/comments/<template_id>', methods=['GET'])
def get_comment(template_id):
    return jsonify(_bank().store.get(template_id))


@comments_bp.route('/api/comments/<template_id>', methods=['DELETE'])
def delete_comment(template_id):
    return jsonify(_bank().store.remove(template_id))


@comments_bp.route('/api/comments/by-skill')
def comments_by_skill():
    """Templates for a learning skill, used by the student profile generator."""
    skill = request.args.get('skill') or request.args.get('skillId')
    if not skill:
        raise ValidationError("A skill is required")
    return jsonify(_bank().store.get_by_skill(skill, level=_level_arg()))


@comments_bp.route('/api/comments/by-category')
def comments_by_category():
    category = request.args.get('category') or ''
    return jsonify(_bank().store.get_by_category(category, level=_level_arg()))


@comments_bp.route('/api/comments/summary')
def comments_summary():
    return jsonify(_bank().store.summary())


@comments_bp.route('/api/comments/levels')
def comment_levels():
    return jsonify(_bank().levels_mapping())


@comments_bp.route('/api/comments/categories')
def comment_categories():
    """Learning-skill categories from the tenant settings."""
    return jsonify(_bank().categories())


# ══════════════════════════════════════════════════════════════
# SEEDING & BACKFILLS
# ══════════════════════════════════════════════════════════════

@comments_bp.route('/api/comments/seed/ontario-ls', methods=['POST'])
def seed_ontario():
    mode = request.args.get('mode') or _body().get('mode') or 'upsert'
    if mode not in ('upsert', 'create'):
        raise ValidationError(f"Unknown seed mode '{mode}'. Use 'upsert' or 'create'")
    return jsonify(_bank().seed_ontario(mode=mode))


@comments_bp.route('/api/comments/seed/<jurisdiction>', methods=['POST'])
def seed_jurisdiction(jurisdiction):
    return jsonify(_bank().seed_jurisdiction(jurisdiction))


@comments_bp.route('/api/comments/backfill-ontario-tags', methods=['POST'])
def backfill_ontario_tags():
    return jsonify(_bank().backfill_ontario_tags())


@comments_bp.route('/api/comments/backfill-from-dataset', methods=['POST'])
def backfill_from_dataset():
    return jsonify(_bank().backfill_from_dataset())


@comments_bp.route('/api/comments/backfill-levels', methods=['POST'])
def backfill_levels():
    return jsonify(_bank().backfill_levels())


# ══════════════════════════════════════════════════════════════
# RENDERING
# ══════════════════════════════════════════════════════════════

@comments_bp.route('/api/comments/render', methods=['POST'])
def render_comment():
    """Fill one template (by id or literal text) for a student."""
    data = _body()
    if data.get('id') is None and not data.get('text'):
        raise ValidationError("An id or text is required")
    return jsonify(_bank().render(
        template_id=data.get('id'),
        text=data.get('text'),
        context=context_from_payload(data),
    ))


@comments_bp.route('/api/comments/compose', methods=['POST'])
def compose_comment():
    """Compose selected templates in order into one comment."""
    data = _body()
    return jsonify(_bank().compose_selection(
        ids=data.get('ids'),
        texts=data.get('texts'),
        context=context_from_payload(data),
    ))


# ══════════════════════════════════════════════════════════════
# AI
# ══════════════════════════════════════════════════════════════

@comments_bp.route('/api/comments/generate', methods=['POST'])
def generate_comment():
    data = _body()
    return jsonify(_bank().generate(
        subject=data.get('subject'),
        grade_band=data.get('gradeBand'),
        tone=data.get('tone') or 'positive',
        length=data.get('length') or 'medium',
        placeholders=data.get('placeholders'),
        level=data.get('level'),
        target_level=data.get('targetLevel'),
    ))


@comments_bp.route('/api/comments/suggest', methods=['POST'])
def suggest_comments():
    data = _body()
    return jsonify(_bank().suggest(
        partial_text=data.get('partialText') or '',
        placeholders=data.get('placeholders'),
        tone=data.get('tone') or 'positive',
        subject=data.get('subject'),
        grade_band=data.get('gradeBand'),
        category=data.get('category'),
    ))
