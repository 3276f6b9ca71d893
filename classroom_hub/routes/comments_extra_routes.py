"""
AI-assisted drafting routes for report-card comments and parent emails.
Both endpoints always answer with a usable draft, falling back to fixed text
when no AI provider is reachable.
"""
from flask import Blueprint, current_app, request, jsonify

comments_extra_bp = Blueprint('comments_extra', __name__)


def _bank():
    return current_app.extensions['classroom_hub']['comment_bank']


@comments_extra_bp.route('/api/comments-extra/compose', methods=['POST'])
def compose_with_ai():
    """Generate, rephrase, condense or proofread a comment draft."""
    data = request.get_json(silent=True) or {}
    return jsonify(_bank().compose_ai(
        kind=data.get('kind') or 'generate',
        student=data.get('student'),
        settings=data.get('settings'),
        context=data.get('context'),
        text=data.get('text'),
        draft=data.get('draft'),
    ))


@comments_extra_bp.route('/api/comments-extra/compose-email', methods=['POST'])
def compose_email():
    """Draft a parent email: {subject, body}."""
    data = request.get_json(silent=True) or {}
    return jsonify(_bank().compose_email(
        kind=data.get('kind') or 'generate',
        student=data.get('student'),
        topic=data.get('topic'),
        tone=data.get('tone'),
        subject=data.get('subject'),
        body=data.get('body'),
    ))
