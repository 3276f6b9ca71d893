"""
Classroom Hub API Routes
========================

All API route blueprints for the comment bank service.

Usage:
    from classroom_hub.routes import register_routes
    register_routes(app, comment_bank, settings)
"""
from .comments_routes import comments_bp
from .comments_extra_routes import comments_extra_bp
from .settings_routes import settings_bp


def register_routes(app, comment_bank, settings):
    """Register all route blueprints with the Flask app."""

    # Shared services for the request handlers
    app.extensions['classroom_hub'] = {
        'comment_bank': comment_bank,
        'settings': settings,
    }

    app.register_blueprint(comments_bp)
    app.register_blueprint(comments_extra_bp)
    app.register_blueprint(settings_bp)


__all__ = [
    'register_routes',
    'comments_bp',
    'comments_extra_bp',
    'settings_bp',
]
