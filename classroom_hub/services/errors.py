"""
Error types raised by the comment bank services.
Routes map these to JSON error responses (see routes/comments_routes.py).
"""


class CommentBankError(Exception):
    """Base class for comment bank failures."""
    status_code = 500


class ValidationError(CommentBankError):
    """A required field was missing or empty."""
    status_code = 400


class NotFound(CommentBankError):
    """Unknown template id or category."""
    status_code = 404


class DeleteFailed(CommentBankError):
    """No row matched the id in any supported id shape."""
    status_code = 404


class StorageShapeUnsupported(CommentBankError):
    """Every storage strategy or write variant was exhausted."""
    status_code = 500
