"""Error taxonomy shared by routes and services.

Services raise these; the handlers registered in ``register_error_handlers``
turn them into ``{"error": ...}`` JSON responses so nothing escapes a request
as an unhandled fault.
"""
from flask import jsonify
from werkzeug.exceptions import HTTPException


class WordGroupsError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'error': self.message}


class Unauthenticated(WordGroupsError):
    status_code = 401
    default_message = 'Not authenticated'


class Forbidden(WordGroupsError):
    status_code = 403
    default_message = 'Not authorized to access this group'


class NotFound(WordGroupsError):
    status_code = 404
    default_message = 'Not found'


class ValidationError(WordGroupsError):
    status_code = 400
    default_message = 'Invalid request data'

    def __init__(self, message=None, fields=None):
        super().__init__(message)
        self.fields = dict(fields or {})

    def to_dict(self):
        data = super().to_dict()
        if self.fields:
            data['fields'] = self.fields
        return data


class InternalFailure(WordGroupsError):
    status_code = 500


def register_error_handlers(app):
    from wordgroups import db

    @app.errorhandler(WordGroupsError)
    def handle_wordgroups_error(exc):
        if exc.status_code >= 500:
            app.logger.error(f"[error] {exc.message}")
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify({'error': exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        app.logger.exception(f"[error] unhandled {type(exc).__name__}")
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500
