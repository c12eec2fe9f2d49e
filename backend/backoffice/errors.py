from flask import jsonify
from werkzeug.exceptions import HTTPException
from backoffice.domain.exceptions import DocumentLifecycleError


def register_error_handlers(app):
    @app.errorhandler(DocumentLifecycleError)
    def handle_document_error(error):
        app.logger.info(f"{type(error).__name__}: {error}")
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        response = jsonify({
            "error": error.name,
            "message": error.description,
        })
        response.status_code = error.code
        return response
