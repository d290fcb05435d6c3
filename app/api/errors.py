from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from app.exceptions import InputTooLargeError, ServiceError
from app.logging.logger import Log


def error_response(kind: str, message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": {"kind": kind, "message": message}}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError) -> tuple[Response, int]:
        Log.info(f"Request failed: {exc.kind} ({exc.status_code})")
        response, status = error_response(exc.kind, exc.message, exc.status_code)
        retry_after = getattr(exc, "retry_after_seconds", None)
        if retry_after is not None:
            response.headers["Retry-After"] = str(retry_after)
        return response, status

    @app.errorhandler(RequestEntityTooLarge)
    def handle_upload_too_large(exc: RequestEntityTooLarge) -> tuple[Response, int]:
        Log.info("Upload rejected: request body too large")
        return error_response(
            InputTooLargeError.kind,
            "File is too large. Please upload a smaller document.",
            InputTooLargeError.status_code,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException) -> tuple[Response, int]:
        status = exc.code or 500
        kind = (exc.name or "http_error").lower().replace(" ", "_")
        return error_response(kind, exc.description or kind, status)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception) -> tuple[Response, int]:
        Log.exception(f"Unhandled error: {type(exc).__name__}")
        return error_response("internal_error", ServiceError.default_message, 500)

    @app.after_request
    def disable_caching(response: Response) -> Response:
        response.headers["Cache-Control"] = "no-store"
        return response
