import time
from functools import wraps
from typing import Any, Dict
from uuid import uuid4

from flask import current_app, jsonify, make_response, request
from werkzeug.exceptions import RequestEntityTooLarge

from src.core.errors import AppError, BadRequestError, PayloadTooLargeError, handle_exception
from src.core.logging import api_logger
from src.services import AdminServices

SERVICES_KEY = "admin_services"


def get_services() -> AdminServices:
    return current_app.extensions[SERVICES_KEY]


def request_data() -> Dict[str, Any]:
    """Form fields for multipart/urlencoded requests, otherwise the JSON body."""
    if request.mimetype in ("multipart/form-data", "application/x-www-form-urlencoded"):
        return request.form.to_dict()
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def error_boundary(failure_message: str):
    """Render AppErrors as JSON and turn anything else into a logged, generic 500."""

    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            started = time.perf_counter()
            request_id = request.headers.get("X-Request-ID") or str(uuid4())
            try:
                response = make_response(f(*args, **kwargs))
            except RequestEntityTooLarge:
                error = PayloadTooLargeError()
                response = make_response(jsonify(error.to_dict()), error.status_code)
            except AppError as e:
                response = make_response(jsonify(e.to_dict()), e.status_code)
            except Exception as e:
                api_logger.log_error(
                    e,
                    {"path": request.path, "method": request.method},
                    request_id=request_id,
                )
                error_dict, status_code = handle_exception(e, failure_message)
                response = make_response(jsonify(error_dict), status_code)

            api_logger.log_request(
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - started) * 1000,
                request_id=request_id,
            )
            response.headers["X-Request-ID"] = request_id
            return response

        return decorated

    return decorator
