from typing import Any, Dict, Optional
from uuid import uuid4

from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS
from passlib.context import CryptContext
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from src.api.admin import admin_bp
from src.api.common import SERVICES_KEY
from src.api.user import user_bp
from src.core import config
from src.core.errors import AppError, PayloadTooLargeError, handle_exception
from src.core.logging import api_logger, get_logger
from src.core.security import build_password_context, pwd_context
from src.models.store import CourseStore, UserStore, create_stores
from src.services import build_services
from src.services.uploads import UploadManager
from src.services.user_service import demo_users, seed_users

logger = get_logger("app")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "UPLOAD_DIR": config.UPLOAD_DIR,
    "MAX_UPLOAD_MB": config.MAX_UPLOAD_MB,
    "STORE_BACKEND": config.STORE_BACKEND,
    "BCRYPT_ROUNDS": config.BCRYPT_ROUNDS,
    "SEED_DEMO_USERS": config.SEED_DEMO_USERS,
    "CORS_ALLOWED_ORIGINS": config.CORS_ALLOWED_ORIGINS,
}


def _password_context(rounds: int) -> CryptContext:
    if rounds == config.BCRYPT_ROUNDS:
        return pwd_context
    return build_password_context(rounds)


def create_app(
    settings: Optional[Dict[str, Any]] = None,
    user_store: Optional[UserStore] = None,
    course_store: Optional[CourseStore] = None,
):
    """Build the admin API.

    Stores are created here once per app unless supplied by the caller, and
    reach the request handlers through ``app.extensions``.
    """
    app = Flask(__name__)
    app.config.update(DEFAULT_SETTINGS)
    app.config.update(settings or {})
    app.config["JSON_AS_ASCII"] = False
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_MB"] * 1024 * 1024

    origins = app.config["CORS_ALLOWED_ORIGINS"]
    CORS(app, origins="*" if "*" in origins else origins)

    if user_store is None or course_store is None:
        default_users, default_courses = create_stores(app.config["STORE_BACKEND"])
        user_store = user_store or default_users
        course_store = course_store or default_courses

    context = _password_context(app.config["BCRYPT_ROUNDS"])
    if app.config["SEED_DEMO_USERS"]:
        seed_users(user_store, demo_users(context))

    uploads = UploadManager(app.config["UPLOAD_DIR"])
    uploads.ensure_directories()

    app.extensions[SERVICES_KEY] = build_services(
        user_store, course_store, uploads, context=context
    )

    app.register_blueprint(admin_bp)
    app.register_blueprint(user_bp)

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "healthy"})

    @app.route(f"{config.UPLOAD_URL_PREFIX}/<path:filename>", methods=["GET"])
    def serve_upload(filename):
        return send_from_directory(uploads.root, filename)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        too_large = PayloadTooLargeError()
        return jsonify(too_large.to_dict()), too_large.status_code

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"success": False, "error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_generic_error(error: Exception):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        api_logger.log_error(error, {"path": request.path}, request_id=request_id)
        error_dict, status_code = handle_exception(error)
        return jsonify(error_dict), status_code

    logger.info(
        "Admin API ready",
        extra={"upload_dir": uploads.root, "store_backend": app.config["STORE_BACKEND"]},
    )
    return app
