from flask import Blueprint, jsonify, request

from src.api.common import error_boundary, get_services, request_data

user_bp = Blueprint("user", __name__, url_prefix="/api/admin/users")


@user_bp.route("", methods=["GET"])
@error_boundary("Failed to fetch users")
def list_users():
    include_inactive = request.args.get("includeInactive", "").lower() == "true"
    users = get_services().users.list_users(include_inactive=include_inactive)
    return jsonify({"success": True, "users": [u.to_json() for u in users]})


@user_bp.route("/<user_id>", methods=["GET"])
@error_boundary("Failed to fetch user")
def get_user(user_id):
    user = get_services().users.get_user(user_id)
    return jsonify({"success": True, "user": user.to_json()})


@user_bp.route("", methods=["POST"])
@error_boundary("Failed to create user")
def create_user():
    user = get_services().users.create_user(request_data())
    return jsonify({"success": True, "user": user.to_json()}), 201


@user_bp.route("/<user_id>", methods=["PUT"])
@error_boundary("Failed to update user")
def update_user(user_id):
    user = get_services().users.update_user(user_id, request_data())
    return jsonify({"success": True, "user": user.to_json()})


@user_bp.route("/<user_id>", methods=["DELETE"])
@error_boundary("Failed to delete user")
def delete_user(user_id):
    get_services().users.delete_user(user_id)
    return jsonify({"success": True, "message": "User deactivated successfully"})
