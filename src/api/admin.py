from flask import Blueprint, jsonify, request

from src.api.common import error_boundary, get_services, request_data

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


@admin_bp.route("/login", methods=["POST"])
@error_boundary("Admin login failed")
def login():
    data = request_data()
    admin = get_services().users.authenticate_admin(
        data.get("email"), data.get("password")
    )
    return jsonify({"success": True, "admin": admin.to_json()})


@admin_bp.route("/courses", methods=["GET"])
@error_boundary("Failed to fetch courses")
def list_courses():
    courses = get_services().catalog.list_courses()
    return jsonify({"success": True, "courses": [c.to_json() for c in courses]})


@admin_bp.route("/courses", methods=["POST"])
@error_boundary("Failed to create course")
def create_course():
    course = get_services().catalog.create_course(
        request_data(), thumbnail=request.files.get("thumbnail")
    )
    return jsonify({"success": True, "course": course.to_json()}), 201


@admin_bp.route("/courses/<course_id>", methods=["PUT"])
@error_boundary("Failed to update course")
def update_course(course_id):
    course = get_services().catalog.update_course(
        course_id, request_data(), thumbnail=request.files.get("thumbnail")
    )
    return jsonify({"success": True, "course": course.to_json()})


@admin_bp.route("/courses/<course_id>", methods=["DELETE"])
@error_boundary("Failed to delete course")
def delete_course(course_id):
    get_services().catalog.delete_course(course_id)
    return jsonify({"success": True, "message": "Course deleted successfully"})


@admin_bp.route("/courses/<course_id>/videos", methods=["POST"])
@error_boundary("Failed to add video")
def add_video(course_id):
    video = get_services().catalog.add_video(
        course_id, request_data(), video_file=request.files.get("video")
    )
    return jsonify({"success": True, "video": video.to_json()}), 201


@admin_bp.route("/courses/<course_id>/videos/<video_id>", methods=["PUT"])
@error_boundary("Failed to update video")
def update_video(course_id, video_id):
    video = get_services().catalog.update_video(
        course_id, video_id, request_data(), video_file=request.files.get("video")
    )
    return jsonify({"success": True, "video": video.to_json()})


@admin_bp.route("/courses/<course_id>/videos/<video_id>", methods=["DELETE"])
@error_boundary("Failed to delete video")
def delete_video(course_id, video_id):
    get_services().catalog.delete_video(course_id, video_id)
    return jsonify({"success": True, "message": "Video deleted successfully"})


@admin_bp.route("/stats", methods=["GET"])
@error_boundary("Failed to fetch stats")
def stats():
    stats = get_services().stats()
    return jsonify({"success": True, "stats": stats.model_dump(by_alias=True)})
