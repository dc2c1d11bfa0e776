"""Health check endpoint."""

from typing import Tuple

from flask import Blueprint, Response, jsonify

from support_chat.src.data_classes import utc_timestamp


def init_health_routes() -> Blueprint:
    health_bp = Blueprint("health", __name__)

    @health_bp.route("/health", methods=["GET"])
    def health() -> Tuple[Response, int]:
        return jsonify({"status": "OK", "timestamp": utc_timestamp()}), 200

    return health_bp
