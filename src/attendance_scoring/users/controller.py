from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    """Session login for local use.

    In deployment the session cookie comes from the surrounding app, which
    signs it with the same ``SECRET_KEY``; ``DEV_LOGIN`` must then be off.
    """
    users = container.users_repo

    @app.route("/api/v1/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True) or {}
        try:
            user_id = require_non_empty(body.get("userId"), "userId")
            user = users.get_by_id(user_id)
            if not user:
                raise AuthenticationError("Unknown user")
        except DomainError as e:
            return jsonify({"success": False, "error": str(e)}), e.status_code

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["role"] = user.role.value
        logger.info("dev login user=%s role=%s", user.user_id, user.role.value)
        return jsonify({"success": True, "data": {"userId": user.user_id, "role": user.role.value}})

    @app.route("/api/v1/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
