from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import handle_domain_errors, payload
from ..container import Container
from ..core.constants import DEMO_ACCOUNTS
from ..core.enums import Role
from .model import User

ROLE_DESCRIPTIONS = {
    Role.TEACHER: "Mark attendance and manage classes",
    Role.STUDENT: "View your attendance records",
    Role.PARENT: "Monitor your child's attendance",
}


def register(app: Flask, container: Container) -> None:
    def _start_session(user: User):
        session.clear()
        session["user_id"] = user.id
        session["role"] = user.role.value
        session["name"] = user.name
        return jsonify(
            {
                "success": True,
                "user": {"id": user.id, "name": user.name, "email": user.email, "role": user.role.value},
                "dashboard": f"/{user.role.value}/dashboard",
            }
        )

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify(
            {
                "roles": [
                    {"id": r.value, "title": r.value.capitalize(), "description": ROLE_DESCRIPTIONS[r]} for r in Role
                ],
                "quick_login": [
                    {"role": role, "name": name, "email": email} for role, (name, email) in DEMO_ACCOUNTS.items()
                ],
                "current_user": {"id": session.get("user_id"), "role": session.get("role"), "name": session.get("name")}
                if "user_id" in session
                else None,
            }
        )

    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_domain_errors("logging in")
    def login():
        data = payload()
        user = container.account_service.resolve(
            data.get("role", ""),
            data.get("name", ""),
            data.get("email", ""),
            class_id=data.get("class_id") or None,
            grade=data.get("grade") or None,
        )
        return _start_session(user)

    @app.route("/login/quick/<role>", methods=["POST"], endpoint="quick_login")
    @handle_domain_errors("logging in")
    def quick_login(role: str):
        return _start_session(container.account_service.quick_login(role))

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
