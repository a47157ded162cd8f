from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import date_arg, handle_domain_errors, payload, role_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/teacher/attendance", methods=["POST"], endpoint="mark_attendance")
    @role_required(Role.TEACHER)
    @handle_domain_errors("marking attendance")
    def mark_attendance():
        data = payload()
        view = container.teacher_dashboard.mark(
            session["user_id"],
            student_id=data.get("student_id", ""),
            status=data.get("status", ""),
            on=date_arg(data.get("date")),
            class_id=data.get("class_id") or None,
            notes=data.get("notes") or None,
        )
        return jsonify({"success": True, "dashboard": view.as_dict()})
