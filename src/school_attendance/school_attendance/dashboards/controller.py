from __future__ import annotations

from flask import Flask, jsonify, redirect, request, session, url_for

from ..common.web import date_arg, error_response, handle_domain_errors, role_required
from ..container import Container
from ..core.enums import Role

DASHBOARD_ENDPOINTS = {
    Role.TEACHER: "teacher_dashboard",
    Role.STUDENT: "student_dashboard",
    Role.PARENT: "parent_dashboard",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        if "user_id" not in session:
            return error_response("Please log in to continue", 401)
        # session role was written at login from a Role, so the lookup is total
        endpoint = DASHBOARD_ENDPOINTS[Role(session["role"])]
        return redirect(url_for(endpoint, **request.args))

    @app.route("/teacher/dashboard", methods=["GET"], endpoint="teacher_dashboard")
    @role_required(Role.TEACHER)
    @handle_domain_errors("loading the teacher dashboard")
    def teacher_dashboard():
        view = container.teacher_dashboard.load(
            session["user_id"],
            on=date_arg(request.args.get("date")),
            class_id=request.args.get("class_id") or None,
        )
        return jsonify(view.as_dict())

    @app.route("/student/dashboard", methods=["GET"], endpoint="student_dashboard")
    @role_required(Role.STUDENT)
    @handle_domain_errors("loading the student dashboard")
    def student_dashboard():
        view = container.student_dashboard.load(session["user_id"], on=date_arg(request.args.get("date")))
        return jsonify(view.as_dict())

    @app.route("/parent/dashboard", methods=["GET"], endpoint="parent_dashboard")
    @role_required(Role.PARENT)
    @handle_domain_errors("loading the parent dashboard")
    def parent_dashboard():
        view = container.parent_dashboard.load(
            session["user_id"],
            on=date_arg(request.args.get("date")),
            child_id=request.args.get("child_id") or None,
        )
        return jsonify(view.as_dict())
