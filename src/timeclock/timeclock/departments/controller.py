from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_user_id, login_required, payload, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments")
    @login_required
    def api_departments():
        return jsonify(payload([d.to_dict() for d in service.list_departments()]))

    @app.route("/api/departments/permitted", methods=["GET"], endpoint="api_departments_permitted")
    @login_required
    def api_departments_permitted():
        return jsonify(payload([d.to_dict() for d in service.list_permitted_departments(current_user_id())]))

    @app.route("/api/departments", methods=["POST"], endpoint="api_create_department")
    @admin_required
    def api_create_department():
        body = request.get_json(silent=True) or {}
        result = service.create_department(current_user_id(), body.get("name") or "", body.get("info"))
        return respond(result)

    @app.route("/api/departments/<int:department_id>", methods=["PATCH"], endpoint="api_update_department")
    @login_required
    def api_update_department(department_id: int):
        body = request.get_json(silent=True) or {}
        return respond(service.update_department(current_user_id(), department_id, body.get("name") or ""))

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="api_delete_department")
    @admin_required
    def api_delete_department(department_id: int):
        return respond(service.delete_department(current_user_id(), department_id))

    @app.route("/api/departments/<int:department_id>/employees", methods=["GET"], endpoint="api_department_employees")
    @login_required
    def api_department_employees(department_id: int):
        result = service.view_department_employees(current_user_id(), department_id)
        return respond(result, [m.to_dict() for m in result.data or []])

    @app.route("/api/departments/<int:department_id>/employees", methods=["POST"], endpoint="api_add_employee")
    @login_required
    def api_add_employee(department_id: int):
        body = request.get_json(silent=True) or {}
        result = service.add_employee_to_department(
            current_user_id(),
            department_id,
            body.get("employeeId"),
            body.get("role") or "MEMBER",
            body.get("rate"),
            body.get("position"),
        )
        return respond(result)

    @app.route(
        "/api/departments/<int:department_id>/employees/<int:employee_id>/role",
        methods=["PATCH"],
        endpoint="api_update_employee_role",
    )
    @login_required
    def api_update_employee_role(department_id: int, employee_id: int):
        body = request.get_json(silent=True) or {}
        return respond(service.update_employee_role(current_user_id(), department_id, employee_id, body.get("role") or ""))

    @app.route(
        "/api/departments/<int:department_id>/employees/<int:employee_id>",
        methods=["DELETE"],
        endpoint="api_remove_employee",
    )
    @login_required
    def api_remove_employee(department_id: int, employee_id: int):
        return respond(service.remove_employee_from_department(current_user_id(), department_id, employee_id))

    @app.route("/api/memberships/<int:membership_id>", methods=["DELETE"], endpoint="api_remove_membership")
    @login_required
    def api_remove_membership(membership_id: int):
        return respond(service.remove_membership(current_user_id(), membership_id))
