from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_user_id, login_required, payload, respond
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    def _week_start():
        raw = request.args.get("weekStart")
        return parse_iso_date(raw) if raw else None

    @app.route("/api/schedules/conflicts", methods=["GET"], endpoint="api_schedule_conflicts")
    @login_required
    def api_schedule_conflicts():
        try:
            week_start = _week_start()
        except ValueError:
            return jsonify(payload(error="weekStart must be YYYY-MM-DD")), 400
        report = service.check_user_conflicts(current_user_id(), week_start=week_start)
        return jsonify(payload(report.to_dict()))

    @app.route("/api/schedules/<int:department_id>", methods=["GET"], endpoint="api_schedule")
    @login_required
    def api_schedule(department_id: int):
        try:
            week_start = _week_start()
        except ValueError:
            return jsonify(payload(error="weekStart must be YYYY-MM-DD")), 400
        return respond(service.get_schedule(current_user_id(), department_id, week_start=week_start))
