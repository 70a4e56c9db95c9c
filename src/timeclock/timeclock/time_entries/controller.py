from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_user_id, login_required, payload, respond
from ..container import Container
from .session_state import TimeEntrySessionState


def register(app: Flask, container: Container) -> None:
    service = container.time_entry_service
    history_limit = int(app.config.get("HISTORY_LIMIT", 20))

    def _session_state(user_id: int) -> TimeEntrySessionState:
        return TimeEntrySessionState(
            service.get_current_entry(user_id),
            service.get_recent_entries(user_id, limit=history_limit),
            container.department_service.list_member_departments(user_id),
            clock=container.clock,
        )

    @app.route("/api/time-entries/dashboard", methods=["GET"], endpoint="api_time_entries_dashboard")
    @login_required
    def api_time_entries_dashboard():
        return jsonify(payload(_session_state(current_user_id()).to_dict()))

    @app.route("/api/time-entries/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def api_clock_in():
        body = request.get_json(silent=True) or {}
        user_id = current_user_id()
        state = _session_state(user_id)
        result = service.clock_in(user_id, body.get("departmentId"))
        if result.ok:
            state.clock_in(result.data)
            return respond(result, state.to_dict())
        return respond(result)

    @app.route("/api/time-entries/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def api_clock_out():
        body = request.get_json(silent=True) or {}
        user_id = current_user_id()
        state = _session_state(user_id)
        result = service.clock_out(user_id, body.get("timeEntryId") or 0)
        if result.ok:
            # Server values win over the local estimate.
            state.clock_out(result.data.time_entry_id)
            state.reload(None, [result.data if e.time_entry_id == result.data.time_entry_id else e for e in state.recent_entries])
            return respond(result, state.to_dict())
        return respond(result)
