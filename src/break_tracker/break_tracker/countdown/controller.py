from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..core.constants import MAX_HISTORY_LIMIT
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def current_user_id() -> int:
        return int(session.get("user_id") or current_app.config["DEFAULT_USER_ID"])

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400

        return wrapper

    @app.route("/api/countdown", endpoint="api_countdown")
    def api_countdown():
        snap = container.countdown_service.snapshot(
            current_user_id(), now=container.clock(), channel="api", notify_alerts=False
        )
        return jsonify({"success": True, **snap.to_dict()})

    @app.route("/api/reminders", endpoint="api_reminders")
    def api_reminders():
        items = container.countdown_service.reminders(current_user_id(), now=container.clock())
        return jsonify(
            {
                "success": True,
                "reminders": [
                    {"due_at": r.due_at.isoformat(), "title": r.title, "body": r.body} for r in items
                ],
            }
        )

    @app.route("/api/breaks/<key>/start", methods=["POST"], endpoint="api_break_start")
    @json_errors
    def api_break_start(key: str):
        state = container.break_service.start_break(current_user_id(), key, now=container.clock())
        return jsonify({"success": True, "active_break": state.to_dict()})

    @app.route("/api/breaks/end", methods=["POST"], endpoint="api_break_end")
    @json_errors
    def api_break_end():
        entry = container.break_service.end_break(current_user_id(), now=container.clock())
        return jsonify({"success": True, "key": entry.key.value, "duration_seconds": entry.duration_seconds})

    @app.route("/api/breaks/active", endpoint="api_break_active")
    def api_break_active():
        state = container.break_service.get_active(current_user_id())
        return jsonify({"success": True, "active_break": state.to_dict() if state else None})

    @app.route("/api/breaks/log", endpoint="api_break_log")
    def api_break_log():
        limit = max(1, min(request.args.get("limit", type=int) or 15, MAX_HISTORY_LIMIT))
        return jsonify({"success": True, "items": container.break_service.history_ui(current_user_id(), limit=limit)})

    @app.route("/api/settings", methods=["GET", "POST"], endpoint="api_settings")
    @json_errors
    def api_settings():
        user_id = current_user_id()
        if request.method == "POST":
            container.schedule_service.save_settings(user_id=user_id, data=request.get_json(silent=True) or {})
        schedule = container.schedule_service.effective_config(user_id=user_id, work_date=container.clock().date())
        return jsonify({"success": True, "schedule": schedule.to_dict()})

    @app.route("/api/daily-shifts/<day>", methods=["GET", "POST"], endpoint="api_daily_shift")
    @json_errors
    def api_daily_shift(day: str):
        try:
            shift_date = parse_iso_date(day)
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD") from None

        user_id = current_user_id()
        if request.method == "POST":
            container.schedule_service.save_daily_shift(
                user_id=user_id,
                shift_date=shift_date,
                data=request.get_json(silent=True) or {},
            )
        schedule = container.schedule_service.effective_config(user_id=user_id, work_date=shift_date)
        return jsonify({"success": True, "date": shift_date.isoformat(), "schedule": schedule.to_dict()})
