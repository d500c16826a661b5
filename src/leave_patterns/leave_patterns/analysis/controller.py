from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_date
from ..core.exceptions import ValidationError
from ..container import Container
from .model import AnalysisWindow

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _window(data: dict) -> AnalysisWindow:
        raw = data.get("window") or {}
        if not isinstance(raw, dict):
            raise ValidationError("window must be an object with from and to dates")
        start = coerce_date(raw.get("from", raw.get("start")))
        end = coerce_date(raw.get("to", raw.get("end")))
        if start is None or end is None:
            raise ValidationError("window.from and window.to must be YYYY-MM-DD dates")
        return AnalysisWindow(start=start, end=end)

    def _events(value, field_name: str) -> list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValidationError(f"{field_name} must be a list")
        return value

    @app.route("/api/leave-patterns/analyze", methods=["POST"], endpoint="analyze_leave_patterns")
    def analyze_leave_patterns():
        try:
            data = _payload()
            employee_id = str(data.get("employee_id") or data.get("employeeId") or "").strip()
            if not employee_id:
                raise ValidationError("employee_id is required")

            service = container.leave_pattern_service
            result = service.analyze(
                employee_id,
                _events(data.get("events"), "events"),
                _window(data),
                config=service.resolve_config(data.get("config")),
            )
            return jsonify({"success": True, "result": result.to_dict()})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Leave pattern analysis failed")
            return jsonify({"success": False, "message": "Internal error while analysing leave patterns"}), 500

    @app.route("/api/leave-patterns/analyze-team", methods=["POST"], endpoint="analyze_team_leave_patterns")
    def analyze_team_leave_patterns():
        try:
            data = _payload()
            employees = data.get("employees")
            if not isinstance(employees, dict):
                raise ValidationError("employees must be an object keyed by employee id")
            records = {str(k): _events(v, f"employees.{k}") for k, v in employees.items()}

            service = container.leave_pattern_service
            results = service.analyze_team(
                records,
                _window(data),
                config=service.resolve_config(data.get("config")),
                only_flagged=bool(data.get("only_flagged", False)),
            )
            return jsonify({"success": True, "results": [r.to_dict() for r in results]})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Team leave pattern analysis failed")
            return jsonify({"success": False, "message": "Internal error while analysing leave patterns"}), 500
