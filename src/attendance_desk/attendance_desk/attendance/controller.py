from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_utc
from ..core.enums import LateDecision
from ..core.exceptions import GatewayError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    sheet = container.sheet_service

    def _parse_date(value: str) -> date:
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

    def _employee_filter():
        raw = request.args.get("employees")
        if not raw:
            return None
        return [e.strip() for e in raw.split(",") if e.strip()]

    def _sheet_body(employee_ids=None) -> dict:
        pending = sheet.pending_prompt
        return {
            "date": sheet.day.strftime("%Y-%m-%d"),
            "rows": [r.to_dict() for r in sheet.rows(employee_ids)],
            "total_minutes": sheet.total_minutes(employee_ids),
            "late_prompt": pending.to_dict() if pending else None,
        }

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(GatewayError)
    def _gateway_error(e: GatewayError):
        return jsonify({"success": False, "message": str(e)}), 502

    @app.route("/attendance/sheet", methods=["GET"], endpoint="attendance_sheet")
    def attendance_sheet():
        date_s = request.args.get("date")
        if date_s:
            sheet.select_day(_parse_date(date_s))
        sheet.ensure_loaded()
        return jsonify(_sheet_body(_employee_filter()))

    @app.route("/attendance/sheet/<employee_id>", methods=["PATCH"], endpoint="attendance_edit_row")
    def attendance_edit_row(employee_id: str):
        data = request.get_json(silent=True) or {}

        if "status" in data:
            sheet.set_status(employee_id, data["status"])
        if "note" in data:
            sheet.set_note(employee_id, data["note"])
        if "checkOut" in data:
            sheet.set_check_out(employee_id, data["checkOut"])
        if "checkIn" in data:
            sheet.set_check_in(employee_id, data["checkIn"])

        pending = sheet.pending_prompt
        return jsonify({
            "row": sheet.row(employee_id).to_dict(),
            "late_prompt": pending.to_dict() if pending else None,
        })

    @app.route("/attendance/sheet/<employee_id>", methods=["DELETE"], endpoint="attendance_reset_row")
    def attendance_reset_row(employee_id: str):
        sheet.discard_row(employee_id)
        return jsonify({"row": sheet.row(employee_id).to_dict()})

    @app.route("/attendance/sheet/late-decision", methods=["POST"], endpoint="attendance_late_decision")
    def attendance_late_decision():
        data = request.get_json(silent=True) or {}
        raw = data.get("decision")
        if raw is None:
            decision = None
        else:
            try:
                decision = LateDecision(raw)
            except ValueError:
                raise ValidationError("decision must be 'present' or 'late'")

        status = sheet.resolve_late_prompt(decision)
        return jsonify({"success": True, "status": status.value if status else None})

    @app.route("/attendance/sheet/<employee_id>/mark", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark(employee_id: str):
        sheet.mark_one(employee_id)
        return jsonify({"success": True, "row": sheet.row(employee_id).to_dict()})

    @app.route("/attendance/sheet/save-all", methods=["POST"], endpoint="attendance_save_all")
    def attendance_save_all():
        saved = sheet.save_all()
        body = _sheet_body()
        body.update({"success": True, "saved": saved})
        return jsonify(body)

    @app.route("/attendance/report/me", methods=["GET"], endpoint="attendance_my_month")
    def attendance_my_month():
        today = today_utc()
        data = container.report_service.month_stats(
            year=request.args.get("year", today.year),
            month=request.args.get("month", today.month),
        )
        return jsonify(data.to_dict())

    @app.route("/attendance/report/monthly", methods=["GET"], endpoint="attendance_monthly_report")
    def attendance_monthly_report():
        today = today_utc()
        report = container.report_service.monthly_report(
            branch=request.args.get("branch", "all"),
            year=request.args.get("year", today.year),
            month=request.args.get("month", today.month),
        )
        return jsonify(report.to_dict())
