from __future__ import annotations

from flask import Flask, request

from ..container import Container
from .responses import json_errors, ok, record_to_dict


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @json_errors("Failed to fetch attendance records")
    def attendance_list():
        records = attendance.list_records(
            student_id=request.args.get("studentId") or None,
            civil_day=request.args.get("date") or None,
            civil_month=request.args.get("month") or None,
        )
        return ok([record_to_dict(r) for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @json_errors("Failed to create/update attendance record")
    def attendance_mark():
        data = request.get_json(silent=True) or {}
        record = attendance.mark_attendance(
            data.get("studentId"),
            data.get("date"),
            bool(data.get("isAbsent", False)),
        )
        return ok(record_to_dict(record))

    @app.route("/api/attendance/today", methods=["POST"], endpoint="attendance_mark_today")
    @json_errors("Failed to create/update attendance record")
    def attendance_mark_today():
        """Mark today (local civil day) present or absent for one student."""
        data = request.get_json(silent=True) or {}
        student_id = data.get("studentId")
        if data.get("isAbsent"):
            record = attendance.mark_absent_today(student_id)
        else:
            record = attendance.mark_present_today(student_id)
        return ok(record_to_dict(record))
