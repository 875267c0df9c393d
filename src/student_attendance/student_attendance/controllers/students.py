from __future__ import annotations

from collections import defaultdict

from flask import Flask, request

from ..container import Container
from .responses import detail_to_dict, json_errors, ok, student_to_dict, summary_to_dict


def register(app: Flask, container: Container) -> None:
    students = container.student_service
    attendance = container.attendance_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @json_errors("Failed to fetch students")
    def students_list():
        active = students.list_active()
        by_student = defaultdict(list)
        for r in attendance.list_records():
            by_student[r.student_id].append(r)
        return ok([student_to_dict(s, by_student.get(s.student_id, [])) for s in active])

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @json_errors("Failed to create student")
    def students_create():
        data = request.get_json(silent=True) or {}
        student = students.create_student(data.get("name"))
        return ok(student_to_dict(student, []), status=201)

    @app.route("/api/students/overview", methods=["GET"], endpoint="students_overview")
    @json_errors("Failed to fetch students")
    def students_overview():
        """List page: sessions this month, present today, can mark present."""
        return ok([summary_to_dict(s) for s in attendance.student_overview()])

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="students_get")
    @json_errors("Failed to fetch student")
    def students_get(student_id: str):
        student = students.get_student(student_id)
        records = attendance.list_records(student_id=student.student_id)
        return ok(student_to_dict(student, records))

    @app.route("/api/students/<student_id>/detail", methods=["GET"], endpoint="students_detail")
    @json_errors("Failed to fetch student")
    def students_detail(student_id: str):
        detail = attendance.student_detail(student_id, month=request.args.get("month") or None)
        return ok(detail_to_dict(detail))

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @json_errors("Failed to update student")
    def students_update(student_id: str):
        data = request.get_json(silent=True) or {}
        student = students.rename_student(student_id, data.get("name"))
        return ok(student_to_dict(student, attendance.list_records(student_id=student_id)))

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @json_errors("Failed to delete student")
    def students_delete(student_id: str):
        student = students.delete_student(student_id)
        return ok(
            {"id": student.student_id, "deletedAt": student.deleted_at.isoformat()},
            message="Student deleted successfully",
        )
