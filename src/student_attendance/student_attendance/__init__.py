"""Student Attendance package.

Daily attendance tracking for students, per-session fee snapshots and
monthly calendar views. Organized by feature modules (students, attendance,
settings) with a thin Flask controller layer over service/repository layers.
"""
