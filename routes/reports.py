"""
Report download routes
Excel exports of attendance statistics and grade summaries
"""

from flask import Blueprint, current_app, make_response, request

from models.enums import Role
from routes.auth import ensure_student_scope, get_services, role_required
from services.excel_export_service import ExcelExportService
from utils.exceptions import NotFoundError
from utils.validators import optional_id

reports_bp = Blueprint('reports', __name__)

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

def xlsx_response(workbook, filename):
    response = make_response(ExcelExportService.workbook_to_bytes(workbook))
    response.headers['Content-Type'] = XLSX_MIMETYPE
    response.headers['Content-Disposition'] = f'attachment; filename={filename}'
    return response

@reports_bp.route('/sections/<int:section_id>/attendance.xlsx', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR)
def section_attendance_export(section_id):
    services = get_services()
    section = services.repos.academic.get_section(section_id)
    if not section:
        raise NotFoundError("Section not found")

    stats = services.attendance.get_section_attendance_stats(
        section_id,
        academic_year_id=optional_id(request.args.get('academic_year_id'), 'academic_year_id'),
        subject_id=optional_id(request.args.get('subject_id'), 'subject_id')
    )
    workbook = ExcelExportService.export_section_attendance_stats(
        section, stats, current_app.config['ATTENDANCE_THRESHOLD']
    )
    return xlsx_response(workbook, f'attendance_{section.code}.xlsx')

@reports_bp.route('/students/<int:student_id>/grades.xlsx', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR, Role.STUDENT)
def student_grades_export(student_id):
    ensure_student_scope(student_id)

    services = get_services()
    student = services.repos.enrollments.get_student(student_id)
    if not student:
        raise NotFoundError("Student not found")

    summary = services.metrics.get_student_grades_summary(student_id)
    workbook = ExcelExportService.export_grades_summary(student, summary)
    return xlsx_response(workbook, f'grades_{student.roll_number}.xlsx')
