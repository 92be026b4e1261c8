"""
Attendance API routes
Batch marking and attendance reads
"""

from flask import Blueprint, current_app, request

from models.enums import Role
from routes.auth import acting_professor_id, ensure_student_scope, get_services, role_required, success_response
from utils.exceptions import ValidationError
from utils.validators import optional_id, parse_day

attendance_bp = Blueprint('attendance', __name__)

@attendance_bp.route('/mark', methods=['POST'])
@role_required(Role.PROFESSOR)
def mark_attendance():
    """Mark attendance for a batch of students in a section"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    services = get_services()
    result = services.coordinator.mark_attendance(
        acting_professor_id(payload),
        payload.get('section_id'),
        payload.get('subject_id'),
        payload.get('date'),
        payload.get('entries'),
        class_type=payload.get('class_type') or 'REGULAR'
    )

    data = {
        'marked': [record.to_dict() for record in result['marked']],
        'errors': result['errors'],
        'summaries': [summary.to_dict() for summary in result['summaries']]
    }
    return success_response(data, f"Attendance marked for {len(result['marked'])} students")

@attendance_bp.route('/students/<int:student_id>', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR, Role.STUDENT)
def student_attendance(student_id):
    """Attendance records and summaries of a student"""
    ensure_student_scope(student_id)

    data = get_services().attendance.get_student_attendance(
        student_id,
        subject_id=optional_id(request.args.get('subject_id'), 'subject_id'),
        semester_id=optional_id(request.args.get('semester_id'), 'semester_id'),
        academic_year_id=optional_id(request.args.get('academic_year_id'), 'academic_year_id')
    )
    return success_response(data, "Student attendance retrieved successfully")

@attendance_bp.route('/sections/<int:section_id>/stats', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR)
def section_attendance_stats(section_id):
    """Per-student attendance statistics of a section"""
    data = get_services().attendance.get_section_attendance_stats(
        section_id,
        academic_year_id=optional_id(request.args.get('academic_year_id'), 'academic_year_id'),
        subject_id=optional_id(request.args.get('subject_id'), 'subject_id')
    )
    return success_response(data, "Section attendance statistics retrieved successfully")

@attendance_bp.route('/sections/<int:section_id>', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR)
def section_attendance(section_id):
    """Attendance records of a section, with unmarked students for a given day"""
    raw_date = request.args.get('date')
    data = get_services().attendance.get_section_attendance(
        section_id,
        subject_id=optional_id(request.args.get('subject_id'), 'subject_id'),
        attendance_date=parse_day(raw_date) if raw_date else None,
        academic_year_id=optional_id(request.args.get('academic_year_id'), 'academic_year_id')
    )
    current_app.logger.debug("Section %s attendance: %s records", section_id, len(data['records']))
    return success_response(data, "Section attendance retrieved successfully")
