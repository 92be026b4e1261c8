"""
Eligibility API routes
Placement CGPA filter and attendance-based exam eligibility
"""

from flask import Blueprint, request

from models.enums import Role
from routes.auth import ensure_student_scope, get_services, role_required, success_response
from utils.exceptions import ValidationError
from utils.validators import optional_id

eligibility_bp = Blueprint('eligibility', __name__)

@eligibility_bp.route('/placement', methods=['GET'])
@role_required(Role.ADMIN)
def placement_eligibility():
    min_cgpa = request.args.get('min_cgpa')
    if min_cgpa is None:
        raise ValidationError("min_cgpa is required")
    data = get_services().eligibility.placement_eligible_students(min_cgpa)
    return success_response(data, "Eligible students retrieved successfully")

@eligibility_bp.route('/students/<int:student_id>/exams', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR, Role.STUDENT)
def exam_eligibility(student_id):
    ensure_student_scope(student_id)

    threshold = request.args.get('threshold')
    if threshold is not None:
        try:
            threshold = float(threshold)
        except ValueError:
            raise ValidationError("threshold must be a number")

    data = get_services().eligibility.exam_eligibility(
        student_id,
        academic_year_id=optional_id(request.args.get('academic_year_id'), 'academic_year_id'),
        threshold=threshold
    )
    return success_response(data, "Exam eligibility retrieved successfully")
