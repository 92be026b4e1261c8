"""
Grades API routes
Grade writes, grading sheets and SGPA/CGPA summaries
"""

from flask import Blueprint, g, request

from models.enums import Role
from routes.auth import acting_professor_id, ensure_student_scope, get_services, role_required, success_response
from utils.exceptions import AuthorizationError, ValidationError
from utils.validators import optional_id, require_id

grades_bp = Blueprint('grades', __name__)

@grades_bp.route('', methods=['POST'])
@role_required(Role.PROFESSOR)
def upsert_grade():
    """Create or update a grade"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    grade, created = get_services().coordinator.upsert_grade(
        acting_professor_id(payload),
        payload.get('exam_result_id'),
        payload.get('subject_id'),
        payload.get('marks_obtained')
    )

    if created:
        return success_response(grade.to_dict(), "Grade created successfully", 201)
    return success_response(grade.to_dict(), "Grade updated successfully")

@grades_bp.route('/<int:grade_id>', methods=['DELETE'])
@role_required(Role.PROFESSOR)
def delete_grade(grade_id):
    """Delete a grade"""
    payload = request.get_json(silent=True) or {}
    result = get_services().coordinator.delete_grade(grade_id, acting_professor_id(payload))
    return success_response({'exam_result': result.to_dict()}, "Grade deleted successfully")

@grades_bp.route('/students/<int:student_id>/summary', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR, Role.STUDENT)
def grades_summary(student_id):
    """SGPA per semester and CGPA of a student"""
    ensure_student_scope(student_id)
    data = get_services().metrics.get_student_grades_summary(student_id)
    return success_response(data, "Grades summary retrieved successfully")

@grades_bp.route('/students/<int:student_id>/cgpa/recompute', methods=['POST'])
@role_required(Role.ADMIN)
def recompute_cgpa(student_id):
    """Recompute and persist the CGPA of a student"""
    cgpa = get_services().coordinator.recompute_student_cgpa(student_id)
    return success_response({'student_id': student_id, 'cgpa': cgpa}, "CGPA recomputed")

@grades_bp.route('/professors/<int:professor_id>', methods=['GET'])
@role_required(Role.ADMIN, Role.PROFESSOR)
def professor_grades(professor_id):
    """Grades visible to a professor through their section assignments"""
    if g.identity.role == Role.PROFESSOR and g.identity.user_id != professor_id:
        raise AuthorizationError("Professors may only view their own grades")

    data = get_services().grades.get_professor_grades(
        professor_id,
        section_id=optional_id(request.args.get('section_id'), 'section_id'),
        subject_id=optional_id(request.args.get('subject_id'), 'subject_id'),
        exam_id=optional_id(request.args.get('exam_id'), 'exam_id')
    )
    return success_response(data, "Professor grades retrieved successfully")

@grades_bp.route('/grading-sheet', methods=['GET'])
@role_required(Role.PROFESSOR)
def grading_sheet():
    """Students of a section with their exam result for grading"""
    data = get_services().coordinator.prepare_grading_sheet(
        g.identity.user_id,
        require_id(request.args.get('section_id'), 'section_id'),
        require_id(request.args.get('subject_id'), 'subject_id'),
        require_id(request.args.get('exam_id'), 'exam_id')
    )
    return success_response(data, "Students for grading retrieved successfully")
