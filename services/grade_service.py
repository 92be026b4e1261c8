"""
Grade service for the Academic Metrics Engine
Exam result recomputation, grade writes with teaching-authority checks, grading reads
"""

import logging

from models.enums import ExamResultStatus
from models.marks import Grade
from utils.exceptions import AuthorizationError, NotFoundError, ValidationError
from utils.validators import validate_marks

logger = logging.getLogger(__name__)

def derive_exam_status(grade_count, percentage, pass_percentage):
    """PENDING without grades, otherwise PASS or FAIL against the pass percentage"""
    if grade_count == 0:
        return ExamResultStatus.PENDING
    if percentage >= pass_percentage:
        return ExamResultStatus.PASS
    return ExamResultStatus.FAIL

class ExamResultAggregator:
    """Rebuilds ExamResult totals and status from its Grade rows"""

    def __init__(self, repos, pass_percentage=50.0):
        self.repos = repos
        self.pass_percentage = pass_percentage

    def recompute(self, exam_result_id):
        result = self.repos.exam_results.get(exam_result_id, for_update=True)
        if not result:
            raise NotFoundError("Exam result not found")

        grades = self.repos.grades.list_for_result(exam_result_id)

        if grades:
            total = sum(grade.marks_obtained for grade in grades)
            max_marks = result.exam.max_marks
            percentage = total / max_marks * 100 if max_marks else 0.0
            result.total_marks_obtained = total
            result.percentage = percentage
            result.grade = percentage
        else:
            # Nothing graded: the result drops out of SGPA
            result.total_marks_obtained = None
            result.percentage = None
            result.grade = None

        result.status = derive_exam_status(len(grades), result.percentage, self.pass_percentage)
        self.repos.session.flush()

        logger.debug("Exam result %s recomputed: %s grades, total=%s, status=%s",
                     exam_result_id, len(grades), result.total_marks_obtained, result.status.value)
        return result

class GradeService:
    """Grade writes and grading reads for professors"""

    def __init__(self, repos):
        self.repos = repos

    def _authorize(self, professor_id, student_id, subject_id, action="grade"):
        section_ids = self.repos.enrollments.active_section_ids(student_id)
        assignment = self.repos.assignments.find_subject_assignment(professor_id, section_ids, subject_id)
        if not assignment:
            raise AuthorizationError(f"Professor is not authorized to {action} this student for this subject")
        return assignment

    def upsert_grade(self, professor_id, exam_result_id, subject_id, marks_obtained):
        """Create or update the grade for (exam result, subject). Returns (grade, created)."""
        result = self.repos.exam_results.get(exam_result_id)
        if not result:
            raise NotFoundError("Exam result not found")

        subject = self.repos.academic.get_subject(subject_id)
        if not subject:
            raise NotFoundError("Subject not found")

        is_valid, message = validate_marks(marks_obtained, result.exam.max_marks)
        if not is_valid:
            raise ValidationError(message)
        marks_obtained = float(marks_obtained)

        self._authorize(professor_id, result.student_id, subject_id)

        grade = self.repos.grades.find(exam_result_id, subject_id)
        created = grade is None
        if created:
            grade = self.repos.grades.add(Grade(
                exam_result_id=exam_result_id,
                subject_id=subject_id,
                marks_obtained=marks_obtained
            ))
        else:
            grade.marks_obtained = marks_obtained
            self.repos.session.flush()

        logger.info("Grade %s by professor %s: result=%s subject=%s marks=%s",
                    "created" if created else "updated", professor_id, exam_result_id, subject_id, marks_obtained)
        return grade, created

    def delete_grade(self, grade_id, professor_id):
        """Delete a grade. Returns the parent exam result."""
        grade = self.repos.grades.get(grade_id)
        if not grade:
            raise NotFoundError("Grade not found")

        result = grade.exam_result
        self._authorize(professor_id, result.student_id, grade.subject_id, action="delete grades of")

        self.repos.grades.delete(grade)
        logger.info("Grade %s deleted by professor %s (result=%s)", grade_id, professor_id, result.id)
        return result

    def get_professor_grades(self, professor_id, section_id=None, subject_id=None, exam_id=None):
        assignments = self.repos.assignments.list_active(professor_id, section_id=section_id, subject_id=subject_id)
        if not assignments:
            raise AuthorizationError("Professor has no section assignments")

        section_ids = sorted({assignment.section_id for assignment in assignments})
        subject_ids = sorted({assignment.subject_id for assignment in assignments if assignment.subject_id})
        grades = self.repos.grades.list_visible_to(section_ids, subject_ids, exam_id=exam_id)

        return {
            'assignments': [assignment.to_dict() for assignment in assignments],
            'grades': [
                dict(grade.to_dict(),
                     student_id=grade.exam_result.student_id,
                     exam_id=grade.exam_result.exam_id)
                for grade in grades
            ]
        }

    def prepare_grading_sheet(self, professor_id, section_id, subject_id, exam_id):
        """Students of a section with their result for an exam.

        Students without a result get a PENDING one created.
        """
        assignments = self.repos.assignments.list_active(professor_id, section_id=section_id, subject_id=subject_id)
        if not assignments:
            raise AuthorizationError("Professor is not assigned to this section/subject")

        exam = self.repos.academic.get_exam(exam_id)
        if not exam:
            raise NotFoundError("Exam not found")

        sheet = []
        for student in self.repos.enrollments.list_section_students(section_id):
            result = self.repos.exam_results.find(exam_id, student.id)
            if not result:
                result = self.repos.exam_results.create_pending(exam_id, student.id)
            current = self.repos.grades.find(result.id, subject_id)
            sheet.append({
                'student': student.to_dict(),
                'exam_result': result.to_dict(),
                'current_grade': current.to_dict() if current else None
            })

        return {'exam': exam.to_dict(), 'students': sheet}
