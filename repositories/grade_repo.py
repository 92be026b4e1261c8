"""
Grading repositories
Data access for Grade and ExamResult
"""

from sqlalchemy import select

from models.academic import Exam
from models.marks import ExamResult, Grade
from models.student import SectionEnrollment
from models.enums import ExamResultStatus, SectionEnrollmentStatus

class GradeRepo:
    """Subject-component marks"""

    def __init__(self, session):
        self.session = session

    def get(self, grade_id):
        return self.session.get(Grade, grade_id)

    def find(self, exam_result_id, subject_id):
        return self.session.query(Grade).filter_by(
            exam_result_id=exam_result_id,
            subject_id=subject_id
        ).first()

    def list_for_result(self, exam_result_id):
        return self.session.query(Grade).filter_by(exam_result_id=exam_result_id)\
            .order_by(Grade.subject_id.asc()).all()

    def add(self, grade):
        self.session.add(grade)
        self.session.flush()
        return grade

    def delete(self, grade):
        self.session.delete(grade)
        self.session.flush()

    def list_visible_to(self, section_ids, subject_ids, exam_id=None):
        """Grades of students actively enrolled in any of the given sections"""
        if not section_ids:
            return []

        enrolled = select(SectionEnrollment.student_id).where(
            SectionEnrollment.section_id.in_(section_ids),
            SectionEnrollment.status == SectionEnrollmentStatus.ACTIVE
        )

        query = self.session.query(Grade)\
            .join(ExamResult, ExamResult.id == Grade.exam_result_id)\
            .join(Exam, Exam.id == ExamResult.exam_id)\
            .filter(ExamResult.student_id.in_(enrolled))

        if subject_ids:
            query = query.filter(Grade.subject_id.in_(subject_ids))
        if exam_id:
            query = query.filter(ExamResult.exam_id == exam_id)

        return query.order_by(Exam.exam_date.desc(), ExamResult.student_id.asc(), Grade.subject_id.asc()).all()

class ExamResultRepo:
    """Per-student exam aggregates"""

    def __init__(self, session):
        self.session = session

    def get(self, exam_result_id, for_update=False):
        query = self.session.query(ExamResult).filter(ExamResult.id == exam_result_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find(self, exam_id, student_id):
        return self.session.query(ExamResult).filter_by(exam_id=exam_id, student_id=student_id).first()

    def create_pending(self, exam_id, student_id):
        result = ExamResult(exam_id=exam_id, student_id=student_id, status=ExamResultStatus.PENDING)
        self.session.add(result)
        self.session.flush()
        return result

    def list_graded_with_semester(self, student_id):
        """(ExamResult, Exam) pairs with a non-null grade value"""
        return self.session.query(ExamResult, Exam)\
            .join(Exam, Exam.id == ExamResult.exam_id)\
            .filter(ExamResult.student_id == student_id, ExamResult.grade.isnot(None))\
            .order_by(Exam.semester_id.asc(), ExamResult.id.asc())\
            .all()
