"""
Academic structure repositories
Read access for sections, subjects, exams, semesters and teaching assignments
"""

from sqlalchemy import func

from models.academic import Exam, Section, Semester, Subject
from models.assignments import ProfessorSectionAssignment

class AcademicRepo:

    def __init__(self, session):
        self.session = session

    def get_section(self, section_id):
        return self.session.get(Section, section_id)

    def get_subject(self, subject_id):
        return self.session.get(Subject, subject_id)

    def get_exam(self, exam_id):
        return self.session.get(Exam, exam_id)

    def get_semesters(self, semester_ids):
        if not semester_ids:
            return {}
        semesters = self.session.query(Semester).filter(Semester.id.in_(semester_ids)).all()
        return {semester.id: semester for semester in semesters}

    def credits_by_semester(self, semester_ids):
        """Sum of subject credits per semester; semesters without subjects are absent"""
        if not semester_ids:
            return {}
        rows = self.session.query(Subject.semester_id, func.coalesce(func.sum(Subject.credits), 0))\
            .filter(Subject.semester_id.in_(semester_ids))\
            .group_by(Subject.semester_id)\
            .all()
        return {semester_id: int(total or 0) for semester_id, total in rows}

class AssignmentRepo:
    """Professor teaching authority"""

    def __init__(self, session):
        self.session = session

    def find_attendance_assignment(self, professor_id, section_id, subject_id):
        return self.session.query(ProfessorSectionAssignment).filter(
            ProfessorSectionAssignment.professor_id == professor_id,
            ProfessorSectionAssignment.section_id == section_id,
            ProfessorSectionAssignment.subject_id == subject_id,
            ProfessorSectionAssignment.is_active.is_(True),
            ProfessorSectionAssignment.can_mark_attendance.is_(True)
        ).first()

    def find_subject_assignment(self, professor_id, section_ids, subject_id):
        """Active assignment for the subject in any of the given sections"""
        if not section_ids:
            return None
        return self.session.query(ProfessorSectionAssignment).filter(
            ProfessorSectionAssignment.professor_id == professor_id,
            ProfessorSectionAssignment.section_id.in_(section_ids),
            ProfessorSectionAssignment.subject_id == subject_id,
            ProfessorSectionAssignment.is_active.is_(True)
        ).first()

    def list_active(self, professor_id, section_id=None, subject_id=None):
        query = self.session.query(ProfessorSectionAssignment).filter(
            ProfessorSectionAssignment.professor_id == professor_id,
            ProfessorSectionAssignment.is_active.is_(True)
        )
        if section_id:
            query = query.filter(ProfessorSectionAssignment.section_id == section_id)
        if subject_id:
            query = query.filter(ProfessorSectionAssignment.subject_id == subject_id)
        return query.order_by(ProfessorSectionAssignment.id.asc()).all()
