"""
Attendance repositories
Data access for AttendanceRecord and AttendanceSummary
"""

from sqlalchemy import case, func

from models.attendance import AttendanceRecord, AttendanceSummary
from models.academic import Subject
from models.enums import AttendanceStatus
from models.student import Student, StudentEnrollment

class AttendanceRecordRepo:
    """Raw attendance marks"""

    def __init__(self, session):
        self.session = session

    def find_for_day(self, student_id, subject_id, section_id, day):
        return self.session.query(AttendanceRecord).filter_by(
            student_id=student_id,
            subject_id=subject_id,
            section_id=section_id,
            date=day
        ).first()

    def add(self, record):
        self.session.add(record)
        self.session.flush()
        return record

    def list_in_scope(self, student_id, subject_id, academic_year_id):
        return self.session.query(AttendanceRecord).filter_by(
            student_id=student_id,
            subject_id=subject_id,
            academic_year_id=academic_year_id
        ).order_by(AttendanceRecord.date.asc()).all()

    def list_for_student(self, student_id, subject_id=None, semester_id=None, academic_year_id=None):
        query = self.session.query(AttendanceRecord)\
            .join(Subject, Subject.id == AttendanceRecord.subject_id)\
            .filter(AttendanceRecord.student_id == student_id)

        if subject_id:
            query = query.filter(AttendanceRecord.subject_id == subject_id)
        if academic_year_id:
            query = query.filter(AttendanceRecord.academic_year_id == academic_year_id)
        if semester_id:
            query = query.join(StudentEnrollment, StudentEnrollment.id == AttendanceRecord.enrollment_id)\
                .filter(StudentEnrollment.semester_id == semester_id)

        return query.order_by(AttendanceRecord.date.desc(), Subject.code.asc()).all()

    def list_for_section(self, section_id, subject_id=None, day=None, academic_year_id=None):
        query = self.session.query(AttendanceRecord)\
            .join(Student, Student.id == AttendanceRecord.student_id)\
            .filter(AttendanceRecord.section_id == section_id)

        if subject_id:
            query = query.filter(AttendanceRecord.subject_id == subject_id)
        if academic_year_id:
            query = query.filter(AttendanceRecord.academic_year_id == academic_year_id)
        if day:
            query = query.filter(AttendanceRecord.date == day)

        return query.order_by(AttendanceRecord.date.desc(), Student.name.asc()).all()

    def section_stats(self, section_id, academic_year_id=None, subject_id=None):
        """Per-student (student, total, present, absent) counts for a section"""
        present = func.sum(case((AttendanceRecord.status == AttendanceStatus.PRESENT, 1), else_=0))
        absent = func.sum(case((AttendanceRecord.status == AttendanceStatus.ABSENT, 1), else_=0))

        query = self.session.query(
            Student,
            func.count(AttendanceRecord.id),
            present,
            absent
        ).join(AttendanceRecord, AttendanceRecord.student_id == Student.id)\
            .filter(AttendanceRecord.section_id == section_id)

        if academic_year_id:
            query = query.filter(AttendanceRecord.academic_year_id == academic_year_id)
        if subject_id:
            query = query.filter(AttendanceRecord.subject_id == subject_id)

        return query.group_by(Student.id).order_by(Student.roll_number.asc()).all()

class AttendanceSummaryRepo:
    """Derived attendance rollups"""

    def __init__(self, session):
        self.session = session

    def get(self, student_id, subject_id, academic_year_id, for_update=False):
        query = self.session.query(AttendanceSummary).filter_by(
            student_id=student_id,
            subject_id=subject_id,
            academic_year_id=academic_year_id
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def add(self, summary):
        self.session.add(summary)
        self.session.flush()
        return summary

    def list_for_student(self, student_id, subject_id=None, semester_id=None, academic_year_id=None):
        query = self.session.query(AttendanceSummary).filter(AttendanceSummary.student_id == student_id)

        if subject_id:
            query = query.filter(AttendanceSummary.subject_id == subject_id)
        if academic_year_id:
            query = query.filter(AttendanceSummary.academic_year_id == academic_year_id)
        if semester_id:
            query = query.join(StudentEnrollment, StudentEnrollment.id == AttendanceSummary.enrollment_id)\
                .filter(StudentEnrollment.semester_id == semester_id)

        return query.order_by(AttendanceSummary.subject_id.asc()).all()
