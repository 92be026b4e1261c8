"""
Repositories package: narrow data-access objects over a SQLAlchemy session
"""

from .attendance_repo import AttendanceRecordRepo, AttendanceSummaryRepo
from .grade_repo import GradeRepo, ExamResultRepo
from .enrollment_repo import EnrollmentRepo
from .academic_repo import AcademicRepo, AssignmentRepo

class Repositories:
    """Bundle of repositories sharing one session"""

    def __init__(self, session):
        self.session = session
        self.attendance_records = AttendanceRecordRepo(session)
        self.attendance_summaries = AttendanceSummaryRepo(session)
        self.grades = GradeRepo(session)
        self.exam_results = ExamResultRepo(session)
        self.enrollments = EnrollmentRepo(session)
        self.academic = AcademicRepo(session)
        self.assignments = AssignmentRepo(session)

__all__ = [
    'Repositories', 'AttendanceRecordRepo', 'AttendanceSummaryRepo', 'GradeRepo',
    'ExamResultRepo', 'EnrollmentRepo', 'AcademicRepo', 'AssignmentRepo'
]
