"""
Database models package for the Academic Metrics Engine
"""

from .user import Professor
from .academic import Course, AcademicYear, Semester, Subject, Section, Exam
from .student import Student, StudentEnrollment, SectionEnrollment
from .assignments import ProfessorSectionAssignment
from .attendance import AttendanceRecord, AttendanceSummary
from .marks import ExamResult, Grade

__all__ = [
    'Professor', 'Course', 'AcademicYear', 'Semester', 'Subject', 'Section', 'Exam',
    'Student', 'StudentEnrollment', 'SectionEnrollment', 'ProfessorSectionAssignment',
    'AttendanceRecord', 'AttendanceSummary', 'ExamResult', 'Grade'
]
