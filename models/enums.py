"""
Closed enumerations for status and category fields
"""

import enum

class AttendanceStatus(enum.Enum):
    PRESENT = 'PRESENT'
    ABSENT = 'ABSENT'
    LATE = 'LATE'
    EXCUSED = 'EXCUSED'

class ClassType(enum.Enum):
    REGULAR = 'REGULAR'
    PRACTICAL = 'PRACTICAL'
    TUTORIAL = 'TUTORIAL'

class ExamType(enum.Enum):
    MIDTERM = 'MIDTERM'
    FINAL_EXAM = 'FINAL_EXAM'
    INTERNAL = 'INTERNAL'
    PRACTICAL = 'PRACTICAL'

class ExamResultStatus(enum.Enum):
    PENDING = 'PENDING'
    PASS = 'PASS'
    FAIL = 'FAIL'
    WITHHELD = 'WITHHELD'

class EnrollmentStatus(enum.Enum):
    ACTIVE = 'ACTIVE'
    COMPLETED = 'COMPLETED'
    SUSPENDED = 'SUSPENDED'
    DROPPED = 'DROPPED'

class SectionEnrollmentStatus(enum.Enum):
    ACTIVE = 'ACTIVE'
    TRANSFERRED = 'TRANSFERRED'
    DROPPED = 'DROPPED'

class Role(enum.Enum):
    ADMIN = 'ADMIN'
    PROFESSOR = 'PROFESSOR'
    STUDENT = 'STUDENT'
