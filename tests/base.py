"""
Shared fixtures for the test suites
"""

import unittest
from datetime import date

from app import create_app
from config import TestConfig
from database import db
from models import (
    AcademicYear, Course, Exam, ExamResult, Professor, ProfessorSectionAssignment,
    Section, SectionEnrollment, Semester, Student, StudentEnrollment, Subject
)
from models.enums import EnrollmentStatus
from services import MetricsServices

class MetricsTestCase(unittest.TestCase):
    """App with an in-memory database and a small academic structure.

    Semester 1 carries 20 credits across three subjects, semester 2 carries 10.
    Professor `prof` teaches `subject1` in `section` with attendance rights.
    """

    config_class = TestConfig

    def setUp(self):
        """Set up test fixtures"""
        self.app = self.create_test_app()
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()

        self.course = Course(name='Computer Science', code='CSE')
        self.year = AcademicYear(year='2024-25', start_date=date(2024, 7, 1),
                                 end_date=date(2025, 6, 30), is_active=True)
        db.session.add_all([self.course, self.year])
        db.session.flush()

        self.semester1 = Semester(course_id=self.course.id, number=1, code='CSE-S1')
        self.semester2 = Semester(course_id=self.course.id, number=2, code='CSE-S2')
        db.session.add_all([self.semester1, self.semester2])
        db.session.flush()

        self.subject1 = Subject(semester_id=self.semester1.id, name='Programming', code='CS101', credits=8)
        self.subject2 = Subject(semester_id=self.semester1.id, name='Mathematics', code='MA101', credits=6)
        self.subject3 = Subject(semester_id=self.semester1.id, name='Physics', code='PH101', credits=6)
        self.subject4 = Subject(semester_id=self.semester2.id, name='Data Structures', code='CS201', credits=10)
        db.session.add_all([self.subject1, self.subject2, self.subject3, self.subject4])

        self.section = Section(course_id=self.course.id, semester_id=self.semester1.id,
                               academic_year_id=self.year.id, name='A', code='CSE-S1-A')
        self.prof = Professor(employee_code='P001', name='Ada Lovelace')
        db.session.add_all([self.section, self.prof])
        db.session.flush()

        self.assignment = ProfessorSectionAssignment(
            professor_id=self.prof.id, section_id=self.section.id,
            subject_id=self.subject1.id, can_mark_attendance=True
        )
        db.session.add(self.assignment)

        self.exam1 = Exam(semester_id=self.semester1.id, name='Semester 1 Finals', max_marks=100)
        self.exam2 = Exam(semester_id=self.semester2.id, name='Semester 2 Finals', max_marks=100)
        db.session.add_all([self.exam1, self.exam2])
        db.session.commit()

    def tearDown(self):
        """Clean up after tests"""
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def create_test_app(self):
        return create_app(self.config_class)

    def services(self):
        return MetricsServices(db.session, self.app.config, self.app.extensions['metrics_locks'])

    def add_student(self, roll_number, section=None, enrolled=True, status=EnrollmentStatus.ACTIVE):
        """Student enrolled in semester 1 and placed in `section` (defaults to the fixture section)"""
        student = Student(roll_number=roll_number, name=f'Student {roll_number}')
        db.session.add(student)
        db.session.flush()

        if enrolled:
            enrollment = StudentEnrollment(
                student_id=student.id, course_id=self.course.id, semester_id=self.semester1.id,
                academic_year_id=self.year.id, status=status
            )
            db.session.add(enrollment)
            db.session.flush()
            db.session.add(SectionEnrollment(
                student_id=student.id, section_id=(section or self.section).id, enrollment_id=enrollment.id
            ))

        db.session.commit()
        return student

    def add_exam_result(self, student, exam=None, grade=None):
        result = ExamResult(exam_id=(exam or self.exam1).id, student_id=student.id,
                            grade=grade, percentage=grade)
        db.session.add(result)
        db.session.commit()
        return result

    def grant(self, subject, section=None, can_mark_attendance=True):
        assignment = ProfessorSectionAssignment(
            professor_id=self.prof.id, section_id=(section or self.section).id,
            subject_id=subject.id, can_mark_attendance=can_mark_attendance
        )
        db.session.add(assignment)
        db.session.commit()
        return assignment

    def active_cgpas(self, student):
        return [enrollment.cgpa for enrollment in StudentEnrollment.query.filter_by(
            student_id=student.id, status=EnrollmentStatus.ACTIVE
        ).all()]
