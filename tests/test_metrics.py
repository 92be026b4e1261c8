"""
Unit tests for SGPA/CGPA computation
"""

import unittest

from database import db
from models import StudentEnrollment, Subject
from models.enums import EnrollmentStatus
from services.metrics_service import AcademicMetricsEngine, ZeroCreditPolicy, compute_cgpa, compute_sgpa
from tests.base import MetricsTestCase
from utils.exceptions import ValidationError
from utils.validators import round_half_up

class TestMetricFormulas(unittest.TestCase):

    def test_sgpa_is_mean_of_tenth_of_percentages(self):
        self.assertEqual(compute_sgpa([80.0, 85.0]), 8.25)
        self.assertEqual(compute_sgpa([66.666]), 6.67)

    def test_cgpa_is_credit_weighted(self):
        self.assertEqual(compute_cgpa([(8.0, 20), (9.0, 10)]), 8.33)

    def test_cgpa_of_nothing_is_none(self):
        self.assertIsNone(compute_cgpa([]))

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.675, 2), 2.68)
        self.assertEqual(round_half_up(8.125, 2), 8.13)
        self.assertEqual(round_half_up(0, 2), 0.0)

class TestAcademicMetricsEngine(MetricsTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_student('CSE001')

    def engine(self, **kwargs):
        return AcademicMetricsEngine(self.services().repos, **kwargs)

    def test_cgpa_weighting_across_semesters(self):
        """SGPA 8.0 over 20 credits and 9.0 over 10 credits gives 8.33"""
        self.add_exam_result(self.alice, self.exam1, grade=80.0)
        self.add_exam_result(self.alice, self.exam2, grade=90.0)

        cgpa = self.engine().recompute_student_cgpa(self.alice.id)
        db.session.commit()

        self.assertEqual(cgpa, 8.33)
        self.assertEqual(self.active_cgpas(self.alice), [8.33])

    def test_no_graded_results_gives_null_cgpa(self):
        self.add_exam_result(self.alice, self.exam1, grade=None)
        enrollment = StudentEnrollment.query.filter_by(student_id=self.alice.id).one()
        enrollment.cgpa = 7.5
        db.session.commit()

        self.assertIsNone(self.engine().recompute_student_cgpa(self.alice.id))
        db.session.commit()
        self.assertEqual(self.active_cgpas(self.alice), [None])

    def test_cgpa_written_to_every_active_enrollment_only(self):
        second_active = StudentEnrollment(student_id=self.alice.id, course_id=self.course.id,
                                          semester_id=self.semester2.id, academic_year_id=self.year.id)
        completed = StudentEnrollment(student_id=self.alice.id, course_id=self.course.id,
                                      semester_id=self.semester1.id, academic_year_id=self.year.id,
                                      status=EnrollmentStatus.COMPLETED, cgpa=5.0)
        db.session.add_all([second_active, completed])
        db.session.commit()
        self.add_exam_result(self.alice, self.exam1, grade=72.0)

        self.engine().recompute_student_cgpa(self.alice.id)
        db.session.commit()

        self.assertEqual(self.active_cgpas(self.alice), [7.2, 7.2])
        self.assertEqual(db.session.get(StudentEnrollment, completed.id).cgpa, 5.0)

    def test_zero_credit_semester_uses_fallback_weight(self):
        for subject in Subject.query.filter_by(semester_id=self.semester2.id):
            subject.credits = 0
        db.session.commit()
        self.add_exam_result(self.alice, self.exam1, grade=80.0)
        self.add_exam_result(self.alice, self.exam2, grade=90.0)

        with self.assertLogs('services.metrics_service', level='WARNING') as logs:
            cgpa, _ = self.engine().compute_student_metrics(self.alice.id)

        # (8.0 * 20 + 9.0 * 1) / 21
        self.assertEqual(cgpa, 8.05)
        self.assertIn('no subject credits', logs.output[0])

    def test_zero_credit_semester_excluded(self):
        for subject in Subject.query.filter_by(semester_id=self.semester2.id):
            subject.credits = 0
        db.session.commit()
        self.add_exam_result(self.alice, self.exam1, grade=80.0)
        self.add_exam_result(self.alice, self.exam2, grade=90.0)

        cgpa, semesters = self.engine(zero_credit_policy='exclude').compute_student_metrics(self.alice.id)

        self.assertEqual(cgpa, 8.0)
        self.assertEqual([entry['sgpa'] for entry in semesters], [8.0, 9.0])

    def test_zero_credit_semester_error_policy(self):
        self.add_exam_result(self.alice, self.exam2, grade=90.0)
        for subject in Subject.query.filter_by(semester_id=self.semester2.id):
            subject.credits = 0
        db.session.commit()

        with self.assertRaises(ValidationError):
            self.engine(zero_credit_policy=ZeroCreditPolicy.ERROR).compute_student_metrics(self.alice.id)

    def test_grades_summary(self):
        self.grant(self.subject2)
        coordinator = self.services().coordinator
        result = self.add_exam_result(self.alice, self.exam1)
        coordinator.upsert_grade(self.prof.id, result.id, self.subject1.id, 40)
        coordinator.upsert_grade(self.prof.id, result.id, self.subject2.id, 45)

        summary = self.services().metrics.get_student_grades_summary(self.alice.id)

        self.assertEqual(summary['cgpa'], 8.5)
        self.assertEqual(len(summary['semesters']), 1)
        semester = summary['semesters'][0]
        self.assertEqual(semester['semester_number'], 1)
        self.assertEqual(semester['sgpa'], 8.5)
        self.assertEqual(
            sorted((row['subject_name'], row['credits'], row['marks_obtained']) for row in semester['subjects']),
            [('Mathematics', 6, 45.0), ('Programming', 8, 40.0)]
        )

    def test_grades_summary_without_grades(self):
        summary = self.services().metrics.get_student_grades_summary(self.alice.id)
        self.assertEqual(summary, {'cgpa': None, 'semesters': []})

if __name__ == '__main__':
    unittest.main()
