"""
Unit tests for attendance marking and attendance summaries
"""

import unittest
from datetime import date
from unittest import mock

from database import db
from models import AttendanceRecord, AttendanceSummary, ProfessorSectionAssignment, Section
from models.enums import AttendanceStatus
from services.attendance_service import summarize_attendance
from tests.base import MetricsTestCase
from utils.exceptions import AuthorizationError, ComputationSkipped, NotFoundError, ValidationError

class TestSummarizeAttendance(unittest.TestCase):

    def record(self, status):
        return AttendanceRecord(status=status)

    def test_empty_record_set(self):
        self.assertEqual(summarize_attendance([]), (0, 0, 0, 0.0))

    def test_percentage_is_rounded_to_two_places(self):
        records = [self.record(AttendanceStatus.PRESENT)] * 2 + [self.record(AttendanceStatus.ABSENT)]
        self.assertEqual(summarize_attendance(records), (3, 2, 1, 66.67))

    def test_late_and_excused_count_only_towards_total(self):
        records = [
            self.record(AttendanceStatus.PRESENT),
            self.record(AttendanceStatus.LATE),
            self.record(AttendanceStatus.EXCUSED),
            self.record(AttendanceStatus.ABSENT),
        ]
        self.assertEqual(summarize_attendance(records), (4, 1, 1, 25.0))

class TestMarkAttendance(MetricsTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_student('CSE001')
        self.bob = self.add_student('CSE002')
        self.carol = self.add_student('CSE003')

    def mark(self, entries, day=date(2024, 8, 1), **kwargs):
        params = dict(professor_id=self.prof.id, section_id=self.section.id, subject_id=self.subject1.id)
        params.update(kwargs)
        return self.services().coordinator.mark_attendance(
            params['professor_id'], params['section_id'], params['subject_id'], day, entries
        )

    def summary_for(self, student):
        return AttendanceSummary.query.filter_by(student_id=student.id, subject_id=self.subject1.id,
                                                 academic_year_id=self.year.id).first()

    def test_summary_matches_records(self):
        """Attendance percentage equals present/total over all marks in scope"""
        for day, status in [(1, 'PRESENT'), (2, 'ABSENT'), (3, 'PRESENT'), (5, 'PRESENT')]:
            self.mark([{'student_id': self.alice.id, 'status': status}], day=date(2024, 8, day))

        summary = self.summary_for(self.alice)
        self.assertEqual(summary.total_classes, 4)
        self.assertEqual(summary.present_classes, 3)
        self.assertEqual(summary.absent_classes, 1)
        self.assertEqual(summary.attendance_percentage, 75.0)
        self.assertEqual(summary.from_date, date(2024, 8, 1))
        self.assertEqual(summary.to_date, date.today())

    def test_remarking_same_day_updates_existing_record(self):
        self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}])
        self.mark([{'student_id': self.alice.id, 'status': 'ABSENT'}])

        records = AttendanceRecord.query.filter_by(student_id=self.alice.id).all()
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].status, AttendanceStatus.ABSENT)
        self.assertEqual(self.summary_for(self.alice).total_classes, 1)
        self.assertEqual(self.summary_for(self.alice).attendance_percentage, 0.0)

    def test_datetime_input_is_keyed_by_day(self):
        self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], day='2024-08-01T09:00:00')
        self.mark([{'student_id': self.alice.id, 'status': 'ABSENT'}], day='2024-08-01T15:30:00')

        self.assertEqual(AttendanceRecord.query.filter_by(student_id=self.alice.id).count(), 1)

    def test_duplicate_entries_in_batch_last_write_wins(self):
        result = self.mark([
            {'student_id': self.alice.id, 'status': 'PRESENT'},
            {'student_id': self.alice.id, 'status': 'ABSENT'},
        ])

        self.assertEqual(len(result['marked']), 1)
        record = AttendanceRecord.query.filter_by(student_id=self.alice.id).one()
        self.assertEqual(record.status, AttendanceStatus.ABSENT)

    def test_batch_partial_failure(self):
        outsider = self.add_student('CSE999', enrolled=False)

        result = self.mark([
            {'student_id': self.alice.id, 'status': 'PRESENT'},
            {'student_id': self.bob.id, 'status': 'ABSENT'},
            {'student_id': outsider.id, 'status': 'PRESENT'},
            {'student_id': self.carol.id, 'status': 'PRESENT'},
        ])

        self.assertEqual(len(result['marked']), 3)
        self.assertEqual(result['errors'], [
            {'student_id': outsider.id, 'error': 'Student not enrolled in this section'}
        ])
        self.assertEqual(AttendanceRecord.query.count(), 3)
        self.assertIsNone(AttendanceRecord.query.filter_by(student_id=outsider.id).first())

    def test_malformed_entries_are_reported_not_fatal(self):
        result = self.mark([
            {'student_id': self.alice.id, 'status': 'MAYBE'},
            {'student_id': 'abc', 'status': 'PRESENT'},
            'not-an-entry',
            {'student_id': self.bob.id, 'status': 'present'},
        ])

        self.assertEqual([record.student_id for record in result['marked']], [self.bob.id])
        self.assertEqual(len(result['errors']), 3)

    def test_one_recompute_per_student(self):
        aggregator_cls = 'services.attendance_service.AttendanceAggregator.recompute_summary'
        with mock.patch(aggregator_cls, autospec=True, side_effect=lambda self, *args: None) as recompute:
            self.mark([
                {'student_id': self.alice.id, 'status': 'PRESENT'},
                {'student_id': self.bob.id, 'status': 'PRESENT'},
                {'student_id': self.alice.id, 'status': 'ABSENT'},
            ])

        touched = sorted(call.args[1] for call in recompute.call_args_list)
        self.assertEqual(touched, sorted([self.alice.id, self.bob.id]))

    def test_requires_attendance_permission(self):
        self.assignment.can_mark_attendance = False
        db.session.commit()

        with self.assertRaises(AuthorizationError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}])
        self.assertEqual(AttendanceRecord.query.count(), 0)

    def test_requires_assignment_for_subject(self):
        with self.assertRaises(AuthorizationError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], subject_id=self.subject2.id)

    def test_section_wide_assignment_does_not_cover_subjects(self):
        db.session.add(ProfessorSectionAssignment(professor_id=self.prof.id, section_id=self.section.id))
        db.session.commit()

        with self.assertRaises(AuthorizationError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], subject_id=self.subject2.id)
        with self.assertRaises(ValidationError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], subject_id=None)
        self.assertEqual(AttendanceRecord.query.count(), 0)

    def test_unknown_section(self):
        with self.assertRaises(NotFoundError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], section_id=9999)

    def test_invalid_batch_envelope(self):
        with self.assertRaises(ValidationError):
            self.mark([])
        with self.assertRaises(ValidationError):
            self.mark([{'student_id': self.alice.id, 'status': 'PRESENT'}], day='01/08/2024')

    def test_summary_not_persisted_without_enrollment_for_year(self):
        other_year_section = self._section_in_new_year()
        services = self.services()
        services.repos.attendance_records.add(AttendanceRecord(
            student_id=self.alice.id, subject_id=self.subject1.id, section_id=other_year_section.id,
            academic_year_id=other_year_section.academic_year_id, enrollment_id=1,
            date=date(2025, 8, 1), status=AttendanceStatus.PRESENT, marked_by=self.prof.id
        ))

        with self.assertRaises(ComputationSkipped) as ctx:
            services.attendance_aggregator.recompute_summary(
                self.alice.id, self.subject1.id, other_year_section.academic_year_id
            )

        self.assertEqual(ctx.exception.result.total_classes, 1)
        self.assertEqual(ctx.exception.result.attendance_percentage, 100.0)
        self.assertEqual(AttendanceSummary.query.count(), 0)

    def _section_in_new_year(self):
        from models import AcademicYear
        year = AcademicYear(year='2025-26', start_date=date(2025, 7, 1), end_date=date(2026, 6, 30))
        db.session.add(year)
        db.session.flush()
        section = Section(course_id=self.course.id, semester_id=self.semester1.id,
                          academic_year_id=year.id, name='A', code='CSE-S1-A-25')
        db.session.add(section)
        db.session.commit()
        return section

class TestAttendanceReads(MetricsTestCase):

    def setUp(self):
        super().setUp()
        self.alice = self.add_student('CSE001')
        self.bob = self.add_student('CSE002')
        coordinator = self.services().coordinator
        for day, alice_status, bob_status in [(1, 'PRESENT', 'ABSENT'), (2, 'PRESENT', 'PRESENT'),
                                              (3, 'ABSENT', 'ABSENT')]:
            coordinator.mark_attendance(self.prof.id, self.section.id, self.subject1.id, date(2024, 8, day), [
                {'student_id': self.alice.id, 'status': alice_status},
                {'student_id': self.bob.id, 'status': bob_status},
            ])

    def test_section_stats(self):
        stats = self.services().attendance.get_section_attendance_stats(self.section.id)

        by_roll = {row['student']['roll_number']: row for row in stats}
        self.assertEqual(by_roll['CSE001']['total_classes'], 3)
        self.assertEqual(by_roll['CSE001']['present'], 2)
        self.assertEqual(by_roll['CSE001']['attendance_percentage'], 66.67)
        self.assertEqual(by_roll['CSE002']['absent'], 2)
        self.assertEqual(by_roll['CSE002']['attendance_percentage'], 33.33)

    def test_student_attendance(self):
        data = self.services().attendance.get_student_attendance(self.alice.id)

        self.assertEqual(len(data['records']), 3)
        self.assertEqual(data['records'][0]['date'], '2024-08-03')
        self.assertEqual(len(data['summaries']), 1)
        self.assertEqual(data['summaries'][0]['attendance_percentage'], 66.67)

    def test_student_attendance_semester_filter(self):
        data = self.services().attendance.get_student_attendance(self.alice.id, semester_id=self.semester2.id)
        self.assertEqual(data, {'records': [], 'summaries': []})

    def test_no_data_is_empty_not_error(self):
        student = self.add_student('CSE003')
        data = self.services().attendance.get_student_attendance(student.id)
        self.assertEqual(data, {'records': [], 'summaries': []})

    def test_students_without_attendance_for_day(self):
        carol = self.add_student('CSE003')
        data = self.services().attendance.get_section_attendance(
            self.section.id, subject_id=self.subject1.id, attendance_date=date(2024, 8, 1)
        )

        self.assertEqual(len(data['records']), 2)
        self.assertEqual([student['id'] for student in data['students_without_attendance']], [carol.id])

if __name__ == '__main__':
    unittest.main()
