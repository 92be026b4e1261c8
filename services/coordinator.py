"""
Consistency coordinator for the Academic Metrics Engine

Every mutation runs as one explicit sequence inside a single unit of work,
while holding the keyed locks of the aggregates it recomputes:

    mark attendance  -> records -> one summary recompute per touched student
    upsert grade     -> grade -> exam result recompute -> CGPA recompute
    delete grade     -> grade -> exam result recompute -> CGPA recompute

Nothing is committed until the whole chain has succeeded.
"""

import logging

from models.enums import ClassType
from services.attendance_service import entry_student_ids, parse_entries
from utils.db_helpers import unit_of_work
from utils.exceptions import ComputationSkipped, NotFoundError
from utils.validators import parse_day, parse_enum, require_id

logger = logging.getLogger(__name__)

def attendance_key(student_id, subject_id, academic_year_id):
    return ('attendance', student_id, subject_id, academic_year_id)

def exam_result_key(exam_result_id):
    return ('exam_result', exam_result_id)

def student_key(student_id):
    return ('student', student_id)

class ConsistencyCoordinator:

    def __init__(self, repos, locks, attendance_service, attendance_aggregator,
                 grade_service, exam_result_aggregator, metrics_engine):
        self.repos = repos
        self.session = repos.session
        self.locks = locks
        self.attendance_service = attendance_service
        self.attendance_aggregator = attendance_aggregator
        self.grade_service = grade_service
        self.exam_result_aggregator = exam_result_aggregator
        self.metrics_engine = metrics_engine

    def mark_attendance(self, professor_id, section_id, subject_id, attendance_date, entries,
                        class_type=ClassType.REGULAR):
        """Mark a batch and refresh the summaries of every student touched.

        Returns {'marked': [AttendanceRecord], 'errors': [...], 'summaries': [AttendanceSummary]}.
        Summaries skipped for lack of an enrollment are returned unpersisted.
        """
        professor_id = require_id(professor_id, 'professor_id')
        section_id = require_id(section_id, 'section_id')
        subject_id = require_id(subject_id, 'subject_id')
        attendance_date = parse_day(attendance_date)
        class_type = parse_enum(class_type, ClassType, 'class_type')
        entries = parse_entries(entries)

        section = self.repos.academic.get_section(section_id)
        if not section:
            raise NotFoundError("Section not found")

        keys = [attendance_key(student_id, subject_id, section.academic_year_id)
                for student_id in entry_student_ids(entries)]

        with self.locks.hold_all(keys):
            with unit_of_work(self.session):
                section, marked, errors = self.attendance_service.mark_attendance(
                    professor_id, section_id, subject_id, attendance_date, entries, class_type=class_type
                )

                summaries = []
                for student_id in sorted({record.student_id for record in marked}):
                    try:
                        summaries.append(self.attendance_aggregator.recompute_summary(
                            student_id, subject_id, section.academic_year_id
                        ))
                    except ComputationSkipped as skipped:
                        logger.warning(skipped.message)
                        summaries.append(skipped.result)

        logger.info("Attendance marked by professor %s for section %s subject %s on %s: %s marked, %s errors",
                    professor_id, section_id, subject_id, attendance_date, len(marked), len(errors))
        return {'marked': marked, 'errors': errors, 'summaries': summaries}

    def _student_of_result(self, exam_result_id):
        result = self.repos.exam_results.get(exam_result_id)
        if not result:
            raise NotFoundError("Exam result not found")
        return result.student_id

    def upsert_grade(self, professor_id, exam_result_id, subject_id, marks_obtained):
        """Write a grade and refresh its exam result and the student's CGPA. Returns (grade, created)."""
        professor_id = require_id(professor_id, 'professor_id')
        exam_result_id = require_id(exam_result_id, 'exam_result_id')
        subject_id = require_id(subject_id, 'subject_id')

        student_id = self._student_of_result(exam_result_id)

        with self.locks.hold_all([exam_result_key(exam_result_id), student_key(student_id)]):
            with unit_of_work(self.session):
                grade, created = self.grade_service.upsert_grade(
                    professor_id, exam_result_id, subject_id, marks_obtained
                )
                self.exam_result_aggregator.recompute(exam_result_id)
                self.metrics_engine.recompute_student_cgpa(student_id)

        return grade, created

    def delete_grade(self, grade_id, professor_id):
        """Delete a grade and refresh its exam result and the student's CGPA. Returns the exam result."""
        grade_id = require_id(grade_id, 'grade_id')
        professor_id = require_id(professor_id, 'professor_id')

        grade = self.repos.grades.get(grade_id)
        if not grade:
            raise NotFoundError("Grade not found")
        exam_result_id = grade.exam_result_id
        student_id = grade.exam_result.student_id

        with self.locks.hold_all([exam_result_key(exam_result_id), student_key(student_id)]):
            with unit_of_work(self.session):
                self.grade_service.delete_grade(grade_id, professor_id)
                result = self.exam_result_aggregator.recompute(exam_result_id)
                self.metrics_engine.recompute_student_cgpa(student_id)

        return result

    def recompute_student_cgpa(self, student_id):
        student_id = require_id(student_id, 'student_id')
        if not self.repos.enrollments.get_student(student_id):
            raise NotFoundError("Student not found")

        with self.locks.hold(student_key(student_id)):
            with unit_of_work(self.session):
                cgpa = self.metrics_engine.recompute_student_cgpa(student_id)
        return cgpa

    def prepare_grading_sheet(self, professor_id, section_id, subject_id, exam_id):
        """Grading sheet read that may create PENDING exam results"""
        with unit_of_work(self.session):
            return self.grade_service.prepare_grading_sheet(
                require_id(professor_id, 'professor_id'),
                require_id(section_id, 'section_id'),
                require_id(subject_id, 'subject_id'),
                require_id(exam_id, 'exam_id')
            )
