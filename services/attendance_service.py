"""
Attendance service for the Academic Metrics Engine
Attendance summary recomputation, batch marking and attendance reads
"""

import logging
from datetime import date, datetime

from models.attendance import AttendanceRecord, AttendanceSummary
from models.enums import AttendanceStatus, ClassType
from utils.exceptions import AuthorizationError, ComputationSkipped, NotFoundError, ValidationError
from utils.validators import parse_enum, require_id, round_half_up, validate_enum, validate_id

logger = logging.getLogger(__name__)

def summarize_attendance(records):
    """Return (total, present, absent, percentage) for a set of attendance records"""
    total = len(records)
    present = sum(1 for record in records if record.is_present())
    absent = sum(1 for record in records if record.status == AttendanceStatus.ABSENT)
    percentage = round_half_up(present / total * 100, 2) if total > 0 else 0.0
    return total, present, absent, percentage

class AttendanceAggregator:
    """Rebuilds AttendanceSummary rows from the matching attendance records"""

    def __init__(self, repos, today=date.today):
        self.repos = repos
        self.today = today

    def recompute_summary(self, student_id, subject_id, academic_year_id):
        """Recompute and upsert the summary for one (student, subject, academic year).

        Raises ComputationSkipped, carrying the unpersisted summary, when the
        student has no enrollment for the academic year.
        """
        records = self.repos.attendance_records.list_in_scope(student_id, subject_id, academic_year_id)
        total, present, absent, percentage = summarize_attendance(records)

        today = self.today()
        from_date = min(record.date for record in records) if records else today

        enrollment = self.repos.enrollments.find_for_year(student_id, academic_year_id)
        if enrollment is None:
            transient = AttendanceSummary(
                student_id=student_id,
                subject_id=subject_id,
                academic_year_id=academic_year_id,
                total_classes=total,
                present_classes=present,
                absent_classes=absent,
                attendance_percentage=percentage,
                from_date=from_date,
                to_date=today
            )
            raise ComputationSkipped(
                f"No enrollment for student {student_id} in academic year {academic_year_id}; "
                f"attendance summary for subject {subject_id} not persisted",
                result=transient
            )

        summary = self.repos.attendance_summaries.get(student_id, subject_id, academic_year_id, for_update=True)
        is_new = summary is None
        if is_new:
            summary = AttendanceSummary(
                student_id=student_id,
                subject_id=subject_id,
                academic_year_id=academic_year_id
            )

        summary.enrollment_id = enrollment.id
        summary.total_classes = total
        summary.present_classes = present
        summary.absent_classes = absent
        summary.attendance_percentage = percentage
        summary.from_date = from_date
        summary.to_date = today

        if is_new:
            self.repos.attendance_summaries.add(summary)
        else:
            self.repos.session.flush()

        logger.debug("Attendance summary student=%s subject=%s year=%s: %s/%s (%.2f%%)",
                     student_id, subject_id, academic_year_id, present, total, percentage)
        return summary

class AttendanceService:
    """Attendance marking and attendance reads"""

    def __init__(self, repos):
        self.repos = repos

    def mark_attendance(self, professor_id, section_id, subject_id, attendance_date, entries,
                        class_type=ClassType.REGULAR):
        """Apply a batch of attendance marks.

        Returns (section, marked, errors): marked holds one record per student
        touched, in first-seen order; errors holds {'student_id', 'error'} for
        entries that were skipped.
        """
        section = self.repos.academic.get_section(section_id)
        if not section:
            raise NotFoundError("Section not found")

        subject = self.repos.academic.get_subject(subject_id)
        if not subject:
            raise NotFoundError("Subject not found")

        assignment = self.repos.assignments.find_attendance_assignment(professor_id, section_id, subject_id)
        if not assignment:
            raise AuthorizationError(
                "Professor does not have permission to mark attendance for this section/subject"
            )

        marked = {}
        errors = []
        marked_at = datetime.utcnow()

        for entry in entries:
            raw_student_id = entry.get('student_id') if isinstance(entry, dict) else None

            is_valid, message = validate_id(raw_student_id, 'student_id')
            if not is_valid:
                errors.append({'student_id': raw_student_id, 'error': message})
                continue
            student_id = int(raw_student_id)

            is_valid, message = validate_enum(entry.get('status'), AttendanceStatus, 'status')
            if not is_valid:
                errors.append({'student_id': student_id, 'error': message})
                continue
            status = parse_enum(entry.get('status'), AttendanceStatus, 'status')

            section_enrollment = self.repos.enrollments.find_active_section_enrollment(student_id, section_id)
            if not section_enrollment:
                errors.append({'student_id': student_id, 'error': "Student not enrolled in this section"})
                continue

            record = self.repos.attendance_records.find_for_day(student_id, subject_id, section_id, attendance_date)
            if record:
                record.status = status
                record.marked_at = marked_at
                record.marked_by = professor_id
                self.repos.session.flush()
            else:
                record = self.repos.attendance_records.add(AttendanceRecord(
                    student_id=student_id,
                    subject_id=subject_id,
                    section_id=section_id,
                    academic_year_id=section.academic_year_id,
                    enrollment_id=section_enrollment.enrollment_id,
                    date=attendance_date,
                    class_type=class_type,
                    status=status,
                    marked_by=professor_id,
                    marked_at=marked_at
                ))

            marked.setdefault(student_id, record)

        return section, list(marked.values()), errors

    def get_student_attendance(self, student_id, subject_id=None, semester_id=None, academic_year_id=None):
        records = self.repos.attendance_records.list_for_student(
            student_id, subject_id=subject_id, semester_id=semester_id, academic_year_id=academic_year_id
        )
        summaries = self.repos.attendance_summaries.list_for_student(
            student_id, subject_id=subject_id, semester_id=semester_id, academic_year_id=academic_year_id
        )
        return {
            'records': [record.to_dict() for record in records],
            'summaries': [summary.to_dict() for summary in summaries]
        }

    def get_section_attendance_stats(self, section_id, academic_year_id=None, subject_id=None):
        rows = self.repos.attendance_records.section_stats(
            section_id, academic_year_id=academic_year_id, subject_id=subject_id
        )

        stats = []
        for student, total, present, absent in rows:
            total = int(total or 0)
            present = int(present or 0)
            stats.append({
                'student': student.to_dict(),
                'total_classes': total,
                'present': present,
                'absent': int(absent or 0),
                'attendance_percentage': round_half_up(present / total * 100, 2) if total > 0 else 0.0
            })
        return stats

    def get_section_attendance(self, section_id, subject_id=None, attendance_date=None, academic_year_id=None):
        """Section records, plus the students still unmarked when a day and subject are given"""
        records = self.repos.attendance_records.list_for_section(
            section_id, subject_id=subject_id, day=attendance_date, academic_year_id=academic_year_id
        )

        students_without_attendance = []
        if attendance_date and subject_id:
            marked_ids = {record.student_id for record in records}
            students_without_attendance = [
                student.to_dict()
                for student in self.repos.enrollments.list_section_students(section_id)
                if student.id not in marked_ids
            ]

        return {
            'records': [record.to_dict() for record in records],
            'students_without_attendance': students_without_attendance
        }

def parse_entries(entries):
    """Validate the batch envelope; per-entry problems are reported by mark_attendance"""
    if not isinstance(entries, list) or not entries:
        raise ValidationError("Attendance entries must be a non-empty list")
    return entries

def entry_student_ids(entries):
    """Student ids of the well-formed entries in a batch"""
    ids = set()
    for entry in entries:
        if isinstance(entry, dict) and validate_id(entry.get('student_id'))[0]:
            ids.add(require_id(entry.get('student_id')))
    return ids
