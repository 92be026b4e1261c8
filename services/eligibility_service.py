"""
Eligibility service for the Academic Metrics Engine
Read-only checks built on persisted CGPA and attendance summaries
"""

from utils.exceptions import ValidationError

class EligibilityService:

    def __init__(self, repos, attendance_threshold=75.0):
        self.repos = repos
        self.attendance_threshold = attendance_threshold

    def placement_eligible_students(self, min_cgpa):
        """Students whose active-enrollment CGPA meets a placement criterion"""
        try:
            min_cgpa = float(min_cgpa)
        except (TypeError, ValueError):
            raise ValidationError("min_cgpa must be a number")
        if not 0 <= min_cgpa <= 10:
            raise ValidationError("min_cgpa must be between 0 and 10")

        students = []
        seen = set()
        for student, cgpa in self.repos.enrollments.list_cgpa_eligible(min_cgpa):
            if student.id in seen:
                continue
            seen.add(student.id)
            students.append(dict(student.to_dict(), cgpa=cgpa))

        return {
            'cgpa_criteria': min_cgpa,
            'eligible_count': len(students),
            'eligible_students': students
        }

    def exam_eligibility(self, student_id, academic_year_id=None, threshold=None):
        """Per-subject attendance eligibility; overall is None until attendance exists"""
        threshold = self.attendance_threshold if threshold is None else threshold
        summaries = self.repos.attendance_summaries.list_for_student(student_id, academic_year_id=academic_year_id)

        subjects = [
            {
                'subject_id': summary.subject_id,
                'subject_name': summary.subject.name if summary.subject else None,
                'academic_year_id': summary.academic_year_id,
                'attendance_percentage': summary.attendance_percentage,
                'eligible': summary.attendance_percentage >= threshold
            }
            for summary in summaries
        ]

        return {
            'student_id': student_id,
            'threshold': threshold,
            'eligible': all(subject['eligible'] for subject in subjects) if subjects else None,
            'subjects': subjects
        }
