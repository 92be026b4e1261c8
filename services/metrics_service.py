"""
Academic metrics service for the Academic Metrics Engine
SGPA per semester and credit-weighted CGPA
"""

import enum
import logging
from collections import OrderedDict

from utils.exceptions import ValidationError
from utils.validators import round_half_up

logger = logging.getLogger(__name__)

class ZeroCreditPolicy(enum.Enum):
    """What to do with a semester whose subjects carry no credits"""
    FALLBACK = 'fallback'
    EXCLUDE = 'exclude'
    ERROR = 'error'

def compute_sgpa(percentages):
    """Mean of percentage/10 grade points, rounded to 2 places"""
    grade_points = [percentage / 10 for percentage in percentages]
    return round_half_up(sum(grade_points) / len(grade_points), 2)

def compute_cgpa(weighted_sgpas):
    """Credit-weighted mean of (sgpa, weight) pairs; None when there are none"""
    total_weight = sum(weight for _, weight in weighted_sgpas)
    if not weighted_sgpas or total_weight <= 0:
        return None
    return round_half_up(sum(sgpa * weight for sgpa, weight in weighted_sgpas) / total_weight, 2)

class AcademicMetricsEngine:
    """Computes SGPA/CGPA from graded exam results and persists CGPA on active enrollments"""

    def __init__(self, repos, zero_credit_policy=ZeroCreditPolicy.FALLBACK, fallback_weight=1.0):
        self.repos = repos
        self.zero_credit_policy = ZeroCreditPolicy(zero_credit_policy)
        self.fallback_weight = fallback_weight

    def _graded_results_by_semester(self, student_id):
        grouped = OrderedDict()
        for result, exam in self.repos.exam_results.list_graded_with_semester(student_id):
            grouped.setdefault(exam.semester_id, []).append(result)
        return grouped

    def _semester_weight(self, student_id, semester_id, credits):
        if credits > 0:
            return credits

        if self.zero_credit_policy == ZeroCreditPolicy.FALLBACK:
            logger.warning("Semester %s has no subject credits; weighting it %s in CGPA of student %s",
                           semester_id, self.fallback_weight, student_id)
            return self.fallback_weight
        if self.zero_credit_policy == ZeroCreditPolicy.EXCLUDE:
            logger.warning("Semester %s has no subject credits; excluded from CGPA of student %s",
                           semester_id, student_id)
            return None
        raise ValidationError(f"Semester {semester_id} has no subject credit data; CGPA cannot be computed")

    def compute_student_metrics(self, student_id):
        """Return (cgpa, semesters) without writing anything.

        semesters is a list of {'semester_id', 'sgpa', 'weight', 'results'} in
        the order the semesters were first graded.
        """
        grouped = self._graded_results_by_semester(student_id)
        credits = self.repos.academic.credits_by_semester(list(grouped))

        semesters = []
        weighted = []
        for semester_id, results in grouped.items():
            sgpa = compute_sgpa([result.grade for result in results])
            weight = self._semester_weight(student_id, semester_id, credits.get(semester_id, 0))
            if weight is not None:
                weighted.append((sgpa, weight))
            semesters.append({
                'semester_id': semester_id,
                'sgpa': sgpa,
                'weight': weight,
                'results': results
            })

        return compute_cgpa(weighted), semesters

    def recompute_student_cgpa(self, student_id):
        """Recompute CGPA and write it onto every ACTIVE enrollment of the student"""
        cgpa, _ = self.compute_student_metrics(student_id)

        enrollments = self.repos.enrollments.list_active(student_id, for_update=True)
        for enrollment in enrollments:
            enrollment.cgpa = cgpa
        self.repos.session.flush()

        logger.debug("CGPA of student %s recomputed: %s (%s active enrollments)",
                     student_id, cgpa, len(enrollments))
        return cgpa

    def get_student_grades_summary(self, student_id):
        cgpa, semesters = self.compute_student_metrics(student_id)
        semester_rows = self.repos.academic.get_semesters([entry['semester_id'] for entry in semesters])

        summary = []
        for entry in semesters:
            semester = semester_rows.get(entry['semester_id'])
            subjects = []
            for result in entry['results']:
                for grade in self.repos.grades.list_for_result(result.id):
                    subjects.append({
                        'subject_id': grade.subject_id,
                        'subject_name': grade.subject.name if grade.subject else None,
                        'credits': grade.subject.credits if grade.subject else None,
                        'marks_obtained': grade.marks_obtained,
                        'exam_id': result.exam_id
                    })
            summary.append({
                'semester_id': entry['semester_id'],
                'semester_number': semester.number if semester else None,
                'sgpa': entry['sgpa'],
                'subjects': subjects
            })

        summary.sort(key=lambda row: (row['semester_number'] is None, row['semester_number'] or 0))
        return {'cgpa': cgpa, 'semesters': summary}
