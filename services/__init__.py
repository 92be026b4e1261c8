"""
Services package for the Academic Metrics Engine
"""

from repositories import Repositories
from services.attendance_service import AttendanceAggregator, AttendanceService
from services.coordinator import ConsistencyCoordinator
from services.eligibility_service import EligibilityService
from services.grade_service import ExamResultAggregator, GradeService
from services.metrics_service import AcademicMetricsEngine

class MetricsServices:
    """Services wired over one session, configuration and lock registry"""

    def __init__(self, session, config, locks):
        self.repos = Repositories(session)
        self.attendance = AttendanceService(self.repos)
        self.attendance_aggregator = AttendanceAggregator(self.repos)
        self.grades = GradeService(self.repos)
        self.exam_result_aggregator = ExamResultAggregator(
            self.repos, pass_percentage=config.get('PASS_PERCENTAGE', 50.0)
        )
        self.metrics = AcademicMetricsEngine(
            self.repos,
            zero_credit_policy=config.get('CGPA_ZERO_CREDIT_POLICY', 'fallback'),
            fallback_weight=config.get('CGPA_FALLBACK_WEIGHT', 1.0)
        )
        self.eligibility = EligibilityService(
            self.repos, attendance_threshold=config.get('ATTENDANCE_THRESHOLD', 75.0)
        )
        self.coordinator = ConsistencyCoordinator(
            self.repos,
            locks,
            attendance_service=self.attendance,
            attendance_aggregator=self.attendance_aggregator,
            grade_service=self.grades,
            exam_result_aggregator=self.exam_result_aggregator,
            metrics_engine=self.metrics
        )

__all__ = ['MetricsServices']
