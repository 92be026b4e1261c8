"""
Configuration settings for the Academic Metrics Engine
"""

import os

class Config:
    """Base configuration class"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'academic-metrics-secret-key'

    # Database settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///academic_metrics.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Grading policy
    PASS_PERCENTAGE = float(os.environ.get('PASS_PERCENTAGE', 50))

    # Attendance policy
    ATTENDANCE_THRESHOLD = float(os.environ.get('ATTENDANCE_THRESHOLD', 75))  # Minimum attendance percentage

    # CGPA weighting for semesters without subject credit data:
    # 'fallback' uses CGPA_FALLBACK_WEIGHT, 'exclude' drops the semester, 'error' refuses to compute
    CGPA_ZERO_CREDIT_POLICY = os.environ.get('CGPA_ZERO_CREDIT_POLICY', 'fallback')
    CGPA_FALLBACK_WEIGHT = float(os.environ.get('CGPA_FALLBACK_WEIGHT', 1))

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None

class TestConfig(Config):
    """Configuration used by the test suite"""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'WARNING'
