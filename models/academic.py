"""
Academic structure models
Course, AcademicYear, Semester, Subject, Section and Exam models
"""

from database import db
from datetime import datetime
from models.enums import ExamType

class Course(db.Model):
    """Course model for academic programs"""
    __tablename__ = 'course'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    total_semesters = db.Column(db.Integer, default=8, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    semesters = db.relationship('Semester', backref='course', lazy='dynamic')

    def __repr__(self):
        return f'<Course {self.code}: {self.name}>'

class AcademicYear(db.Model):
    """Academic year model for managing academic sessions"""
    __tablename__ = 'academic_year'

    id = db.Column(db.Integer, primary_key=True)
    year = db.Column(db.String(20), nullable=False, unique=True, index=True)  # e.g. '2024-25'
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    is_active = db.Column(db.Boolean, default=False)

    def to_dict(self):
        return {
            'id': self.id,
            'year': self.year,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'end_date': self.end_date.isoformat() if self.end_date else None,
            'is_active': self.is_active
        }

    def __repr__(self):
        return f'<AcademicYear {self.year}>'

class Semester(db.Model):
    """Semester of a course; owns subjects and exams"""
    __tablename__ = 'semester'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    number = db.Column(db.Integer, nullable=False)
    code = db.Column(db.String(20), nullable=False)

    # Relationships
    subjects = db.relationship('Subject', backref='semester', lazy='dynamic')
    exams = db.relationship('Exam', backref='semester', lazy='dynamic')

    __table_args__ = (db.UniqueConstraint('course_id', 'number', name='unique_course_semester_number'),)

    def to_dict(self):
        return {
            'id': self.id,
            'course_id': self.course_id,
            'number': self.number,
            'code': self.code
        }

    def __repr__(self):
        return f'<Semester {self.code}>'

class Subject(db.Model):
    """Subject taught in a semester; credits weight the semester in CGPA"""
    __tablename__ = 'subject'

    id = db.Column(db.Integer, primary_key=True)
    semester_id = db.Column(db.Integer, db.ForeignKey('semester.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    code = db.Column(db.String(20), nullable=False, index=True)
    credits = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (db.UniqueConstraint('code', 'semester_id', name='unique_subject_code_per_semester'),)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'code': self.code,
            'credits': self.credits,
            'semester_id': self.semester_id
        }

    def __repr__(self):
        return f'<Subject {self.code}: {self.name}>'

class Section(db.Model):
    """Teaching group of a course/semester/academic-year"""
    __tablename__ = 'section'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    semester_id = db.Column(db.Integer, db.ForeignKey('semester.id'), nullable=False)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    name = db.Column(db.String(50), nullable=False)
    code = db.Column(db.String(20), nullable=False, unique=True)
    capacity = db.Column(db.Integer, default=60)

    academic_year = db.relationship('AcademicYear')
    semester = db.relationship('Semester')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'code': self.code,
            'course_id': self.course_id,
            'semester_id': self.semester_id,
            'academic_year_id': self.academic_year_id
        }

    def __repr__(self):
        return f'<Section {self.code}>'

class Exam(db.Model):
    """Exam held for a semester"""
    __tablename__ = 'exam'

    id = db.Column(db.Integer, primary_key=True)
    semester_id = db.Column(db.Integer, db.ForeignKey('semester.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    exam_type = db.Column(db.Enum(ExamType), nullable=False, default=ExamType.FINAL_EXAM)
    exam_date = db.Column(db.Date, nullable=True)
    max_marks = db.Column(db.Float, nullable=False)

    results = db.relationship('ExamResult', backref='exam', lazy='dynamic')

    __table_args__ = (db.UniqueConstraint('semester_id', 'name', 'exam_type', name='unique_exam_per_semester'),)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'exam_type': self.exam_type.value,
            'exam_date': self.exam_date.isoformat() if self.exam_date else None,
            'max_marks': self.max_marks,
            'semester_id': self.semester_id
        }

    def __repr__(self):
        return f'<Exam {self.name} ({self.exam_type.value})>'
