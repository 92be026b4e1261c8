"""
Student models
Student, StudentEnrollment and SectionEnrollment models
"""

from database import db
from datetime import datetime
from models.enums import EnrollmentStatus, SectionEnrollmentStatus

class Student(db.Model):
    """Student model"""
    __tablename__ = 'student'

    id = db.Column(db.Integer, primary_key=True)
    roll_number = db.Column(db.String(20), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    enrollments = db.relationship('StudentEnrollment', backref='student', lazy='dynamic')
    section_enrollments = db.relationship('SectionEnrollment', backref='student', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'roll_number': self.roll_number,
            'name': self.name,
            'email': self.email
        }

    def __repr__(self):
        return f'<Student {self.roll_number}: {self.name}>'

class StudentEnrollment(db.Model):
    """Student enrollment in a course semester for an academic year"""
    __tablename__ = 'student_enrollment'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False, index=True)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    semester_id = db.Column(db.Integer, db.ForeignKey('semester.id'), nullable=False)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    current_semester = db.Column(db.Integer, default=1)
    status = db.Column(db.Enum(EnrollmentStatus), nullable=False, default=EnrollmentStatus.ACTIVE)
    # Written only by the academic metrics engine
    cgpa = db.Column(db.Float, nullable=True)
    enrolled_at = db.Column(db.DateTime, default=datetime.utcnow)

    semester = db.relationship('Semester')

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'course_id': self.course_id,
            'semester_id': self.semester_id,
            'academic_year_id': self.academic_year_id,
            'current_semester': self.current_semester,
            'status': self.status.value,
            'cgpa': self.cgpa
        }

    def __repr__(self):
        return f'<StudentEnrollment student={self.student_id} semester={self.semester_id} {self.status.value}>'

class SectionEnrollment(db.Model):
    """Placement of an enrolled student into a teaching section"""
    __tablename__ = 'section_enrollment'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False, index=True)
    section_id = db.Column(db.Integer, db.ForeignKey('section.id'), nullable=False, index=True)
    enrollment_id = db.Column(db.Integer, db.ForeignKey('student_enrollment.id'), nullable=False)
    status = db.Column(db.Enum(SectionEnrollmentStatus), nullable=False, default=SectionEnrollmentStatus.ACTIVE)

    section = db.relationship('Section')
    enrollment = db.relationship('StudentEnrollment')

    __table_args__ = (db.UniqueConstraint('student_id', 'section_id', name='unique_student_section'),)

    def __repr__(self):
        return f'<SectionEnrollment student={self.student_id} section={self.section_id} {self.status.value}>'
