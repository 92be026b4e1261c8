"""
Attendance models
AttendanceRecord and AttendanceSummary models
"""

from database import db
from datetime import datetime
from models.enums import AttendanceStatus, ClassType

class AttendanceRecord(db.Model):
    """Daily attendance mark for a student in a subject and section"""
    __tablename__ = 'attendance_record'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    section_id = db.Column(db.Integer, db.ForeignKey('section.id'), nullable=False)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    enrollment_id = db.Column(db.Integer, db.ForeignKey('student_enrollment.id'), nullable=False)
    date = db.Column(db.Date, nullable=False)
    class_type = db.Column(db.Enum(ClassType), nullable=False, default=ClassType.REGULAR)
    status = db.Column(db.Enum(AttendanceStatus), nullable=False)
    marked_by = db.Column(db.Integer, db.ForeignKey('professor.id'), nullable=False)
    marked_at = db.Column(db.DateTime, default=datetime.utcnow)

    student = db.relationship('Student')
    subject = db.relationship('Subject')
    section = db.relationship('Section')

    # One mark per student, subject, section and day
    __table_args__ = (db.UniqueConstraint('student_id', 'subject_id', 'section_id', 'date',
                                          name='unique_student_subject_section_date'),)

    def is_present(self):
        return self.status == AttendanceStatus.PRESENT

    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'student_name': self.student.name if self.student else None,
            'subject_id': self.subject_id,
            'subject_code': self.subject.code if self.subject else None,
            'section_id': self.section_id,
            'academic_year_id': self.academic_year_id,
            'date': self.date.isoformat() if self.date else None,
            'class_type': self.class_type.value,
            'status': self.status.value,
            'marked_by': self.marked_by,
            'marked_at': self.marked_at.isoformat() if self.marked_at else None
        }

    def __repr__(self):
        return f'<AttendanceRecord student={self.student_id} subject={self.subject_id} {self.date} {self.status.value}>'

class AttendanceSummary(db.Model):
    """Derived attendance rollup for a student, subject and academic year"""
    __tablename__ = 'attendance_summary'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    enrollment_id = db.Column(db.Integer, db.ForeignKey('student_enrollment.id'), nullable=True)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    academic_year_id = db.Column(db.Integer, db.ForeignKey('academic_year.id'), nullable=False)
    total_classes = db.Column(db.Integer, nullable=False, default=0)
    present_classes = db.Column(db.Integer, nullable=False, default=0)
    absent_classes = db.Column(db.Integer, nullable=False, default=0)
    attendance_percentage = db.Column(db.Float, nullable=False, default=0.0)
    from_date = db.Column(db.Date, nullable=True)
    to_date = db.Column(db.Date, nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = db.relationship('Subject')

    __table_args__ = (db.UniqueConstraint('student_id', 'subject_id', 'academic_year_id',
                                          name='unique_student_subject_year_summary'),)

    def to_dict(self):
        return {
            'student_id': self.student_id,
            'subject_id': self.subject_id,
            'subject_name': self.subject.name if self.subject else None,
            'academic_year_id': self.academic_year_id,
            'total_classes': self.total_classes,
            'present_classes': self.present_classes,
            'absent_classes': self.absent_classes,
            'attendance_percentage': self.attendance_percentage,
            'from_date': self.from_date.isoformat() if self.from_date else None,
            'to_date': self.to_date.isoformat() if self.to_date else None
        }

    def __repr__(self):
        return f'<AttendanceSummary student={self.student_id} subject={self.subject_id} {self.attendance_percentage}%>'
