"""
Marks models
ExamResult and Grade models
"""

from database import db
from datetime import datetime
from models.enums import ExamResultStatus

class ExamResult(db.Model):
    """A student's aggregate result for one exam, derived from its grades"""
    __tablename__ = 'exam_result'

    id = db.Column(db.Integer, primary_key=True)
    exam_id = db.Column(db.Integer, db.ForeignKey('exam.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False, index=True)
    total_marks_obtained = db.Column(db.Float, nullable=True)
    percentage = db.Column(db.Float, nullable=True)
    status = db.Column(db.Enum(ExamResultStatus), nullable=False, default=ExamResultStatus.PENDING)
    # Percentage stored as the proxy grade value used for SGPA
    grade = db.Column(db.Float, nullable=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    student = db.relationship('Student')
    grades = db.relationship('Grade', backref='exam_result', lazy='dynamic')

    __table_args__ = (db.UniqueConstraint('exam_id', 'student_id', name='unique_exam_student_result'),)

    def to_dict(self):
        return {
            'id': self.id,
            'exam_id': self.exam_id,
            'student_id': self.student_id,
            'total_marks_obtained': self.total_marks_obtained,
            'percentage': self.percentage,
            'status': self.status.value,
            'grade': self.grade
        }

    def __repr__(self):
        return f'<ExamResult exam={self.exam_id} student={self.student_id} {self.status.value}>'

class Grade(db.Model):
    """Marks obtained in one subject component of an exam result"""
    __tablename__ = 'grade'

    id = db.Column(db.Integer, primary_key=True)
    exam_result_id = db.Column(db.Integer, db.ForeignKey('exam_result.id'), nullable=False, index=True)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=False)
    marks_obtained = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = db.relationship('Subject')

    __table_args__ = (db.UniqueConstraint('exam_result_id', 'subject_id', name='unique_result_subject_grade'),)

    def to_dict(self):
        return {
            'id': self.id,
            'exam_result_id': self.exam_result_id,
            'subject_id': self.subject_id,
            'subject_name': self.subject.name if self.subject else None,
            'marks_obtained': self.marks_obtained
        }

    def __repr__(self):
        return f'<Grade result={self.exam_result_id} subject={self.subject_id}: {self.marks_obtained}>'
