"""
Assignment models
ProfessorSectionAssignment model for professor-section-subject teaching authority
"""

from database import db
from datetime import datetime

class ProfessorSectionAssignment(db.Model):
    """Teaching assignment of a professor to a section, optionally for one subject"""
    __tablename__ = 'professor_section_assignment'

    id = db.Column(db.Integer, primary_key=True)
    professor_id = db.Column(db.Integer, db.ForeignKey('professor.id'), nullable=False)
    section_id = db.Column(db.Integer, db.ForeignKey('section.id'), nullable=False)
    subject_id = db.Column(db.Integer, db.ForeignKey('subject.id'), nullable=True)
    can_mark_attendance = db.Column(db.Boolean, default=True, nullable=False)
    assigned_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    section = db.relationship('Section')
    subject = db.relationship('Subject')

    __table_args__ = (db.UniqueConstraint('professor_id', 'section_id', 'subject_id', name='unique_professor_section_subject'),)

    def deactivate(self):
        """Deactivate assignment"""
        self.is_active = False

    def to_dict(self):
        return {
            'id': self.id,
            'professor_id': self.professor_id,
            'section_id': self.section_id,
            'section_code': self.section.code if self.section else None,
            'subject_id': self.subject_id,
            'subject_name': self.subject.name if self.subject else None,
            'can_mark_attendance': self.can_mark_attendance,
            'is_active': self.is_active
        }

    def __repr__(self):
        return f'<ProfessorSectionAssignment professor={self.professor_id} section={self.section_id} subject={self.subject_id}>'
