"""
Staff models
Professor identity referenced by attendance marks and grading assignments
"""

from database import db
from datetime import datetime

class Professor(db.Model):
    """Professor model; credentials are owned by the auth gateway"""
    __tablename__ = 'professor'

    id = db.Column(db.Integer, primary_key=True)
    employee_code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    section_assignments = db.relationship('ProfessorSectionAssignment', backref='professor', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'employee_code': self.employee_code,
            'name': self.name,
            'email': self.email
        }

    def __repr__(self):
        return f'<Professor {self.employee_code}: {self.name}>'
