"""
Enrollment repositories
Data access for StudentEnrollment and SectionEnrollment
"""

from models.student import Student, StudentEnrollment, SectionEnrollment
from models.enums import EnrollmentStatus, SectionEnrollmentStatus

class EnrollmentRepo:

    def __init__(self, session):
        self.session = session

    def get_student(self, student_id):
        return self.session.get(Student, student_id)

    def find_for_year(self, student_id, academic_year_id):
        """First enrollment of the student in an academic year, any status"""
        return self.session.query(StudentEnrollment).filter_by(
            student_id=student_id,
            academic_year_id=academic_year_id
        ).order_by(StudentEnrollment.id.asc()).first()

    def list_active(self, student_id, for_update=False):
        query = self.session.query(StudentEnrollment).filter_by(
            student_id=student_id,
            status=EnrollmentStatus.ACTIVE
        ).order_by(StudentEnrollment.id.asc())
        if for_update:
            query = query.with_for_update()
        return query.all()

    def find_active_section_enrollment(self, student_id, section_id):
        return self.session.query(SectionEnrollment).filter_by(
            student_id=student_id,
            section_id=section_id,
            status=SectionEnrollmentStatus.ACTIVE
        ).first()

    def active_section_ids(self, student_id):
        rows = self.session.query(SectionEnrollment.section_id).filter_by(
            student_id=student_id,
            status=SectionEnrollmentStatus.ACTIVE
        ).all()
        return [row[0] for row in rows]

    def list_section_students(self, section_id):
        return self.session.query(Student)\
            .join(SectionEnrollment, SectionEnrollment.student_id == Student.id)\
            .filter(SectionEnrollment.section_id == section_id,
                    SectionEnrollment.status == SectionEnrollmentStatus.ACTIVE)\
            .order_by(Student.roll_number.asc())\
            .all()

    def list_cgpa_eligible(self, min_cgpa):
        """(Student, cgpa) for students whose active enrollment meets min_cgpa"""
        return self.session.query(Student, StudentEnrollment.cgpa)\
            .join(StudentEnrollment, StudentEnrollment.student_id == Student.id)\
            .filter(StudentEnrollment.status == EnrollmentStatus.ACTIVE,
                    StudentEnrollment.cgpa.isnot(None),
                    StudentEnrollment.cgpa >= min_cgpa)\
            .distinct()\
            .order_by(StudentEnrollment.cgpa.desc(), Student.roll_number.asc())\
            .all()
