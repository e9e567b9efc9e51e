"""
Model registry.

Importing this module registers every table on ``Base.metadata``; Alembic
and the seed script rely on it.
"""

from division_sms.core.database import Base
from division_sms.modules.books.models import Book, BookIssuance
from division_sms.modules.enrollment.models import Enrollment, GpaThreshold
from division_sms.modules.form_requests.models import FormRequest
from division_sms.modules.grades.models import Grade
from division_sms.modules.health.models import LearnerHealth
from division_sms.modules.medical_assistance.models import Hospital, MedicalAssistance
from division_sms.modules.procurement.models import PurchaseOrder
from division_sms.modules.rooms.models import Room
from division_sms.modules.schedules.models import SubjectSchedule
from division_sms.modules.schools.models import School
from division_sms.modules.sections.models import Section, SectionStudent, SectionSubject
from division_sms.modules.students.models import Student
from division_sms.modules.subjects.models import Subject
from division_sms.modules.users.models import User

__all__ = [
    "Base",
    "Book",
    "BookIssuance",
    "Enrollment",
    "FormRequest",
    "GpaThreshold",
    "Grade",
    "Hospital",
    "LearnerHealth",
    "MedicalAssistance",
    "PurchaseOrder",
    "Room",
    "School",
    "Section",
    "SectionStudent",
    "SectionSubject",
    "Student",
    "Subject",
    "SubjectSchedule",
    "User",
]
