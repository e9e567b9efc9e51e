from fastapi import APIRouter

from division_sms.modules.auth.router import router as auth_router
from division_sms.modules.books.router import router as books_router
from division_sms.modules.enrollment.router import router as enrollment_router
from division_sms.modules.form_requests.router import router as public_form_requests_router
from division_sms.modules.form_requests.staff_router import router as form_requests_router
from division_sms.modules.grades.router import router as grades_router
from division_sms.modules.health.router import router as health_router
from division_sms.modules.medical_assistance.router import router as medical_assistance_router
from division_sms.modules.procurement.router import router as procurement_router
from division_sms.modules.reports.router import router as reports_router
from division_sms.modules.rooms.router import router as rooms_router
from division_sms.modules.schedules.router import router as schedules_router
from division_sms.modules.schools.router import router as schools_router
from division_sms.modules.sections.router import router as sections_router
from division_sms.modules.students.router import router as students_router
from division_sms.modules.subjects.router import router as subjects_router
from division_sms.modules.users.router import router as users_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

# Division
api_router.include_router(schools_router, prefix="/schools", tags=["Schools"])
api_router.include_router(users_router, prefix="/staff", tags=["Staff"])
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
api_router.include_router(
    procurement_router, prefix="/purchase-orders", tags=["Procurement"]
)
api_router.include_router(
    medical_assistance_router, prefix="/medical-assistance", tags=["Medical Assistance"]
)

# School records
api_router.include_router(students_router, prefix="/students", tags=["Students"])
api_router.include_router(subjects_router, prefix="/subjects", tags=["Subjects"])
api_router.include_router(rooms_router, prefix="/rooms", tags=["Rooms"])
api_router.include_router(sections_router, prefix="/sections", tags=["Sections"])
api_router.include_router(schedules_router, prefix="/schedules", tags=["Schedules"])
api_router.include_router(enrollment_router, prefix="/enrollments", tags=["Enrollment"])
api_router.include_router(grades_router, prefix="/grades", tags=["Grades"])
api_router.include_router(health_router, prefix="/health-records", tags=["Learner Health"])
api_router.include_router(books_router, prefix="/books", tags=["Books"])
api_router.include_router(form_requests_router, prefix="/form-requests", tags=["Form Requests"])

# Public (no authentication)
api_router.include_router(
    public_form_requests_router, prefix="/public", tags=["Public - Form Requests"]
)
