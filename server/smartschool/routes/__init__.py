"""
Routes package initialization
One APIRouter per resource, mounted under /api by the app factory
"""

from smartschool.routes import (
    ai_activity,
    announcements,
    assessments,
    attendance,
    auth,
    exams,
    grading,
    health,
    live_classes,
    proctoring,
    results,
    schemes,
    schools,
    students,
    subjects,
    users,
)

ROUTERS = [
    health.router,
    auth.router,
    schools.router,
    users.router,
    students.router,
    subjects.router,
    schemes.router,
    assessments.router,
    results.router,
    attendance.router,
    announcements.router,
    exams.router,
    live_classes.router,
    proctoring.router,
    grading.router,
    ai_activity.router,
]
