from fastapi import APIRouter
from app.routers.tasks import health, teacher, student

router = APIRouter()

# Health routes (/ and /health)
router.include_router(health.router)

# Teacher routes (/createTest, /uploadQuestions, /teacher/{id}/tests, /viewResult/{id})
router.include_router(teacher.router)

# Student routes (/test/{id}, /userType, /submitResult)
router.include_router(student.router)
