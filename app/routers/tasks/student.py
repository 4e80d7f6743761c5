from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends
from app.core.config import settings
from app.core.database import get_db
from app.routers.tasks.queries import fetch_test, fetch_question_set
from app.routers.tasks.schemas import SubmitResultRequest
from supabase import Client
from typing import Optional
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/test/{test_id}")
async def get_test_questions(
    test_id: str,
    db: Client = Depends(get_db)
):
    try:
        question_set = fetch_question_set(db, test_id)
        if not question_set:
            raise HTTPException(status_code=404, detail="Test questions not found")

        test_row = fetch_test(db, test_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Fetch questions error for {test_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch test questions")

    return {
        "questions": question_set.get(settings.QUESTIONS_JSON_COLUMN),
        "testType": test_row.get("testType") if test_row else None
    }


@router.get("/userType")
async def check_user(
    userId: Optional[str] = None,
    password: Optional[str] = None,
    db: Client = Depends(get_db)
):
    if not userId or not password:
        raise HTTPException(status_code=400, detail="Missing userId or password")

    # Plaintext comparison against the stored password
    try:
        response = db.table(settings.TEACHERS_TABLE)\
            .select("userId")\
            .eq("userId", userId)\
            .eq("password", password)\
            .limit(1)\
            .execute()
    except Exception as e:
        logger.error(f"Teacher lookup error: {e}")
        raise HTTPException(status_code=500, detail="Failed to check user")

    return {"role": "teacher" if response.data else "student"}


@router.post("/submitResult")
async def submit_result(
    payload: SubmitResultRequest,
    db: Client = Depends(get_db)
):
    missing = [
        name for name in ("userId", "testId", "testType", "passed", "totalQuestions")
        if getattr(payload, name) in (None, "")
    ]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required fields: {', '.join(missing)}")

    try:
        if not fetch_test(db, payload.testId):
            raise HTTPException(status_code=404, detail="Test not found")

        db.table(settings.SUBMISSIONS_TABLE).insert({
            "userId": payload.userId,
            "testId": payload.testId,
            "testType": payload.testType,
            "passed": payload.passed,
            "totalQuestions": payload.totalQuestions,
            "submittedAt": datetime.now(timezone.utc).isoformat()
        }).execute()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Submit result error for {payload.testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to submit result")

    logger.info(f"Recorded submission of {payload.userId} for {payload.testId}")
    return {
        "msg": "Submission recorded",
        "userId": payload.userId,
        "testId": payload.testId,
        "testType": payload.testType,
        "passed": payload.passed,
        "totalQuestions": payload.totalQuestions
    }
