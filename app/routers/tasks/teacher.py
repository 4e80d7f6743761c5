from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form
from app.core.config import settings
from app.core.database import get_db
from app.routers.tasks.queries import fetch_test, fetch_question_set
from app.routers.tasks.schemas import CreateTestRequest, TEST_TYPES
from app.services.prompt_audit import record_prompt
from app.services.test_ids import generate_test_id
from question_importer.errors import PdfExtractionError, GeminiAPIError, QuestionImportError
from question_importer.pipeline import generate_questions
from supabase import Client
from typing import Optional
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def parse_prompt_index(raw: Optional[str]) -> int:
    try:
        return max(0, int(raw or 0))
    except ValueError:
        return 0


@router.post("/createTest")
async def create_test(
    payload: CreateTestRequest,
    db: Client = Depends(get_db)
):
    if not payload.teacherId:
        raise HTTPException(status_code=400, detail="Missing teacherId")

    test_type = (payload.testType or "test").lower()
    if test_type not in TEST_TYPES:
        raise HTTPException(status_code=400, detail=f"Invalid testType '{payload.testType}'. Expected 'test' or 'quiz'")

    try:
        # 1. Teacher must exist
        teacher_res = db.table(settings.TEACHERS_TABLE)\
            .select("userId")\
            .eq("userId", payload.teacherId)\
            .limit(1)\
            .execute()

        if not teacher_res.data:
            raise HTTPException(status_code=403, detail="Invalid teacher credentials")

        # 2. Fresh id, checked against existing tests
        test_id = generate_test_id(lambda candidate: fetch_test(db, candidate) is not None)

        # 3. Insert
        db.table(settings.TESTS_TABLE).insert({
            "testId": test_id,
            "teacherId": payload.teacherId,
            "testType": test_type
        }).execute()

        logger.info(f"Created {test_type} {test_id} for teacher {payload.teacherId}")
        return {"testId": test_id, "teacherId": payload.teacherId, "testType": test_type}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating test: {e}")
        raise HTTPException(status_code=500, detail="Failed to create test")


@router.post("/uploadQuestions")
async def upload_questions(
    testId: Optional[str] = Form(None),
    pdf: Optional[UploadFile] = File(None),
    promptIndex: Optional[str] = Form(None),
    db: Client = Depends(get_db)
):
    if not testId or pdf is None:
        raise HTTPException(status_code=400, detail="Missing testId or pdf")

    pdf_bytes = await pdf.read()
    if not pdf_bytes:
        raise HTTPException(status_code=400, detail="Uploaded pdf is empty")

    prompt_index = parse_prompt_index(promptIndex)
    logger.info(f"Received {pdf.filename} ({len(pdf_bytes)} bytes) for {testId}")

    # 1. Test must exist and must not have questions yet
    try:
        test_row = fetch_test(db, testId)
        existing = fetch_question_set(db, testId) if test_row else None
    except Exception as e:
        logger.error(f"Test lookup error for {testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to look up test")

    if not test_row:
        raise HTTPException(status_code=404, detail="Test not found")
    if existing:
        raise HTTPException(status_code=409, detail="Questions already uploaded for this test")

    test_type = (test_row.get("testType") or "test").lower()

    # 2. Keep the uploaded PDF in storage
    try:
        db.storage.from_(settings.STORAGE_BUCKET).upload(
            f"{testId}.pdf",
            pdf_bytes,
            {"content-type": "application/pdf", "upsert": "true"}
        )
    except Exception as e:
        logger.error(f"Storage upload error for {testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to upload PDF")

    # 3. PDF -> prompt -> Gemini -> JSON
    try:
        generated = await generate_questions(pdf_bytes, test_type)
    except PdfExtractionError as e:
        logger.error(f"PDF extraction failed for {testId}: {e}")
        raise HTTPException(status_code=400, detail="Invalid PDF file")
    except GeminiAPIError as e:
        logger.error(f"Gemini call failed for {testId}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate questions: {e}")
    except QuestionImportError as e:
        logger.error(f"Question generation failed for {testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate questions")
    except Exception as e:
        logger.error(f"Unexpected error generating questions for {testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate questions")

    record_prompt(db, testId, test_type, generated.prompt, prompt_index)

    # 4. Store the transformed JSON
    try:
        db.table(settings.QUESTIONS_TABLE).insert({
            "testId": testId,
            settings.QUESTIONS_JSON_COLUMN: generated.questions,
            "testType": test_type
        }).execute()
    except Exception as e:
        logger.error(f"Insert {settings.QUESTIONS_TABLE} error for {testId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save questions JSON")

    return {
        "msg": "Questions uploaded and processed",
        "testId": testId,
        "testType": test_type
    }


@router.get("/teacher/{teacher_id}/tests")
async def get_teacher_tests(
    teacher_id: str,
    db: Client = Depends(get_db)
):
    try:
        response = db.table(settings.TESTS_TABLE)\
            .select("*")\
            .eq("teacherId", teacher_id)\
            .order("created_at", desc=True)\
            .execute()
    except Exception as e:
        logger.error(f"Fetch teacher tests error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch tests")

    tests = response.data or []
    return {"tests": tests, "count": len(tests)}


@router.get("/viewResult/{test_id}")
async def view_results(
    test_id: str,
    db: Client = Depends(get_db)
):
    try:
        if not fetch_test(db, test_id):
            raise HTTPException(status_code=404, detail="Test not found")

        response = db.table(settings.SUBMISSIONS_TABLE)\
            .select("*")\
            .eq("testId", test_id)\
            .order("submittedAt", desc=True)\
            .execute()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Fetch results error for {test_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch results")

    results = response.data or []
    return {"results": results, "count": len(results)}
