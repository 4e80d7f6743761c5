from typing import Optional, Dict, Any
from supabase import Client
from app.core.config import settings


def fetch_test(db: Client, test_id: str) -> Optional[Dict[str, Any]]:
    response = db.table(settings.TESTS_TABLE)\
        .select("*")\
        .eq("testId", test_id)\
        .limit(1)\
        .execute()
    return response.data[0] if response.data else None


def fetch_question_set(db: Client, test_id: str) -> Optional[Dict[str, Any]]:
    response = db.table(settings.QUESTIONS_TABLE)\
        .select(settings.QUESTIONS_JSON_COLUMN)\
        .eq("testId", test_id)\
        .limit(1)\
        .execute()
    return response.data[0] if response.data else None
