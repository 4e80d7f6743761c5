from typing import Optional
from supabase import Client
from app.core.config import settings
from utils.logger import get_logger

logger = get_logger(__name__)


def record_prompt(db: Client, test_id: str, test_type: str, prompt: str, prompt_index: int = 0) -> bool:
    """
    Appends the prompt sent for a test to PROMPT_AUDIT_TABLE.
    Returns False when auditing is disabled or the insert failed.
    """
    table: Optional[str] = settings.PROMPT_AUDIT_TABLE
    if not table:
        return False

    try:
        db.table(table).insert({
            "testId": test_id,
            "testType": test_type,
            "promptIndex": prompt_index,
            "prompt": prompt,
        }).execute()
        return True
    except Exception as e:
        logger.error(f"Prompt audit insert failed for {test_id}: {e}")
        return False
