import asyncio
from dataclasses import dataclass
from typing import Any

from question_importer.gemini_client import call_gemini
from question_importer.pdf_text import extract_pdf_text
from question_importer.prompts import build_prompt
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class GeneratedQuestions:
    prompt: str
    questions: Any

    @property
    def is_raw_text(self) -> bool:
        return isinstance(self.questions, str)


async def generate_questions(pdf_bytes: bytes, test_type: str) -> GeneratedQuestions:
    """
    Extract Text -> Build Prompt -> Gemini -> Normalize
    """
    # Extraction is CPU bound; keep it off the event loop
    pdf_json = await asyncio.to_thread(extract_pdf_text, pdf_bytes)
    prompt = build_prompt(test_type, pdf_json)

    logger.info(f"Sending {test_type} prompt to AI ({len(prompt)} chars)")
    questions = await call_gemini(prompt)

    result = GeneratedQuestions(prompt=prompt, questions=questions)
    if result.is_raw_text:
        logger.warning("AI output was not valid JSON; it will be stored as raw text")
    elif isinstance(questions, list):
        logger.info(f"AI produced {len(questions)} questions")

    return result
