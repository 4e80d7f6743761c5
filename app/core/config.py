from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Question Upload API"
    PROJECT_VERSION: str = "1.0.0"

    # Server
    PORT: int = 8082

    # Supabase Configuration
    SUPABASE_URL: str
    SUPABASE_KEY: str  # Anon Key
    SUPABASE_SERVICE_KEY: Optional[str] = None # Service Role Key for Admin Access

    # Table / bucket names (lower-case convention of the live schema)
    TESTS_TABLE: str = "tests"
    QUESTIONS_TABLE: str = "tests_json"
    QUESTIONS_JSON_COLUMN: str = "jsondata"
    SUBMISSIONS_TABLE: str = "submissions"
    TEACHERS_TABLE: str = "teacherusers"
    STORAGE_BUCKET: str = "Tests"
    # Append-only prompt history; disabled when unset
    PROMPT_AUDIT_TABLE: Optional[str] = None

    # AI Config
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL_URL: str = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
    GEMINI_TIMEOUT_SECONDS: float = 60.0
    GEMINI_MAX_ATTEMPTS: int = 2

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
