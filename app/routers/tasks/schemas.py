from pydantic import BaseModel
from typing import Optional, Union

TEST_TYPES = ("test", "quiz")

# All fields optional; handlers report missing ones as 400.
class CreateTestRequest(BaseModel):
    teacherId: Optional[str] = None
    testType: Optional[str] = "test"

class SubmitResultRequest(BaseModel):
    userId: Optional[str] = None
    testId: Optional[str] = None
    testType: Optional[str] = None
    passed: Optional[Union[int, float]] = None
    totalQuestions: Optional[Union[int, float]] = None
