# Prompt templates sent to Gemini for the two kinds of tests

QUIZ_PROMPT = """
Using ONLY the text below, create 10 multiple-choice questions.

OUTPUT RULES:
- Output must be ONLY a valid JSON array.
- No markdown, no backticks, no explanation outside JSON.
- Do NOT add text before or after the JSON array.

QUESTION FORMAT (every item must follow this):
{{
  "title": "one line question",
  "options": [
    {{ "label": "A", "text": "" }},
    {{ "label": "B", "text": "" }},
    {{ "label": "C", "text": "" }},
    {{ "label": "D", "text": "" }}
  ],
  "answer": "A",
  "explanation": "short explanation"
}}

STRICT RULES:
- Generate exactly 10 questions.
- 4 options only (A,B,C,D).
- "answer" must match a label.
- No empty fields.
- No null values.

TEXT_START
{text}
TEXT_END
"""

CODING_PROMPT = """
Read the text and extract programming questions.

OUTPUT MUST BE ONLY A PURE JSON ARRAY.
NO markdown, NO backticks, NO extra text.

Each JSON object represents a question and MUST contain EXACTLY these fields:

{{
  "title": "",
  "description": "",
  "functionName": "solve",
  "sampleTestCase": {{
       "input": [],
       "expected": any
  }},
  "hiddenTestCases": [
       {{ "input": [], "expected": any }},
       ... exactly 10 total
  ],
  "examples": [
       {{ "input": [], "expected": any }},
       ... exactly 2 total
  ],
  "category": "odd" or "even"
}}

STRICT RULES:
- Every "input" must be an ARRAY of parameters in the order the function takes them.
  Example: solve(nums, target) -> "input": [["2","7","11"], 9]
- NEVER return empty objects.
- NEVER return null values.
- ALWAYS generate realistic and valid testcases matching the question.
- Detect category:
    Questions under "ODD System No." -> "category": "odd"
    Questions under "EVEN System No." -> "category": "even"

INPUT_TEXT_START
{text}
INPUT_TEXT_END
"""

QUIZ_MODE = "quiz"
CODING_MODE = "test"


def build_prompt(mode: str, pdf_json: dict) -> str:
    """
    Picks the template for `mode` ("quiz" or anything else for coding
    questions) and embeds the extracted text verbatim.
    """
    text = (pdf_json or {}).get("text") or ""
    template = QUIZ_PROMPT if (mode or "").lower() == QUIZ_MODE else CODING_PROMPT
    return template.format(text=text).strip()
