"""ATS evaluation prompt template and builder."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_CHARS = 12000

ATS_EVALUATION_PROMPT = """You are an advanced AI-powered Applicant Tracking System (ATS) evaluator.
Analyze the following resume text against the job title "{job_title}".

Respond only with valid JSON (no markdown, no code fences, no explanations).

### Scoring Rules:
- atsScore: Integer 0-100
  * Skills Match (40%)
  * Experience Relevance (30%)
  * Formatting & Clarity (10%)
  * Keywords/ATS optimization (20%)

### Output JSON format:
{{
  "atsScore": number,
  "roleDetected": "string",
  "skills": {{
    "matched": ["skill1", "skill2"],
    "missing": ["skill3", "skill4"]
  }},
  "analysis": {{
    "summary": "feedback on resume summary",
    "skillsSection": "feedback on skills section",
    "experience": "feedback on work experience",
    "projects": "feedback on projects section",
    "education": "feedback on education section",
    "formatting": "feedback on structure, readability, ATS-friendliness",
    "keywords": "feedback on keyword density and missing keywords"
  }},
  "suggestions": [
    "specific actionable suggestion 1",
    "specific actionable suggestion 2",
    "specific actionable suggestion 3"
  ]
}}

Resume Text:
{resume_text}
"""


@dataclass(frozen=True)
class EvaluationRequest:
    """Resume text and target job title, text already capped."""

    resume_text: str
    job_title: str

    @classmethod
    def create(cls, text: str, job_title: str, max_chars: int = DEFAULT_MAX_CHARS) -> "EvaluationRequest":
        return cls(resume_text=truncate_text(text, max_chars), job_title=job_title)

    def render(self) -> str:
        return ATS_EVALUATION_PROMPT.format(job_title=self.job_title, resume_text=self.resume_text)


def truncate_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Cut ``text`` to at most ``max_chars`` characters. Lossy and silent."""
    if max_chars < 0:
        raise ValueError(f"max_chars must be non-negative, got {max_chars}")
    return text[:max_chars]


def build_prompt(text: str, job_title: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Render the ATS evaluation prompt for a resume and job title."""
    return EvaluationRequest.create(text, job_title, max_chars).render()
