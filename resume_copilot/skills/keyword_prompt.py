"""Keyword extraction prompt for the job-description matcher."""

from __future__ import annotations

from typing import Dict, List

KEYWORD_EXTRACTION_PROMPT = """You are a resume keyword analyzer. Extract important keywords from job descriptions.

Return ONLY valid JSON in this exact format, no other text:
{
  "keywords": ["keyword1", "keyword2", "keyword3"],
  "skills": ["skill1", "skill2"],
  "tools": ["tool1", "tool2"],
  "softSkills": ["soft skill 1", "soft skill 2"]
}

Extract:
- Technical skills and technologies
- Tools and software mentioned
- Soft skills and qualities
- Industry-specific terms
- Required qualifications

Keep each array to 5-10 most important items."""


def build_keyword_messages(job_description: str) -> List[Dict[str, str]]:
    return [
        {
            "role": "user",
            "content": f"Extract keywords from this job description:\n\n{job_description}",
        }
    ]
