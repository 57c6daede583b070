"""Fixed assistant texts, selection actions and section-template flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

GREETING = (
    "Hi! I'm your AI resume assistant. Select text to improve it, or ask me to help you write "
    "new sections. What would you like to work on?"
)
CONNECTIVITY_ERROR = (
    "I'm having trouble connecting right now. Please check your OpenAI API key in the .env file "
    "and try again."
)


def quota_refusal(daily_limit: int = 3) -> str:
    return (
        f"You've used all {daily_limit} free AI improvements for today. "
        "Upgrade to Pro for unlimited access!"
    )


# Actions that rewrite the current selection; sent as ordinary chat messages.
SELECTION_ACTIONS: Dict[str, str] = {
    "improve": (
        "Improve this text to be more impactful and professional. Use strong action verbs and "
        "quantify achievements where possible. Return the improved version in "
        "[[INSERT]]...[[/INSERT]] tags."
    ),
    "shorten": (
        "Make this text more concise while keeping the key information. Return the shortened "
        "version in [[INSERT]]...[[/INSERT]] tags."
    ),
    "expand": (
        "Expand this text with more detail and specific achievements. Return the expanded "
        "version in [[INSERT]]...[[/INSERT]] tags."
    ),
    "fix-grammar": (
        "Fix any grammar, spelling, or punctuation errors in this text. Return the corrected "
        "version in [[INSERT]]...[[/INSERT]] tags."
    ),
}


@dataclass(frozen=True)
class SectionFlow:
    """Ask ``question`` first; append ``generate_prompt`` to the user's answer."""

    question: str
    generate_prompt: str


SECTION_FLOWS: Dict[str, SectionFlow] = {
    "add-summary": SectionFlow(
        question="""I'd love to help you write a compelling Professional Summary! Quick questions:

1. What role are you targeting?
2. How many years of experience do you have?

Just tell me briefly and I'll craft something great.""",
        generate_prompt="""Based on the user's answers, generate a Professional Summary using this formula:
"[Descriptor] [Job Title] with [X]+ years of experience in [field]. [Key expertise]. [Proven result with metric]."

Use their actual details - no brackets or placeholders. Wrap the final summary in [[INSERT]]...[[/INSERT]] tags.""",
    ),
    "add-experience": SectionFlow(
        question="""I'll help you add a work experience entry! Please share:

1. Job title
2. Company name
3. Dates (start - end)
4. 2-3 key things you accomplished there

I'll turn this into polished, quantified bullet points.""",
        generate_prompt="""Based on the user's job details, generate a polished Work Experience entry with:
- Job Title
- Company Name
- Dates | Location
- 3-4 bullet points using action verbs and metrics

Use their actual information. If they didn't mention numbers, help estimate reasonable ones. Wrap in [[INSERT]]...[[/INSERT]] tags.""",
    ),
    "add-skills": SectionFlow(
        question=(
            "What role are you applying for? I'll generate relevant technical and soft skills "
            "tailored to that position."
        ),
        generate_prompt=(
            "Based on the target role, generate a Skills section with relevant technical skills, "
            "tools, and soft skills organized by category. Make it ATS-friendly. Wrap in "
            "[[INSERT]]...[[/INSERT]] tags."
        ),
    ),
    "add-education": SectionFlow(
        question="""I'll add your education! Please share:

1. Degree and field of study
2. University/college name
3. Graduation year
4. Any honors, GPA (if 3.5+), or relevant activities?""",
        generate_prompt="""Based on the user's education details, generate an Education section formatted as:
EDUCATION
[Degree Name]
[University Name]
[Year] | [Location if known]
[GPA/Honors if mentioned]

Use their actual details. Wrap in [[INSERT]]...[[/INSERT]] tags.""",
    ),
}
