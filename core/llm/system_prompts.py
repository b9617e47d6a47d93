"""
Prompt text for each scoring-adapter capability.

Each builder returns the user message; the system prompt and sampling
temperature are looked up per capability in PROMPT_SETTINGS.
"""
from typing import Any, Dict, List, Optional

BASE_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Always return valid JSON as requested. "
    "Do not include any text before or after the JSON."
)

# capability -> (system prompt, temperature)
PROMPT_SETTINGS = {
    'enhance_job': (BASE_SYSTEM_PROMPT, 0.7),
    'score_resume': (BASE_SYSTEM_PROMPT + " Be precise and consistent in your scoring.", 0.3),
    'score_profile': (BASE_SYSTEM_PROMPT, 0.5),
    'score_compensation': (BASE_SYSTEM_PROMPT, 0.4),
    'summarize_resume': (BASE_SYSTEM_PROMPT, 0.3),
    'parse_resume': (BASE_SYSTEM_PROMPT + " Use only information present in the resume.", 0.0),
    'summarize_linkedin': (BASE_SYSTEM_PROMPT, 0.3),
    'generate_invite_email': (BASE_SYSTEM_PROMPT, 0.8),
    'generate_screening_questions': (BASE_SYSTEM_PROMPT, 0.7),
    'score_video': (BASE_SYSTEM_PROMPT + " Be thorough and fair in your evaluation.", 0.3),
}


def _join(items: Optional[List[str]], default: str = 'None specified') -> str:
    return ', '.join(items) if items else default


def _job_block(job: Any) -> str:
    description = job.enhanced_jd or job.raw_jd or ''
    return (
        f"- Role: {job.role}\n"
        f"- Company: {job.company_name}\n"
        f"- Seniority: {job.seniority or 'Not specified'}\n"
        f"- Must-have skills: {_join(job.must_have_skills)}\n"
        f"- Nice-to-have skills: {_join(job.nice_to_have)}\n"
        f"- Job Description: {description}"
    )


def build_enhance_job_prompt(job: Any) -> str:
    return f"""You are an expert HR consultant helping to enhance a job description.

Company: {job.company_name}
Role: {job.role}
Seniority: {job.seniority or 'Not specified'}
Budget: {job.budget_info or 'Not specified'}
Must-have skills: {_join(job.must_have_skills)}
Nice-to-have skills: {_join(job.nice_to_have)}

Raw Job Description:
{job.raw_jd}

Return a JSON object:
{{
  "enhanced_jd": "Enhanced, professional job description (2-3 paragraphs)",
  "apply_form_fields": [{{"name": "email", "type": "email", "label": "Email Address", "required": true}}],
  "screening_questions": [{{"text": "Question text", "time_limit_sec": 120, "type": "video"}}]
}}"""


def build_resume_scoring_prompt(resume_text: str, job: Any) -> str:
    return f"""You are an expert recruiter evaluating a candidate's resume against a job posting.

Job Requirements:
{_job_block(job)}

Candidate Resume:
{resume_text}

Return a JSON object:
{{
  "match_score": 0-100,
  "confidence": 0-1,
  "skills_matched": ["skill1", "skill2"],
  "skills_missing": ["skill1", "skill2"],
  "recommended_action": "yes" | "maybe" | "no",
  "top_reasons": ["reason1", "reason2", "reason3"]
}}"""


def build_profile_scoring_prompt(github_summary: Optional[str], portfolio_url: Optional[str], job: Any) -> str:
    return f"""Evaluate a candidate's GitHub and/or portfolio profile for a job position.

Job Requirements:
- Role: {job.role}
- Required skills: {_join(job.must_have_skills)}

GitHub profile data:
{github_summary or 'No GitHub data available'}

Portfolio: {portfolio_url or 'No portfolio provided'}

Return a JSON object:
{{
  "score": 0-100,
  "confidence": 0-1,
  "analysis": "Brief analysis of the profile quality and relevance"
}}"""


def build_compensation_prompt(expectation: str, budget: str) -> str:
    return f"""Analyze whether a candidate's compensation expectation aligns with the job budget.

Job Budget: {budget}
Candidate Expectation: {expectation}

Return a JSON object:
{{
  "score": 0-100,
  "analysis": "Analysis of alignment between expectation and budget"
}}

Score higher when the expectation fits the budget."""


def build_resume_summary_prompt(resume_text: str) -> str:
    return f"""Summarize this resume for a recruiter in 3-4 sentences.

Resume:
{resume_text}

Return a JSON object: {{"summary": "..."}}"""


def build_resume_parse_prompt(resume_text: str) -> str:
    return f"""Extract contact details and profile links from this resume.

Resume:
{resume_text}

Return a JSON object:
{{
  "name": "string or null",
  "email": "string or null",
  "phone": "string or null",
  "github_url": "string or null",
  "portfolio_url": "string or null",
  "linkedin_url": "string or null",
  "skills": ["skill1", "skill2"],
  "years_of_experience": number or null
}}"""


def build_linkedin_summary_prompt(linkedin_url: str, resume_summary: Optional[str]) -> str:
    return f"""Write a short professional summary of the candidate's LinkedIn presence.

LinkedIn: {linkedin_url}
Resume summary: {resume_summary or 'Not available'}

Return a JSON object: {{"summary": "..."}}"""


def build_invite_email_prompt(context: Dict[str, Any]) -> str:
    questions = context.get('screening_questions') or []
    question_lines = '\n'.join(
        f"{i + 1}. {q.get('text')} ({q.get('time_limit_sec', 120)}s)" for i, q in enumerate(questions)
    ) or 'None'
    unified = context.get('unified_score') or 0
    tone = 'enthusiastic' if unified >= 85 else 'warm' if unified >= 80 else 'friendly'
    return f"""Generate a personalized, professional email inviting a candidate to a video screening.

Candidate: {context.get('candidate_name')}
Role: {context.get('role')}
Company: {context.get('company')}
Screening Link: {context.get('screening_link')}

Screening Questions:
{question_lines}

Overall match: {unified}%
Matched skills: {_join(context.get('skills_matched'), 'None')}

The tone should be {tone}.

Return a JSON object:
{{
  "subject": "Email subject line",
  "preview_text": "Preview text",
  "tone": "friendly" | "warm" | "enthusiastic",
  "plain_text": "Full email text",
  "html_snippet": "HTML version of email body"
}}"""


def build_screening_questions_prompt(job: Any, candidate: Optional[Dict[str, Any]] = None) -> str:
    candidate_block = ''
    if candidate:
        candidate_block = (
            f"\nCandidate Context:\n- Name: {candidate.get('name') or 'Not provided'}\n"
            f"- Skills: {_join(candidate.get('skills'), 'Not provided')}\n"
        )
    return f"""You are an expert interviewer creating video screening questions for a job position.

Job Details:
{_job_block(job)[:800]}
{candidate_block}
Generate 3-5 relevant video screening questions with time limits of 60-180 seconds.

Return a JSON object:
{{
  "screening_questions": [{{"text": "Question text", "time_limit_sec": 120, "type": "video"}}]
}}"""


def build_video_scoring_prompt(transcript: str, questions: List[Dict[str, Any]]) -> str:
    question_lines = '\n'.join(f"{i + 1}. {q.get('text')}" for i, q in enumerate(questions or [])) \
        or 'No questions provided'
    return f"""You are an expert interviewer evaluating a candidate's video interview responses.

Screening Questions:
{question_lines}

Candidate Transcript:
{transcript}

Return a JSON object:
{{
  "per_question": [
    {{"question_index": 1, "communication": 0-10, "technical_depth": 0-10, "clarity": 0-10, "notes": "..."}}
  ],
  "overall_score": 0-100,
  "confidence": 0-1,
  "overall_recommendation": "yes" | "maybe" | "no",
  "two_line_summary": "Two-line summary"
}}"""
