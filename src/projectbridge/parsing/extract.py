import json
import logging
from typing import List, Literal

from langchain_openai import ChatOpenAI
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.output_parsers import StrOutputParser

from projectbridge.analysis.fallback import generate_fallback_analysis
from projectbridge.analysis.models import (
    EnhancedExtractedSkills, ExtractedSkills, JobAnalysisResult,
    ProjectIdea, ResumeAnalysisResult, SkillGapAnalysisResult,
)
from projectbridge.analysis.results import (
    parse_enhanced_skills, parse_extracted_skills, parse_job_analysis,
    parse_project_ideas, parse_resume_analysis, parse_skill_gap,
)
from projectbridge.repair.summary_mining import log_skills_gap_validation
from projectbridge.skills.service import enhance_skills_gap_analysis, find_missing_job_skills, flatten_skills
from projectbridge.utils.config import settings
from projectbridge.utils.retry import RetryError, RetryOptions, with_model_fallback

logger = logging.getLogger(__name__)

Source = Literal["resume", "job"]

# Prompts (doubling braces to show literal JSON braces)
SKILLS_PROMPT = ChatPromptTemplate.from_template("""
You are an expert skills analyzer. Extract ALL skills from the following {source_label}.

{body}

Return ONLY a JSON object with these keys (arrays of strings):
{{
  "technical": [],
  "soft": [],
  "tools": [],
  "frameworks": [],
  "languages": [],
  "databases": [],
  "methodologies": [],
  "platforms": [],
  "other": []
}}
Use canonical names (e.g. "PostgreSQL" not "postgres"). No markdown, no commentary.
""")

ENHANCED_SKILLS_PROMPT = ChatPromptTemplate.from_template("""
You are an expert skills analyzer with deep knowledge of AI and software engineering.
Extract ALL skills from the following {source_label} and rate your confidence (0 to 1) for each.

{body}

Return ONLY a JSON object. Every key holds an array of {{"name": string, "confidence": number}}:
{{
  "technical": [], "soft": [], "tools": [], "frameworks": [], "languages": [],
  "databases": [], "methodologies": [], "platforms": [],
  "ai_concepts": [], "ai_infrastructure": [], "ai_agents": [],
  "ai_engineering": [], "ai_data": [], "ai_applications": [],
  "other": []
}}
No markdown, no commentary.
""")

RESUME_PROMPT = ChatPromptTemplate.from_template("""
You are an expert resume analyzer. Extract structured information from the resume below.

Resume:
```{resume_text}```

Return ONLY a JSON object with this structure:
{{
  "skills": {{"technical": [], "soft": [], "tools": [], "frameworks": [], "languages": [],
              "databases": [], "methodologies": [], "platforms": [], "other": []}},
  "contactInfo": {{"name": "", "email": "", "phone": "", "location": "", "linkedin": "", "github": "", "website": ""}},
  "education": [{{"degree": "", "institution": "", "year": ""}}],
  "experience": [{{"title": "", "company": "", "duration": "", "description": "", "keyAchievements": []}}],
  "summary": "",
  "strengths": [],
  "weaknesses": [],
  "projects": [{{"name": "", "description": "", "technologies": [], "date": ""}}]
}}
""")

JOB_PROMPT = ChatPromptTemplate.from_template("""
You are an expert job description analyzer. Extract structured information from the job description below.

Job Description:
```{jd_text}```

Return ONLY a JSON object with this structure:
{{
  "title": "", "company": "", "location": "", "jobType": "",
  "requiredSkills": [], "preferredSkills": [], "responsibilities": [],
  "qualifications": {{"required": [], "preferred": []}},
  "experience": {{"level": "", "years": ""}},
  "education": "", "salary": "", "benefits": [], "summary": "",
  "keywordsDensity": [{{"keyword": "", "count": 0}}]
}}
""")

GAP_PROMPT = ChatPromptTemplate.from_template("""
You are an expert career advisor and skills analyst. Analyze the parsed resume and job description
below and identify the gaps between the candidate's qualifications and the job requirements.

# RESUME ANALYSIS:
{resume_json}

# JOB DESCRIPTION ANALYSIS:
{job_json}

Identify: missing skills (priority High/Medium/Low by how often and how prominently the job asks
for them, and whether required or preferred), missing qualifications, unmet experience requirements,
matching skills, and concrete recommendations to bridge each gap. Estimate an overall match percentage.

Return ONLY valid JSON with exactly this structure:
{{
  "matchPercentage": 0,
  "missingSkills": [{{"name": "", "level": "", "priority": "High", "context": ""}}],
  "missingQualifications": [{{"description": "", "importance": "Required", "alternative": ""}}],
  "missingExperience": [{{"area": "", "yearsNeeded": "", "suggestion": ""}}],
  "matchedSkills": [{{"name": "", "proficiency": "", "relevance": "High"}}],
  "recommendations": [{{"type": "Project", "description": "", "timeToAcquire": "", "priority": "High"}}],
  "summary": ""
}}
""")

PROJECT_IDEAS_PROMPT = ChatPromptTemplate.from_template("""
You are a project-idea generator for career changers and job seekers. Given:

RESUME SKILLS:
{resume_skills}

JOB REQUIRED SKILLS:
{required}

JOB PREFERRED SKILLS:
{preferred}

MISSING SKILLS:
{missing}

JOB RESPONSIBILITIES:
{responsibilities}
{role_focus}
Generate exactly 3 portfolio project ideas that practice the missing skills. Return ONLY a JSON array:
[
  {{
    "id": "", "title": "", "description": "",
    "skillsAddressed": [],
    "difficulty": "Beginner" | "Intermediate" | "Advanced",
    "timeEstimate": "",
    "steps": [],
    "learningResources": [{{"title": "", "url": "", "type": "Documentation" | "Tutorial" | "Course" | "Video" | "Book" | "Other"}}],
    "tools": [],
    "deploymentOptions": [],
    "additionalNotes": "",
    "tags": []
  }}
]
No markdown, no commentary.
""")

_SOURCE_LABEL = {"resume": "resume text", "job": "job description"}


def _llm(model: str) -> ChatOpenAI:
    # retries are handled by with_retry, not the client
    return ChatOpenAI(
        model=model,
        api_key=settings.OPENAI_API_KEY,
        temperature=0.1,
        timeout=settings.OPENAI_TIMEOUT,
        max_retries=0,
    )


def _complete(prompt: ChatPromptTemplate, variables: dict) -> str:
    """Prompt -> LLM -> text, trying each configured model. Raises RetryError when every model fails."""
    def call(model: str) -> str:
        chain = prompt | _llm(model) | StrOutputParser()
        return chain.invoke(variables)
    return with_model_fallback(call, settings.models, RetryOptions.from_settings())


def extract_skills(text: str, source: Source = "resume") -> ExtractedSkills:
    try:
        raw = _complete(SKILLS_PROMPT, {"body": text, "source_label": _SOURCE_LABEL[source]})
    except RetryError as e:
        logger.warning("[skills] LLM unavailable, returning empty skills: %s", e)
        return ExtractedSkills()
    return parse_extracted_skills(raw)


def extract_skills_enhanced(text: str, source: Source = "resume") -> EnhancedExtractedSkills:
    try:
        raw = _complete(ENHANCED_SKILLS_PROMPT, {"body": text, "source_label": _SOURCE_LABEL[source]})
    except RetryError as e:
        logger.warning("[skills+] LLM unavailable, returning empty skills: %s", e)
        return EnhancedExtractedSkills()
    return parse_enhanced_skills(raw)


def extract_skill_names(text: str, source: Source = "resume", enhanced: bool = False,
                        min_confidence: float = 0.0) -> ExtractedSkills:
    """Plain skill lists; with `enhanced`, AI categories fold in and low-confidence names are dropped."""
    if enhanced:
        return extract_skills_enhanced(text, source).names(min_confidence)
    return extract_skills(text, source)


def analyze_resume(resume_text: str) -> ResumeAnalysisResult:
    try:
        raw = _complete(RESUME_PROMPT, {"resume_text": resume_text})
    except RetryError as e:
        logger.warning("[resume] LLM unavailable, returning empty analysis: %s", e)
        return ResumeAnalysisResult()
    return parse_resume_analysis(raw)


def analyze_job_description(jd_text: str) -> JobAnalysisResult:
    try:
        raw = _complete(JOB_PROMPT, {"jd_text": jd_text})
    except RetryError as e:
        logger.warning("[jd] LLM unavailable, returning empty analysis: %s", e)
        return JobAnalysisResult()
    return parse_job_analysis(raw)


def analyze_skills_gap_from_results(resume: ResumeAnalysisResult, job: JobAnalysisResult) -> SkillGapAnalysisResult:
    """
    LLM gap analysis (rule-based fallback if no model answers), then refined
    against the skills knowledge graph.
    """
    try:
        raw = _complete(GAP_PROMPT, {
            "resume_json": json.dumps(resume.model_dump(by_alias=True), ensure_ascii=False, indent=2),
            "job_json": json.dumps(job.model_dump(by_alias=True), ensure_ascii=False, indent=2),
        })
        result = parse_skill_gap(raw)
    except RetryError as e:
        logger.warning("[gap] all models failed, using rule-based analysis: %s", e)
        result = generate_fallback_analysis(resume, job)

    result = enhance_skills_gap_analysis(resume.skills, job.required_skills, result)
    log_skills_gap_validation(result)
    return result


def analyze_skills_gap(resume_text: str, jd_text: str) -> SkillGapAnalysisResult:
    return analyze_skills_gap_from_results(analyze_resume(resume_text), analyze_job_description(jd_text))


def generate_project_ideas(resume: ResumeAnalysisResult, job: JobAnalysisResult,
                           role_focus: str = "") -> List[ProjectIdea]:
    """Three project ideas for the skills the job asks for and the resume lacks."""
    job_skills = [s for s in (*job.required_skills, *job.preferred_skills) if s]
    missing = find_missing_job_skills(resume.skills, job_skills)
    try:
        raw = _complete(PROJECT_IDEAS_PROMPT, {
            "resume_skills": json.dumps([*flatten_skills(resume.skills), *resume.skills.soft]),
            "required": json.dumps(job.required_skills),
            "preferred": json.dumps(job.preferred_skills),
            "missing": json.dumps(missing),
            "responsibilities": json.dumps(job.responsibilities),
            "role_focus": f"\nROLE FOCUS: {role_focus}\n" if role_focus.strip() else "",
        })
    except RetryError as e:
        logger.warning("[projects] LLM unavailable, using fallback projects: %s", e)
        raw = ""
    ideas = parse_project_ideas(raw, missing)
    logger.info("[projects] %d project ideas for %d missing skills", len(ideas), len(missing))
    return ideas


if __name__ == "__main__":
    # Quick smoke test to check your key/model
    sample_resume = "Jane Doe. Frontend developer. Skills: JavaScript, React, CSS, Git."
    sample_jd = "Title: Full-stack Engineer\nRequirements: React, Node.js, Docker, Kubernetes"
    print(analyze_skills_gap(sample_resume, sample_jd).model_dump_json(by_alias=True, indent=2))
