# src/projectbridge/analysis/models.py
"""
Result shapes produced from LLM output.

Each shape comes as a pydantic model (snake_case attributes, camelCase JSON
aliases as the prompts ask for) plus a descriptor SCHEMA and a DEFAULTS dict
used by `repair.normalize` before validation.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from projectbridge.repair.normalize import ArrayOf, Choice, Int, Num, Obj, STRING
from projectbridge.skills.models import Priority

Relevance = Literal["High", "Medium", "Low"]
Importance = Literal["Required", "Preferred"]
Difficulty = Literal["Beginner", "Intermediate", "Advanced"]
ResourceType = Literal["Documentation", "Tutorial", "Course", "Video", "Book", "Other"]

SKILL_CATEGORIES = [
    "technical", "soft", "tools", "frameworks", "languages",
    "databases", "methodologies", "platforms", "other",
]
AI_CATEGORIES = [
    "ai_concepts", "ai_infrastructure", "ai_agents",
    "ai_engineering", "ai_data", "ai_applications",
]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- extracted skills ----------
class ExtractedSkills(BaseModel):
    technical: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    frameworks: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    databases: List[str] = Field(default_factory=list)
    methodologies: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    other: List[str] = Field(default_factory=list)


class ScoredSkill(BaseModel):
    name: str
    confidence: float = Field(0.5, ge=0, le=1)


class EnhancedExtractedSkills(BaseModel):
    technical: List[ScoredSkill] = Field(default_factory=list)
    soft: List[ScoredSkill] = Field(default_factory=list)
    tools: List[ScoredSkill] = Field(default_factory=list)
    frameworks: List[ScoredSkill] = Field(default_factory=list)
    languages: List[ScoredSkill] = Field(default_factory=list)
    databases: List[ScoredSkill] = Field(default_factory=list)
    methodologies: List[ScoredSkill] = Field(default_factory=list)
    platforms: List[ScoredSkill] = Field(default_factory=list)
    ai_concepts: List[ScoredSkill] = Field(default_factory=list)
    ai_infrastructure: List[ScoredSkill] = Field(default_factory=list)
    ai_agents: List[ScoredSkill] = Field(default_factory=list)
    ai_engineering: List[ScoredSkill] = Field(default_factory=list)
    ai_data: List[ScoredSkill] = Field(default_factory=list)
    ai_applications: List[ScoredSkill] = Field(default_factory=list)
    other: List[ScoredSkill] = Field(default_factory=list)

    def names(self, min_confidence: float = 0.0) -> ExtractedSkills:
        """Collapse to plain names; AI subcategories fold into `technical`."""
        def pick(items):
            return [s.name for s in items if s.confidence >= min_confidence]
        data = {c: pick(getattr(self, c)) for c in SKILL_CATEGORIES}
        for c in AI_CATEGORIES:
            data["technical"].extend(pick(getattr(self, c)))
        return ExtractedSkills(**data)


# ---------- resume ----------
class ContactInfo(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None


class Education(CamelModel):
    degree: str = ""
    institution: str = ""
    year: str = ""


class Experience(CamelModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""
    key_achievements: List[str] = Field(default_factory=list)
    start_date: str = ""
    end_date: str = ""


class Project(CamelModel):
    name: str
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    date: str = ""


class ResumeAnalysisResult(CamelModel):
    skills: ExtractedSkills = Field(default_factory=ExtractedSkills)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    education: List[Education] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)
    summary: str = ""
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)


# ---------- job description ----------
class Qualifications(CamelModel):
    required: List[str] = Field(default_factory=list)
    preferred: List[str] = Field(default_factory=list)


class ExperienceRequirement(CamelModel):
    level: str = ""
    years: str = ""


class KeywordCount(CamelModel):
    keyword: str
    count: int = 0


class JobAnalysisResult(CamelModel):
    title: str = ""
    company: str = ""
    location: str = ""
    job_type: str = ""
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    qualifications: Qualifications = Field(default_factory=Qualifications)
    experience: ExperienceRequirement = Field(default_factory=ExperienceRequirement)
    education: str = ""
    salary: str = ""
    benefits: List[str] = Field(default_factory=list)
    summary: str = ""
    keywords_density: List[KeywordCount] = Field(default_factory=list)


# ---------- skill gap ----------
class MissingSkill(CamelModel):
    name: str
    level: str = "Intermediate"
    priority: Priority = "Medium"
    context: str = ""


class MissingQualification(CamelModel):
    description: str
    importance: Importance = "Preferred"
    alternative: str = ""


class MissingExperience(CamelModel):
    area: str
    years_needed: str = ""
    suggestion: str = ""


class MatchedSkill(CamelModel):
    name: str
    proficiency: str = "Intermediate"
    relevance: Relevance = "Medium"


class GapRecommendation(CamelModel):
    type: str = "Project"
    description: str = ""
    time_to_acquire: str = "1-2 months"
    priority: Priority = "Medium"


class SkillGapAnalysisResult(CamelModel):
    match_percentage: int = Field(0, ge=0, le=100)
    missing_skills: List[MissingSkill] = Field(default_factory=list)
    missing_qualifications: List[MissingQualification] = Field(default_factory=list)
    missing_experience: List[MissingExperience] = Field(default_factory=list)
    matched_skills: List[MatchedSkill] = Field(default_factory=list)
    recommendations: List[GapRecommendation] = Field(default_factory=list)
    summary: str = ""


# ---------- project ideas ----------
class LearningResource(CamelModel):
    title: str = ""
    url: str = ""
    type: ResourceType = "Other"


class ProjectIdea(CamelModel):
    """A portfolio project that exercises some of the missing skills."""
    id: str = ""
    title: str = ""
    description: str = ""
    skills_addressed: List[str] = Field(default_factory=list)
    difficulty: Difficulty = "Intermediate"
    time_estimate: str = ""
    steps: List[str] = Field(default_factory=list)
    learning_resources: List[LearningResource] = Field(default_factory=list)
    tools: List[str] = Field(default_factory=list)
    github_repo_template: Optional[str] = None
    deployment_options: List[str] = Field(default_factory=list)
    additional_notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


# ---------- normalizer schemas and defaults (camelCase, as the LLM emits them) ----------
_STRINGS = ArrayOf(STRING)
_PRIORITY = Choice(["High", "Medium", "Low"])

EXTRACTED_SKILLS_SCHEMA = {c: _STRINGS for c in SKILL_CATEGORIES}
EXTRACTED_SKILLS_DEFAULTS = {c: [] for c in SKILL_CATEGORIES}

_SCORED = Obj({"name": STRING, "confidence": Num(low=0, high=1)}, required=("name",))
ENHANCED_SKILLS_SCHEMA = {c: ArrayOf(_SCORED, {"name": "", "confidence": 0.5}) for c in SKILL_CATEGORIES + AI_CATEGORIES}
ENHANCED_SKILLS_DEFAULTS = {c: [] for c in SKILL_CATEGORIES + AI_CATEGORIES}

RESUME_SCHEMA = {
    "skills": EXTRACTED_SKILLS_SCHEMA,
    "contactInfo": {k: STRING for k in ("name", "email", "phone", "location", "linkedin", "github", "website")},
    "education": ArrayOf({"degree": STRING, "institution": STRING, "year": STRING}, {}),
    "experience": ArrayOf({
        "title": STRING, "company": STRING, "duration": STRING, "description": STRING,
        "keyAchievements": _STRINGS, "startDate": STRING, "endDate": STRING,
    }, {"keyAchievements": []}),
    "summary": STRING,
    "strengths": _STRINGS,
    "weaknesses": _STRINGS,
    "projects": ArrayOf(Obj({
        "name": STRING, "description": STRING, "technologies": _STRINGS, "date": STRING,
    }, required=("name",)), {"description": "", "technologies": []}),
}
RESUME_DEFAULTS = {
    "skills": dict(EXTRACTED_SKILLS_DEFAULTS),
    "contactInfo": {},
    "education": [],
    "experience": [],
    "summary": "",
    "strengths": [],
    "weaknesses": [],
    "projects": [],
}

JOB_SCHEMA = {
    "title": STRING,
    "company": STRING,
    "location": STRING,
    "jobType": STRING,
    "requiredSkills": _STRINGS,
    "preferredSkills": _STRINGS,
    "responsibilities": _STRINGS,
    "qualifications": {"required": _STRINGS, "preferred": _STRINGS},
    "experience": {"level": STRING, "years": STRING},
    "education": STRING,
    "salary": STRING,
    "benefits": _STRINGS,
    "summary": STRING,
    "keywordsDensity": ArrayOf(Obj({"keyword": STRING, "count": Int(low=0)}, required=("keyword",)), {"count": 0}),
}
JOB_DEFAULTS = {
    "title": "",
    "company": "",
    "location": "",
    "jobType": "",
    "requiredSkills": [],
    "preferredSkills": [],
    "responsibilities": [],
    "qualifications": {"required": [], "preferred": []},
    "experience": {"level": "", "years": ""},
    "education": "",
    "salary": "",
    "benefits": [],
    "summary": "",
    "keywordsDensity": [],
}

SKILL_GAP_SCHEMA = {
    "matchPercentage": Int(low=0, high=100),
    "missingSkills": ArrayOf(Obj({
        "name": STRING, "level": STRING, "priority": _PRIORITY, "context": STRING,
    }, required=("name",)), {"level": "Intermediate", "priority": "Medium", "context": ""}),
    "missingQualifications": ArrayOf(Obj({
        "description": STRING, "importance": Choice(["Required", "Preferred"]), "alternative": STRING,
    }, required=("description",)), {"importance": "Preferred", "alternative": ""}),
    "missingExperience": ArrayOf(Obj({
        "area": STRING, "yearsNeeded": STRING, "suggestion": STRING,
    }, required=("area",)), {"yearsNeeded": "", "suggestion": ""}),
    "matchedSkills": ArrayOf(Obj({
        "name": STRING, "proficiency": STRING, "relevance": _PRIORITY,
    }, required=("name",)), {"proficiency": "Intermediate", "relevance": "Medium"}),
    "recommendations": ArrayOf(Obj({
        "type": STRING, "description": STRING, "timeToAcquire": STRING, "priority": _PRIORITY,
    }, required=("description",)), {"type": "Project", "timeToAcquire": "1-2 months", "priority": "Medium"}),
    "summary": STRING,
}
SKILL_GAP_DEFAULTS = {
    "matchPercentage": 0,
    "missingSkills": [],
    "missingQualifications": [],
    "missingExperience": [],
    "matchedSkills": [],
    "recommendations": [],
    "summary": "",
}

PROJECT_IDEA_SCHEMA = Obj({
    "id": STRING,
    "title": STRING,
    "description": STRING,
    "skillsAddressed": _STRINGS,
    "difficulty": Choice(["Beginner", "Intermediate", "Advanced"], default="Intermediate"),
    "timeEstimate": STRING,
    "steps": _STRINGS,
    "learningResources": ArrayOf(Obj({
        "title": STRING, "url": STRING,
        "type": Choice(["Documentation", "Tutorial", "Course", "Video", "Book", "Other"], default="Other"),
    }, required=("title",)), {"url": "", "type": "Other"}),
    "tools": _STRINGS,
    "githubRepoTemplate": STRING,
    "deploymentOptions": _STRINGS,
    "additionalNotes": STRING,
    "tags": _STRINGS,
}, required=("title",))
PROJECT_IDEA_DEFAULTS = {
    "id": "",
    "title": "",
    "description": "",
    "skillsAddressed": [],
    "difficulty": "Intermediate",
    "timeEstimate": "",
    "steps": [],
    "learningResources": [],
    "tools": [],
    "deploymentOptions": [],
    "tags": [],
}
# the LLM is asked for a bare array of ideas
PROJECT_IDEAS_SCHEMA = ArrayOf(PROJECT_IDEA_SCHEMA, PROJECT_IDEA_DEFAULTS)
