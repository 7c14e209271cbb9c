# src/projectbridge/analysis/fallback.py
# Rule-based gap analysis and project ideas for when no model answers. Deterministic: same inputs, same output.
import math
import re
from typing import List, Sequence

from projectbridge.analysis.models import (
    GapRecommendation, JobAnalysisResult, LearningResource, MatchedSkill, MissingSkill,
    ProjectIdea, ResumeAnalysisResult, SkillGapAnalysisResult,
)

_RESUME_CATEGORIES = (
    "technical", "soft", "tools", "frameworks", "languages",
    "databases", "methodologies", "platforms",
)


def _covers(have: List[str], skill: str) -> bool:
    return any(h in skill or skill in h for h in have if h)


def generate_fallback_analysis(resume: ResumeAnalysisResult, job: JobAnalysisResult) -> SkillGapAnalysisResult:
    have = [s.lower() for c in _RESUME_CATEGORIES for s in getattr(resume.skills, c)]
    required = [s.lower() for s in job.required_skills]
    preferred = [s.lower() for s in job.preferred_skills]

    missing_required = [s for s in required if not _covers(have, s)]
    missing_preferred = [s for s in preferred if not _covers(have, s)]
    matched = [s for s in required + preferred if _covers(have, s)]

    total = len(required) + len(preferred)
    pct = int(math.floor(len(matched) / total * 100 + 0.5)) if total else 0

    missing = [
        MissingSkill(name=s, level="Intermediate to Advanced", priority="High",
                     context="This skill is listed as required in the job description.")
        for s in missing_required
    ] + [
        MissingSkill(name=s, level="Beginner to Intermediate", priority="Medium",
                     context="This skill is listed as preferred in the job description.")
        for s in missing_preferred
    ]

    recommendations = []
    for i, skill in enumerate(missing[:5]):
        # alternate so the list is not all one kind
        kind, how = ("Project", "practical projects") if i % 2 == 0 else ("Course", "structured courses")
        recommendations.append(GapRecommendation(
            type=kind,
            description=f"Learn {skill.name} through {how}",
            time_to_acquire="1-3 months" if skill.priority == "High" else "2-4 months",
            priority=skill.priority,
        ))

    summary = f"You match approximately {pct}% of the job requirements."
    if missing_required:
        summary += (" Focus on acquiring the missing required skills first, particularly "
                    f"{', '.join(missing_required[:3])}.")

    return SkillGapAnalysisResult(
        match_percentage=pct,
        missing_skills=missing,
        matched_skills=[MatchedSkill(name=s, proficiency="Demonstrated", relevance="High") for s in matched],
        recommendations=recommendations,
        summary=summary,
    )


# ---------- project ideas ----------
_TITLE = re.compile(r'"title"\s*:\s*"([^"]+)"')
_DESCRIPTION = re.compile(r'"description"\s*:\s*"([^"]+)"')
_SKILLS_ADDRESSED = re.compile(r'"skillsAddressed"\s*:\s*\[(.*?)\]', re.DOTALL)
_MAX_FALLBACK_PROJECTS = 3

FALLBACK_STEPS = [
    "Plan the project",
    "Set up development environment",
    "Implement core features",
    "Test and refine",
    "Deploy",
]


def _split_skills(listing: str) -> List[str]:
    return [s.strip().strip("\"'").strip() for s in listing.split(",") if s.strip().strip("\"'").strip()]


def fallback_project_ideas(raw_text: str = "", missing_skills: Sequence[str] = ()) -> List[ProjectIdea]:
    """
    Project ideas without a parseable model answer. Titles, descriptions and
    skill lists are salvaged from the raw text when it has them; otherwise the
    missing skills are spread over up to three projects.
    """
    text = raw_text or ""
    titles = _TITLE.findall(text)
    descriptions = _DESCRIPTION.findall(text)
    skill_lists = [_split_skills(s) for s in _SKILLS_ADDRESSED.findall(text)]
    missing = list(dict.fromkeys(s for s in missing_skills if s))

    count = min(_MAX_FALLBACK_PROJECTS, max(len(titles) or len(missing), 1))
    ideas = []
    for i in range(count):
        if i < len(skill_lists) and skill_lists[i]:
            skills = skill_lists[i]
        else:
            skills = missing[i::count] or ["Relevant skill"]
        if i < len(descriptions):
            description = descriptions[i]
        elif missing:
            description = f"A project to help you develop {', '.join(skills)}."
        else:
            description = "A project to help you develop missing skills."
        ideas.append(ProjectIdea(
            id=f"project-{i + 1}",
            title=titles[i] if i < len(titles) else f"Project Idea {i + 1}",
            description=description,
            skills_addressed=skills,
            difficulty="Intermediate",
            time_estimate="2-4 weeks",
            steps=list(FALLBACK_STEPS),
            learning_resources=[LearningResource(title=f"{s} documentation", type="Documentation") for s in skills],
            tools=list(skills),
            deployment_options=["Local development", "GitHub Pages"],
            tags=list(skills),
        ))
    return ideas
