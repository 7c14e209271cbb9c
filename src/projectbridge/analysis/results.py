# src/projectbridge/analysis/results.py
"""Raw LLM text -> repaired JSON -> normalized dict -> typed result."""
import logging
from typing import Any, Dict, List, Sequence

from projectbridge.analysis.models import (
    ENHANCED_SKILLS_DEFAULTS, ENHANCED_SKILLS_SCHEMA, EXTRACTED_SKILLS_DEFAULTS,
    EXTRACTED_SKILLS_SCHEMA, JOB_DEFAULTS, JOB_SCHEMA, RESUME_DEFAULTS, RESUME_SCHEMA,
    SKILL_GAP_DEFAULTS, SKILL_GAP_SCHEMA, EnhancedExtractedSkills, ExtractedSkills,
    JobAnalysisResult, PROJECT_IDEAS_SCHEMA, ProjectIdea, ResumeAnalysisResult, SkillGapAnalysisResult,
)
from projectbridge.analysis.fallback import fallback_project_ideas
from projectbridge.repair.json_repair import safe_parse_json
from projectbridge.repair.normalize import normalize
from projectbridge.repair.summary_mining import extract_missing_skills_from_summary
from projectbridge.skills.models import normalize_skill_name

logger = logging.getLogger(__name__)

_PRIORITIES = ("High", "Medium", "Low")


def _load(raw_text: str, schema: Dict[str, Any], defaults: Dict[str, Any], label: str) -> Dict[str, Any]:
    parsed = safe_parse_json(raw_text, fallback=None)
    if parsed is None:
        logger.warning("[%s] could not recover JSON from LLM output, using defaults", label)
    elif not isinstance(parsed, dict):
        logger.warning("[%s] expected a JSON object, got %s; using defaults", label, type(parsed).__name__)
    return normalize(parsed, schema, defaults)


def parse_extracted_skills(raw_text: str) -> ExtractedSkills:
    data = _load(raw_text, EXTRACTED_SKILLS_SCHEMA, EXTRACTED_SKILLS_DEFAULTS, "skills")
    return ExtractedSkills.model_validate(data)


def parse_enhanced_skills(raw_text: str) -> EnhancedExtractedSkills:
    data = _load(raw_text, ENHANCED_SKILLS_SCHEMA, ENHANCED_SKILLS_DEFAULTS, "skills+")
    return EnhancedExtractedSkills.model_validate(data)


def parse_resume_analysis(raw_text: str) -> ResumeAnalysisResult:
    data = _load(raw_text, RESUME_SCHEMA, RESUME_DEFAULTS, "resume")
    return ResumeAnalysisResult.model_validate(data)


def parse_job_analysis(raw_text: str) -> JobAnalysisResult:
    data = _load(raw_text, JOB_SCHEMA, JOB_DEFAULTS, "jd")
    return JobAnalysisResult.model_validate(data)


def normalize_skill_gap(raw: Any) -> Dict[str, Any]:
    """
    Normalize a parsed gap analysis. When `missingSkills` comes back empty
    but the summary has prose, the summary is mined for missing skills and
    merged in, de-duplicated by normalized name.
    """
    data = normalize(raw, SKILL_GAP_SCHEMA, SKILL_GAP_DEFAULTS)
    if not data["missingSkills"] and data["summary"].strip():
        matched = [s["name"] for s in data["matchedSkills"]]
        mined = extract_missing_skills_from_summary(data["summary"], existing=matched)
        data["missingSkills"] = merge_missing_skills(data["missingSkills"], mined)
    return data


def merge_missing_skills(structured, mined):
    """Structured entries win; mined ones are appended unless their normalized name is already present."""
    seen = {normalize_skill_name(s["name"]) for s in structured}
    merged = list(structured)
    for entry in mined:
        key = normalize_skill_name(entry["name"])
        if key and key not in seen:
            seen.add(key)
            merged.append(entry)
    return merged


def parse_skill_gap(raw_text: str) -> SkillGapAnalysisResult:
    parsed = safe_parse_json(raw_text, fallback=None)
    if parsed is None:
        logger.warning("[gap] could not recover JSON from LLM output, using defaults")
    return SkillGapAnalysisResult.model_validate(normalize_skill_gap(parsed))


def validate_skills_gap_schema(data: Any) -> bool:
    """Strict shape check of a camelCase gap analysis dict, no coercion."""
    if not isinstance(data, dict):
        return False
    pct = data.get("matchPercentage")
    if isinstance(pct, bool) or not isinstance(pct, (int, float)) or not 0 <= pct <= 100:
        return False
    if not isinstance(data.get("summary"), str):
        return False
    required_fields = {
        "missingSkills": ("name", "level", "priority", "context"),
        "matchedSkills": ("name", "proficiency", "relevance"),
        "recommendations": ("type", "description", "timeToAcquire", "priority"),
        "missingQualifications": ("description", "importance", "alternative"),
        "missingExperience": ("area", "yearsNeeded", "suggestion"),
    }
    for field, keys in required_fields.items():
        items = data.get(field)
        if not isinstance(items, list):
            return False
        for item in items:
            if not isinstance(item, dict) or not all(isinstance(item.get(k), str) for k in keys):
                return False
            if "priority" in keys and item["priority"] not in _PRIORITIES:
                return False
            if field == "matchedSkills" and item["relevance"] not in _PRIORITIES:
                return False
    return True


def parse_project_ideas(raw_text: str, missing_skills: Sequence[str] = ()) -> List[ProjectIdea]:
    """
    Project ideas from LLM text. Ideas without a title are dropped, missing ids
    become `project-<n>`, and when nothing survives the rule-based ideas for
    `missing_skills` are returned instead.
    """
    parsed = safe_parse_json(raw_text, fallback=None)
    if isinstance(parsed, dict) and "title" in parsed:
        parsed = [parsed]
    elif isinstance(parsed, dict):
        # wrapped, e.g. {"projects": [...]}
        parsed = next((v for v in parsed.values() if isinstance(v, list)), None)
    ideas = normalize(parsed, PROJECT_IDEAS_SCHEMA, [])
    if not ideas:
        logger.warning("[projects] no usable project ideas in LLM output, using fallback projects")
        return fallback_project_ideas(raw_text, missing_skills)
    for i, idea in enumerate(ideas):
        idea["id"] = idea["id"] or f"project-{i + 1}"
    return [ProjectIdea.model_validate(idea) for idea in ideas]
