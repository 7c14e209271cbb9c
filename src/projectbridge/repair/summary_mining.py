# src/projectbridge/repair/summary_mining.py
"""
Recover skill-gap signals from the free-text `summary` of a gap analysis.

The LLM is asked for both a prose summary and structured arrays. When the
arrays come back empty but the prose names missing skills, the prose is
mined instead. Entries found this way are marked as inferred and default to
Low priority, below directly structured entries.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Tuple

from projectbridge.skills.models import normalize_skill_name

logger = logging.getLogger(__name__)

# longest phrase first, so "lacking experience in" wins over "lacking"
SKILL_INDICATORS = [
    "needs to gain experience in",
    "lacking experience in",
    "lacks knowledge of",
    "missing skills in",
    "needs to learn",
    "should acquire",
    "missing",
    "lacking",
]

PRIORITY_INDICATORS = [
    ("critical", "High"),
    ("essential", "High"),
    ("important", "High"),
    ("necessary", "High"),
    ("required", "High"),
    ("recommended", "Medium"),
    ("helpful", "Medium"),
    ("useful", "Medium"),
    ("beneficial", "Medium"),
    ("optional", "Low"),
    ("nice to have", "Low"),
    ("plus", "Low"),
    ("bonus", "Low"),
]

TECHNOLOGIES = [
    "React", "Angular", "Vue", "Next.js", "Nuxt", "Svelte", "JavaScript", "TypeScript",
    "HTML", "CSS", "SCSS", "Sass", "Tailwind", "Bootstrap", "Material UI", "Chakra UI",
    "Node.js", "Express", "Django", "Flask", "Laravel", "Ruby on Rails", "GraphQL", "REST",
    "AWS", "Azure", "GCP", "Firebase", "Docker", "Kubernetes", "Jenkins", "GitHub Actions",
    "CircleCI", "MongoDB", "PostgreSQL", "MySQL", "SQLite", "DynamoDB", "Redux", "MobX",
    "Zustand", "Context API", "Recoil", "Jest", "Mocha", "Cypress", "Playwright",
    "Testing Library", "Webpack", "Vite", "Rollup", "Parcel", "esbuild", "GSAP", "Three.js",
    "D3", "Chart.js", "Recharts", "Figma", "Sketch", "Adobe XD", "Photoshop", "Illustrator",
    "Sanity", "Contentful", "Strapi", "WordPress", "Drupal", "TensorFlow", "PyTorch",
    "scikit-learn", "Pandas", "NumPy",
]

MINED_PRIORITY = "Low"
MAX_SKILL_NAME_LENGTH = 30

_TECH_PATTERNS = [(t, re.compile(rf"(?<!\w){re.escape(t)}(?!\w)", re.IGNORECASE)) for t in TECHNOLOGIES]
_SENTENCE_END = re.compile(r"\.(?:\s+|$)")
_AND = re.compile(r"\band\b", re.IGNORECASE)
_MISSING_HINT = re.compile(r"\black(?:s|ing)\b|\bmissing\b|\bneeds? to\b|\bshould learn\b|\bdoesn't have\b")
_MATCHED_HINT = re.compile(r"\bhas\b|\bpossess(?:es)?\b|\bdemonstrates?\b|\bshows?\b|strong in|proficient in|experienced in")
_IMPROVE_HINT = re.compile(r"\bshould\b|\bcould\b|\bneeds? to\b|\bimprove|\blearn|\bacquire|\bgain")


def extract_technologies_from_summary(summary: str) -> List[str]:
    """Reference technologies named in the text, whole-word and case-insensitive, in order of appearance."""
    if not summary:
        return []
    found = []
    for tech, pattern in _TECH_PATTERNS:
        m = pattern.search(summary)
        if m:
            found.append((m.start(), tech))
    return [tech for _, tech in sorted(found)]


def _priority_for(sentence: str) -> str:
    lower = sentence.lower()
    for word, level in PRIORITY_INDICATORS:
        if re.search(rf"\b{re.escape(word)}\b", lower):
            return level
    return MINED_PRIORITY


def _split_clause(clause: str) -> List[str]:
    parts = re.split(r"[,;]", _AND.sub(",", clause))
    return [p.strip(" \t\n\"'()[]:!?-") for p in parts]


def extract_missing_skills_from_summary(summary: str, existing: Iterable[str] = ()) -> List[Dict[str, str]]:
    """
    Synthesize missingSkills entries from sentences such as
    "The candidate is lacking experience in Docker and Kubernetes."

    Known technologies in the clause after the indicator phrase are preferred;
    otherwise the clause is split on commas and "and". Names already in
    `existing` (compared by normalized name) are skipped.
    """
    if not summary or not isinstance(summary, str):
        return []
    seen = {normalize_skill_name(s) for s in existing}
    out: List[Dict[str, str]] = []
    for sentence in _SENTENCE_END.split(summary):
        lower = sentence.lower()
        for indicator in SKILL_INDICATORS:
            idx = lower.find(indicator)
            if idx == -1:
                continue
            clause = sentence[idx + len(indicator):]
            names = extract_technologies_from_summary(clause) or _split_clause(clause)
            priority = _priority_for(sentence)
            for name in names:
                key = normalize_skill_name(name)
                if len(name) < 2 or len(name) > MAX_SKILL_NAME_LENGTH or not key or key in seen:
                    continue
                seen.add(key)
                out.append({
                    "name": name,
                    "level": "Intermediate",
                    "priority": priority,
                    "context": f'Inferred from analysis summary (low confidence): "{indicator}{clause.rstrip()}"',
                })
            break
    if out:
        logger.info("[gap] mined %d missing skill(s) from summary", len(out))
    return out


def _as_dict(result: Any) -> Dict[str, Any]:
    if hasattr(result, "model_dump"):
        return result.model_dump(by_alias=True)
    return result or {}


def validate_skills_gap_consistency(result: Any) -> Tuple[bool, List[str]]:
    """Compare the summary prose with the structured arrays; returns (is_consistent, warnings)."""
    data = _as_dict(result)
    summary = data.get("summary") or ""
    lower = summary.lower()
    matched = [s.get("name", "") for s in data.get("matchedSkills") or []]
    missing = [s.get("name", "") for s in data.get("missingSkills") or []]
    structured = [s.lower() for s in matched + missing if s]
    warnings = []

    unlisted = [
        tech for tech in extract_technologies_from_summary(summary)
        if not any(tech.lower() == s or tech.lower() in s or s in tech.lower() for s in structured)
    ]
    if unlisted:
        warnings.append(f"Technologies mentioned in summary but missing from structured data: {', '.join(unlisted)}")
    if _MISSING_HINT.search(lower) and not missing:
        warnings.append("Summary mentions missing skills but missingSkills array is empty")
    if _MATCHED_HINT.search(lower) and not matched:
        warnings.append("Summary mentions matched skills but matchedSkills array is empty")
    if _IMPROVE_HINT.search(lower) and not data.get("recommendations"):
        warnings.append("Summary suggests improvements but recommendations array is empty")
    return not warnings, warnings


def log_skills_gap_validation(result: Any) -> Tuple[bool, List[str]]:
    ok, warnings = validate_skills_gap_consistency(result)
    if ok:
        logger.info("[gap] summary and structured data are consistent")
    for w in warnings:
        logger.warning("[gap] %s", w)
    return ok, warnings
