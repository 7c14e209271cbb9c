# src/projectbridge/skills/service.py
import functools
import logging
from typing import Callable, Iterable, List, Optional

from projectbridge.analysis.models import (
    ExtractedSkills, GapRecommendation, MatchedSkill, MissingSkill, SkillGapAnalysisResult,
)
from projectbridge.skills.abbreviations import expand_skill_list
from projectbridge.skills.data.backend import build_backend_skills_graph
from projectbridge.skills.data.frontend import build_frontend_skills_graph
from projectbridge.skills.graph import SkillsGraph, UnknownSkillError
from projectbridge.skills.matcher import SkillMatcher
from projectbridge.skills.models import normalize_skill_name
from projectbridge.utils.config import settings

logger = logging.getLogger(__name__)

CROSS_DOMAIN_RELATIONSHIPS = [
    {"source_id": "react", "target_id": "express", "type": "USED_WITH", "strength": 0.8, "context": "MERN Stack"},
    {"source_id": "nextjs", "target_id": "nodejs", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "react", "target_id": "mongodb", "type": "USED_WITH", "strength": 0.7, "context": "MERN Stack"},
    {"source_id": "express", "target_id": "restful-api", "type": "USED_WITH", "strength": 0.9},
    {"source_id": "react", "target_id": "graphql", "type": "USED_WITH", "strength": 0.8},
    {"source_id": "react", "target_id": "aws", "type": "USED_WITH", "strength": 0.7},
    {"source_id": "nodejs", "target_id": "docker", "type": "USED_WITH", "strength": 0.8},
]

DEFAULT_BUILDERS = (build_frontend_skills_graph, build_backend_skills_graph)


def build_skills_knowledge_graph(builders: Iterable[Callable[[], SkillsGraph]] = DEFAULT_BUILDERS) -> SkillsGraph:
    """
    Merge domain sub-graphs into one: the first sub-graph to define a node id
    wins, edges are copied once (inverses included), then cross-domain edges
    are added for whichever endpoints exist.
    """
    graph = SkillsGraph()
    subgraphs = [build() for build in builders]
    for sub in subgraphs:
        for node in sub.nodes.values():
            if not graph.has_skill(node.id):
                graph.add_skill(node)

    seen = set()
    for sub in subgraphs:
        for rel in sub.relationships:
            key = (rel.source_id, rel.target_id, rel.type)
            if key in seen or not (graph.has_skill(rel.source_id) and graph.has_skill(rel.target_id)):
                continue
            seen.add(key)
            graph.relationships.append(rel)

    for rel in CROSS_DOMAIN_RELATIONSHIPS:
        try:
            graph.add_relationship(rel)
        except UnknownSkillError as e:
            logger.debug("[graph] skipped cross-domain edge: %s", e)

    logger.debug("[graph] built %d skills, %d edges", len(graph), graph.edge_count)
    return graph


@functools.lru_cache(maxsize=1)
def get_default_graph() -> SkillsGraph:
    """Process-wide graph, built on first use and only queried afterwards."""
    return build_skills_knowledge_graph()


def flatten_skills(skills: ExtractedSkills) -> List[str]:
    """Every category except soft skills, in category order."""
    return [
        *skills.technical, *skills.tools, *skills.frameworks, *skills.languages,
        *skills.databases, *skills.methodologies, *skills.platforms, *skills.other,
    ]


def find_missing_job_skills(
    resume_skills: ExtractedSkills, job_skills: List[str], graph: Optional[SkillsGraph] = None,
) -> List[str]:
    """Job skills the resume does not cover, soft skills included, judged by the graph matcher."""
    have = expand_skill_list([*flatten_skills(resume_skills), *resume_skills.soft])
    matcher = SkillMatcher(graph or get_default_graph(), semantic_threshold=settings.SEMANTIC_THRESHOLD)
    return matcher.find_missing_skills(have, job_skills)


def enhance_skills_gap_analysis(
    resume_skills: ExtractedSkills,
    job_skills: List[str],
    current: SkillGapAnalysisResult,
    graph: Optional[SkillsGraph] = None,
) -> SkillGapAnalysisResult:
    """
    Recompute match percentage, matched/missing skills, priorities and
    recommendations from the knowledge graph. Proficiency, relevance, level and
    context the LLM already gave for a skill are kept.
    """
    if not job_skills:
        logger.info("[gap] no job skills to match, keeping LLM analysis as is")
        return current

    matcher = SkillMatcher(graph or get_default_graph(), semantic_threshold=settings.SEMANTIC_THRESHOLD)
    have = expand_skill_list(flatten_skills(resume_skills))

    matches = matcher.find_all_matches(have, job_skills)
    missing = matcher.find_missing_skills(have, job_skills)
    pct = matcher.calculate_match_percentage(have, job_skills)
    recs = matcher.get_recommendations(missing)

    known_matched = {normalize_skill_name(s.name): s for s in current.matched_skills}
    known_missing = {normalize_skill_name(s.name): s for s in current.missing_skills}

    matched_skills = []
    for skill in matches:
        prev = known_matched.get(normalize_skill_name(skill))
        matched_skills.append(MatchedSkill(
            name=skill,
            proficiency=prev.proficiency if prev else "Intermediate",
            relevance=prev.relevance if prev else "High",
        ))

    missing_skills = []
    for skill in missing:
        prev = known_missing.get(normalize_skill_name(skill))
        missing_skills.append(MissingSkill(
            name=skill,
            level=prev.level if prev else "Intermediate",
            priority=matcher.determine_missing_skill_priority(skill, missing),
            context=prev.context if prev and prev.context else "This skill is important for the role.",
        ))

    recommendations = [
        GapRecommendation(type=r.type, description=r.description,
                          time_to_acquire=r.time_to_acquire, priority=r.priority)
        for r in recs
    ]

    logger.info("[gap] graph match %d%% (%d matched, %d missing)", pct, len(matched_skills), len(missing_skills))
    return current.model_copy(update={
        "match_percentage": pct,
        "matched_skills": matched_skills,
        "missing_skills": missing_skills,
        "recommendations": recommendations,
    })
