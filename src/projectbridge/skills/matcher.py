# src/projectbridge/skills/matcher.py
from __future__ import annotations
import math
from typing import Dict, List, Optional

from pydantic import BaseModel

from projectbridge.skills.graph import SkillsGraph, name_similarity
from projectbridge.skills.models import Priority, SkillNode, normalize_skill_name
from projectbridge.utils.config import settings

PRIORITY_ORDER = {"High": 0, "Medium": 1, "Low": 2}

RECOMMENDATION_TYPE = {
    "CONCEPT": "Learning Resource",
    "TOOL": "Hands-on Practice",
    "FRAMEWORK": "Project",
    "LIBRARY": "Project",
}


class Recommendation(BaseModel):
    skill: str
    type: str
    description: str
    time_to_acquire: str
    priority: Priority


def _unique(items: List[str]) -> List[str]:
    seen, out = set(), []
    for it in items:
        if it not in seen:
            seen.add(it)
            out.append(it)
    return out


def time_to_acquire(popularity: Optional[int]) -> str:
    # popular skills have more learning material
    if popularity is not None and popularity >= 80:
        return "2-4 weeks"
    if popularity is not None and popularity < 50:
        return "3-6 months"
    return "1-3 months"


class SkillMatcher:
    """
    Compares a candidate's skills (`have`) against required skills (`need`) using a
    SkillsGraph. Every method is a pure function of the graph and its arguments and
    returns `need` entries in their original spelling and order.
    """

    def __init__(self, graph: SkillsGraph, semantic_threshold: Optional[float] = None):
        self.graph = graph
        self.semantic_threshold = settings.SEMANTIC_THRESHOLD if semantic_threshold is None else semantic_threshold

    def _resolve(self, names: List[str]) -> Dict[str, Optional[SkillNode]]:
        return {n: self.graph.find_skill_by_name(n) for n in names}

    # ---------- match tiers ----------
    def find_exact_matches(self, have: List[str], need: List[str]) -> List[str]:
        have_nodes = self._resolve(have)
        have_ids = {node.id for node in have_nodes.values() if node}
        # names outside the taxonomy still match on their normalized spelling
        have_names = {normalize_skill_name(n) for n, node in have_nodes.items() if node is None}
        out = []
        for skill in _unique(need):
            node = self.graph.find_skill_by_name(skill)
            if node is not None and node.id in have_ids:
                out.append(skill)
            elif node is None and normalize_skill_name(skill) in have_names:
                out.append(skill)
        return out

    def find_semantic_matches(self, have: List[str], need: List[str], threshold: Optional[float] = None) -> List[str]:
        threshold = self.semantic_threshold if threshold is None else threshold
        have_nodes = self._resolve(have)
        out = []
        for skill in _unique(need):
            need_node = self.graph.find_skill_by_name(skill)
            for have_skill, have_node in have_nodes.items():
                if need_node is not None and have_node is not None and need_node.id == have_node.id:
                    continue  # exact, not semantic
                if self._is_semantic_pair(have_skill, have_node, skill, need_node, threshold):
                    out.append(skill)
                    break
        return out

    def _is_semantic_pair(self, have_skill: str, have_node: Optional[SkillNode],
                          need_skill: str, need_node: Optional[SkillNode], threshold: float) -> bool:
        if have_node is not None and need_node is not None:
            if self.graph.is_skill_related_to(have_node.id, need_node.id, ["SIMILAR_TO", "ALTERNATIVE_TO"]):
                return True
        if need_node is not None:
            similar = self.graph.find_similar_skills(have_skill, threshold)
            if any(n.id == need_node.id for n in similar):
                return True
        return name_similarity(normalize_skill_name(have_skill), normalize_skill_name(need_skill)) >= threshold

    def find_implied_matches(self, have: List[str], need: List[str]) -> List[str]:
        have_nodes = [node for node in self._resolve(have).values() if node is not None]
        out = []
        for skill in _unique(need):
            need_node = self.graph.find_skill_by_name(skill)
            if need_node is None:
                continue
            for have_node in have_nodes:
                if have_node.id == need_node.id:
                    continue
                if (self.graph.is_skill_related_to(have_node.id, need_node.id, ["PARENT_OF"])
                        or self.graph.is_skill_related_to(need_node.id, have_node.id, ["REQUIRES"])):
                    out.append(skill)
                    break
        return out

    def find_all_matches(self, have: List[str], need: List[str]) -> List[str]:
        matched = set(self.find_exact_matches(have, need))
        matched.update(self.find_semantic_matches(have, need))
        matched.update(self.find_implied_matches(have, need))
        return [skill for skill in _unique(need) if skill in matched]

    # ---------- gap ----------
    def calculate_match_percentage(self, have: List[str], need: List[str]) -> int:
        """An empty requirement list is vacuously satisfied (100)."""
        required = _unique(need)
        if not required:
            return 100
        matches = self.find_all_matches(have, required)
        return int(math.floor(len(matches) / len(required) * 100 + 0.5))

    def find_missing_skills(self, have: List[str], need: List[str]) -> List[str]:
        matched = set(self.find_all_matches(have, need))
        return [skill for skill in _unique(need) if skill not in matched]

    def determine_missing_skill_priority(self, skill: str, all_missing: List[str]) -> Priority:
        node = self.graph.find_skill_by_name(skill)
        if node is None:
            return "Medium"

        is_prerequisite = False
        for other in all_missing:
            if other == skill:
                continue
            other_node = self.graph.find_skill_by_name(other)
            if other_node is None or other_node.id == node.id:
                continue
            if self.graph.is_skill_related_to(other_node.id, node.id, ["REQUIRES"]):
                is_prerequisite = True
                break

        if is_prerequisite or (node.popularity is not None and node.popularity >= 80):
            return "High"
        if node.popularity is not None and node.popularity < 50:
            return "Low"
        return "Medium"

    def get_recommendations(self, missing: List[str]) -> List[Recommendation]:
        recs = []
        for skill in _unique(missing):
            node = self.graph.find_skill_by_name(skill)
            rec_type = RECOMMENDATION_TYPE.get(node.category, "Course") if node else "Course"
            how = "building projects" if rec_type == "Project" else "online resources"
            recs.append(Recommendation(
                skill=skill,
                type=rec_type,
                description=f"Learn {skill} through {how}",
                time_to_acquire=time_to_acquire(node.popularity if node else None),
                priority=self.determine_missing_skill_priority(skill, missing),
            ))
        return sorted(recs, key=lambda r: PRIORITY_ORDER[r.priority])
