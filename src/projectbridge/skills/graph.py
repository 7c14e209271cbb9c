# src/projectbridge/skills/graph.py
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from rapidfuzz.distance import Levenshtein

from projectbridge.skills.models import (
    Relation, SkillNode, SkillRelationship, normalize_skill_name,
)
from projectbridge.utils.config import settings


class UnknownSkillError(ValueError):
    """Raised when a relationship references a skill id that is not in the graph."""


def name_similarity(a: str, b: str) -> float:
    """1 - editDistance / max(len(a), len(b)); two empty strings are identical."""
    return Levenshtein.normalized_similarity(a, b)


class SkillsGraph:
    """
    In-memory skill graph: nodes keyed by id plus a flat list of typed edges.

    Built once (add_skill / add_relationship), then only queried. Lookups are
    linear scans in node insertion order; the taxonomy is small.
    """

    def __init__(self):
        self.nodes: Dict[str, SkillNode] = {}
        self.relationships: List[SkillRelationship] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, skill_id: str) -> bool:
        return skill_id in self.nodes

    def has_skill(self, skill_id: str) -> bool:
        return skill_id in self.nodes

    @property
    def edge_count(self) -> int:
        return len(self.relationships)

    # ---------- build ----------
    def add_skill(self, skill: SkillNode | dict) -> SkillNode:
        node = skill if isinstance(skill, SkillNode) else SkillNode(**skill)
        self.nodes[node.id] = node
        return node

    def add_relationship(self, relationship: SkillRelationship | dict) -> None:
        rel = relationship if isinstance(relationship, SkillRelationship) else SkillRelationship(**relationship)
        missing = [sid for sid in (rel.source_id, rel.target_id) if sid not in self.nodes]
        if missing:
            raise UnknownSkillError(
                f"Cannot add {rel.type} {rel.source_id} -> {rel.target_id}: unknown skill id(s) {missing}"
            )
        self.relationships.append(rel)
        inverse = rel.inverse()
        if inverse is not None:
            self.relationships.append(inverse)

    # ---------- queries ----------
    def get_related_skills(self, skill_id: str, types: Optional[Iterable[Relation]] = None) -> List[SkillNode]:
        if skill_id not in self.nodes:
            return []
        wanted = set(types) if types is not None else None
        return [
            self.nodes[r.target_id]
            for r in self.relationships
            if r.source_id == skill_id and (wanted is None or r.type in wanted)
        ]

    def find_skill_by_name(self, name: str) -> Optional[SkillNode]:
        normalized = normalize_skill_name(name)
        if not normalized:
            return None
        for node in self.nodes.values():
            if node.normalized_name == normalized:
                return node
        for node in self.nodes.values():
            if normalized in node.normalized_aliases:
                return node
        return None

    def best_similarity(self, name: str, node: SkillNode) -> float:
        normalized = normalize_skill_name(name)
        candidates = [node.normalized_name, *node.normalized_aliases]
        return max(name_similarity(normalized, c) for c in candidates)

    def find_similar_skills(self, name: str, threshold: Optional[float] = None) -> List[SkillNode]:
        threshold = settings.SIMILARITY_THRESHOLD if threshold is None else threshold
        scored = [(self.best_similarity(name, node), node) for node in self.nodes.values()]
        hits = [(score, node) for score, node in scored if score >= threshold]
        hits.sort(key=lambda kv: kv[0], reverse=True)
        return [node for _, node in hits]

    def is_skill_related_to(self, skill_id1: str, skill_id2: str,
                            types: Optional[Iterable[Relation]] = None) -> bool:
        wanted = set(types) if types is not None else None
        return any(
            r.source_id == skill_id1 and r.target_id == skill_id2 and (wanted is None or r.type in wanted)
            for r in self.relationships
        )

    def get_skill_hierarchy(self, skill_id: str) -> List[SkillNode]:
        """The skill, its parents (CHILD_OF targets), then its children (PARENT_OF targets)."""
        if skill_id not in self.nodes:
            return []
        return [
            self.nodes[skill_id],
            *self.get_related_skills(skill_id, ["CHILD_OF"]),
            *self.get_related_skills(skill_id, ["PARENT_OF"]),
        ]

    def normalize_skill_name(self, name: str) -> str:
        return normalize_skill_name(name)
