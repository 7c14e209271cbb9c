import re
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, computed_field

Category = Literal[
    "PROGRAMMING_LANGUAGE", "FRAMEWORK", "LIBRARY", "DATABASE", "TOOL",
    "PLATFORM", "METHODOLOGY", "CONCEPT", "SOFT_SKILL",
]
Domain = Literal[
    "FRONTEND", "BACKEND", "FULLSTACK", "DEVOPS", "DATA",
    "MOBILE", "AI_ML", "SECURITY", "DESIGN", "MANAGEMENT",
]
Relation = Literal[
    "PARENT_OF", "CHILD_OF", "REQUIRES", "SIMILAR_TO",
    "ALTERNATIVE_TO", "USED_WITH", "SUCCESSOR_OF", "PREDECESSOR_OF",
]
Priority = Literal["High", "Medium", "Low"]

# Requires -> UsedWith is an approximation; UsedWith itself has no inverse.
INVERSE_RELATION = {
    "PARENT_OF": "CHILD_OF",
    "CHILD_OF": "PARENT_OF",
    "REQUIRES": "USED_WITH",
    "SIMILAR_TO": "SIMILAR_TO",
    "ALTERNATIVE_TO": "ALTERNATIVE_TO",
    "SUCCESSOR_OF": "PREDECESSOR_OF",
    "PREDECESSOR_OF": "SUCCESSOR_OF",
}

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def normalize_skill_name(name: str) -> str:
    """
    Lowercase, drop punctuation and whitespace: 'Node.js' -> 'nodejs'.

    Names that differ only in symbols collide: 'C#', 'C++' and 'C' all become
    'c', so lookups and similarity treat them as one skill. The taxonomy
    only carries C# (as 'csharp'), which keeps its own id reachable via the
    'CSharp' alias.
    """
    return _SPACES.sub("", _NON_WORD.sub("", (name or "").lower())).strip()


class SkillNode(BaseModel):
    id: str = Field(..., description="Stable slug, e.g. 'react', 'spring-boot'")
    name: str = Field(..., description="Canonical display name, e.g. 'React'")
    aliases: List[str] = Field(default_factory=list)
    category: Category = "CONCEPT"
    domains: List[Domain] = Field(default_factory=list)
    description: Optional[str] = None
    popularity: Optional[int] = Field(None, ge=0, le=100)
    is_deprecated: bool = False
    versions: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def normalized_name(self) -> str:
        return normalize_skill_name(self.name)

    @property
    def normalized_aliases(self) -> List[str]:
        return [normalize_skill_name(a) for a in self.aliases]


class SkillRelationship(BaseModel):
    source_id: str
    target_id: str
    type: Relation
    strength: float = Field(0.5, ge=0, le=1)
    context: Optional[str] = None

    def inverse(self) -> Optional["SkillRelationship"]:
        inverse_type = INVERSE_RELATION.get(self.type)
        if inverse_type is None:
            return None
        return SkillRelationship(
            source_id=self.target_id,
            target_id=self.source_id,
            type=inverse_type,
            strength=self.strength,
            context=self.context,
        )
