"""Tests for the merged knowledge graph and graph-driven gap enhancement."""

import unittest

from projectbridge.analysis.models import ExtractedSkills, MatchedSkill, MissingSkill, SkillGapAnalysisResult
from projectbridge.skills.abbreviations import (
    are_skills_equivalent,
    expand_skill_list,
    get_abbreviation,
    resolve_abbreviation,
)
from projectbridge.skills.data import backend, frontend
from projectbridge.skills.service import (
    build_skills_knowledge_graph,
    enhance_skills_gap_analysis,
    flatten_skills,
    get_default_graph,
)


class KnowledgeGraphTests(unittest.TestCase):
    def test_nodes_are_merged_by_id(self) -> None:
        graph = build_skills_knowledge_graph()
        ids = {s["id"] for s in frontend.SKILLS} | {s["id"] for s in backend.SKILLS}
        self.assertEqual(len(graph), len(ids))

    def test_edges_are_not_duplicated(self) -> None:
        graph = build_skills_knowledge_graph()
        keys = [(r.source_id, r.target_id, r.type) for r in graph.relationships]
        self.assertEqual(len(keys), len(set(keys)))
        # typescript REQUIRES javascript is declared in both domains
        self.assertEqual(keys.count(("typescript", "javascript", "REQUIRES")), 1)

    def test_cross_domain_edges(self) -> None:
        graph = build_skills_knowledge_graph()
        self.assertTrue(graph.is_skill_related_to("nextjs", "nodejs", ["REQUIRES"]))
        self.assertTrue(graph.is_skill_related_to("nodejs", "nextjs", ["USED_WITH"]))
        self.assertTrue(graph.is_skill_related_to("react", "express", ["USED_WITH"]))

    def test_cross_domain_edges_skip_missing_endpoints(self) -> None:
        graph = build_skills_knowledge_graph([frontend.build_frontend_skills_graph])
        self.assertNotIn("express", graph)
        self.assertFalse(graph.is_skill_related_to("react", "express"))
        self.assertTrue(graph.is_skill_related_to("react", "javascript", ["REQUIRES"]))

    def test_default_graph_is_shared(self) -> None:
        self.assertIs(get_default_graph(), get_default_graph())

    def test_flatten_skills_skips_soft(self) -> None:
        skills = ExtractedSkills(technical=["Python"], soft=["Leadership"], tools=["Git"], other=["Figma"])
        self.assertEqual(flatten_skills(skills), ["Python", "Git", "Figma"])


class EnhanceGapTests(unittest.TestCase):
    def setUp(self) -> None:
        self.current = SkillGapAnalysisResult(
            match_percentage=10,
            matched_skills=[MatchedSkill(name="react", proficiency="Advanced", relevance="Medium")],
            missing_skills=[MissingSkill(name="Terraform", level="Beginner", priority="Low",
                                         context="Needed for infrastructure work.")],
            summary="LLM summary",
        )

    def test_recomputes_from_graph_and_keeps_llm_details(self) -> None:
        resume = ExtractedSkills(technical=["JavaScript"], tools=["K8s"], soft=["Docker"])
        result = enhance_skills_gap_analysis(
            resume, ["React", "Kubernetes", "Docker", "Terraform"], self.current,
        )
        self.assertEqual(result.match_percentage, 50)
        self.assertEqual([s.name for s in result.matched_skills], ["React", "Kubernetes"])
        react, kubernetes = result.matched_skills
        self.assertEqual((react.proficiency, react.relevance), ("Advanced", "Medium"))
        self.assertEqual((kubernetes.proficiency, kubernetes.relevance), ("Intermediate", "High"))

        self.assertEqual([s.name for s in result.missing_skills], ["Docker", "Terraform"])
        docker, terraform = result.missing_skills
        self.assertEqual(docker.priority, "High")
        self.assertEqual(docker.context, "This skill is important for the role.")
        self.assertEqual((terraform.level, terraform.priority), ("Beginner", "Medium"))
        self.assertEqual(terraform.context, "Needed for infrastructure work.")

        self.assertEqual([r.priority for r in result.recommendations], ["High", "Medium"])
        self.assertEqual(result.recommendations[0].type, "Hands-on Practice")
        self.assertEqual(result.summary, "LLM summary")
        self.assertEqual(self.current.match_percentage, 10)

    def test_llm_details_are_matched_by_normalized_name(self) -> None:
        current = SkillGapAnalysisResult(
            matched_skills=[MatchedSkill(name="ReactJS", proficiency="Advanced", relevance="Medium")],
            missing_skills=[MissingSkill(name="NodeJS", level="Advanced", priority="Low", context="Backend APIs.")],
        )
        result = enhance_skills_gap_analysis(ExtractedSkills(technical=["React"]), ["React.js", "Node.js"], current)
        self.assertEqual([(s.name, s.proficiency) for s in result.matched_skills], [("React.js", "Advanced")])
        self.assertEqual([(s.name, s.level, s.context) for s in result.missing_skills],
                         [("Node.js", "Advanced", "Backend APIs.")])

    def test_no_job_skills_keeps_analysis(self) -> None:
        self.assertIs(enhance_skills_gap_analysis(ExtractedSkills(technical=["Go"]), [], self.current), self.current)

    def test_accepts_custom_graph(self) -> None:
        graph = build_skills_knowledge_graph([backend.build_backend_skills_graph])
        result = enhance_skills_gap_analysis(ExtractedSkills(technical=["Django"]), ["Python"],
                                             SkillGapAnalysisResult(), graph=graph)
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(result.missing_skills[0].name, "Python")


class AbbreviationTests(unittest.TestCase):
    def test_resolve(self) -> None:
        self.assertEqual(resolve_abbreviation("k8s"), "Kubernetes")
        self.assertEqual(resolve_abbreviation(" JS "), "JavaScript")
        self.assertEqual(resolve_abbreviation("Terraform"), "Terraform")

    def test_reverse_lookup(self) -> None:
        self.assertEqual(get_abbreviation("amazon web services"), "AWS")
        self.assertEqual(get_abbreviation("Terraform"), "Terraform")

    def test_equivalence(self) -> None:
        self.assertTrue(are_skills_equivalent("ML", "machine learning"))
        self.assertTrue(are_skills_equivalent("TS", "TypeScript"))
        self.assertFalse(are_skills_equivalent("Java", "JavaScript"))

    def test_expand_keeps_both_spellings(self) -> None:
        self.assertEqual(expand_skill_list(["JS", "JavaScript", "k8s", "Go"]),
                         ["JS", "JavaScript", "k8s", "Kubernetes", "Go"])


if __name__ == "__main__":
    unittest.main()
