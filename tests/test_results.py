"""Tests for turning raw LLM text into typed analysis results."""

import json
import unittest

from projectbridge.analysis.fallback import fallback_project_ideas, generate_fallback_analysis
from projectbridge.analysis.models import ExtractedSkills, JobAnalysisResult, ResumeAnalysisResult
from projectbridge.analysis.results import (
    merge_missing_skills,
    normalize_skill_gap,
    parse_enhanced_skills,
    parse_extracted_skills,
    parse_job_analysis,
    parse_project_ideas,
    parse_resume_analysis,
    parse_skill_gap,
    validate_skills_gap_schema,
)


class ParseResultTests(unittest.TestCase):
    def test_extracted_skills_from_malformed_output(self) -> None:
        skills = parse_extracted_skills('{"technical": ["React" "Node.js"], "soft": ["Leadership"],}')
        self.assertEqual(skills.technical, ["React", "Node.js"])
        self.assertEqual(skills.soft, ["Leadership"])
        self.assertEqual(skills.tools, [])

    def test_extracted_skills_field_isolation(self) -> None:
        skills = parse_extracted_skills('{"technical": ["Python", 3], "soft": "Leadership"}')
        self.assertEqual(skills.technical, ["Python", "3"])
        self.assertEqual(skills.soft, [])

    def test_unparseable_output_gives_empty_result(self) -> None:
        self.assertEqual(parse_extracted_skills("Sorry, I cannot help with that."), ExtractedSkills())

    def test_enhanced_skills(self) -> None:
        raw = json.dumps({
            "technical": [{"name": "Python", "confidence": 0.9}, {"name": "Go", "confidence": "1.7"}, "Rust"],
            "ai_agents": [{"name": "LangChain", "confidence": 0.4}],
        })
        skills = parse_enhanced_skills(raw)
        self.assertEqual([(s.name, s.confidence) for s in skills.technical],
                         [("Python", 0.9), ("Go", 1), ("Rust", 0.5)])
        self.assertEqual(skills.names(min_confidence=0.5).technical, ["Python", "Go", "Rust"])
        self.assertEqual(skills.names().technical, ["Python", "Go", "Rust", "LangChain"])

    def test_resume_analysis(self) -> None:
        raw = json.dumps({
            "skills": {"technical": ["Go"]},
            "contactInfo": {"name": "Ann", "email": None},
            "projects": ["ProjectBridge", {"description": "no name"}],
            "experience": [{"title": "Engineer", "keyAchievements": ["Shipped v1"]}],
        })
        resume = parse_resume_analysis(raw)
        self.assertEqual(resume.skills.technical, ["Go"])
        self.assertEqual(resume.contact_info.name, "Ann")
        self.assertIsNone(resume.contact_info.email)
        self.assertEqual([p.name for p in resume.projects], ["ProjectBridge"])
        self.assertEqual(resume.experience[0].key_achievements, ["Shipped v1"])

    def test_job_analysis(self) -> None:
        raw = ('```json\n{"title": "Backend Engineer", "requiredSkills": ["Python", "Docker"], '
               '"keywordsDensity": [{"keyword": "python", "count": "4"}, {"count": 2}]}\n```')
        job = parse_job_analysis(raw)
        self.assertEqual(job.title, "Backend Engineer")
        self.assertEqual(job.required_skills, ["Python", "Docker"])
        self.assertEqual([(k.keyword, k.count) for k in job.keywords_density], [("python", 4)])
        self.assertEqual(job.qualifications.required, [])

    def test_oversized_numbers_do_not_escape(self) -> None:
        digits = "1" + "0" * 400
        gap = parse_skill_gap('{"matchPercentage": ' + digits + ', "summary": "ok"}')
        self.assertEqual(gap.match_percentage, 100)
        self.assertEqual(gap.summary, "ok")
        job = parse_job_analysis('{"title": "SRE", "keywordsDensity": [{"keyword": "go", "count": ' + digits + '}]}')
        self.assertEqual(job.title, "SRE")
        self.assertEqual(job.keywords_density[0].count, 10 ** 400)


class SkillGapResultTests(unittest.TestCase):
    def test_summary_is_mined_when_missing_skills_empty(self) -> None:
        raw = json.dumps({
            "matchPercentage": "85%",
            "missingSkills": [],
            "matchedSkills": [{"name": "React"}],
            "summary": "The candidate is missing Docker and React.",
        })
        result = parse_skill_gap(raw)
        self.assertEqual(result.match_percentage, 85)
        self.assertEqual([s.name for s in result.missing_skills], ["Docker"])
        self.assertEqual(result.missing_skills[0].priority, "Low")
        self.assertEqual(result.matched_skills[0].relevance, "Medium")

    def test_structured_missing_skills_are_not_mined(self) -> None:
        data = normalize_skill_gap({
            "missingSkills": [{"name": "Go", "priority": "High"}],
            "summary": "The candidate is missing Docker.",
        })
        self.assertEqual([s["name"] for s in data["missingSkills"]], ["Go"])

    def test_unparseable_gap(self) -> None:
        result = parse_skill_gap("not json")
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(result.missing_skills, [])
        self.assertEqual(result.summary, "")

    def test_merge_is_case_insensitive(self) -> None:
        merged = merge_missing_skills(
            [{"name": "Node.js"}],
            [{"name": "nodejs"}, {"name": "Docker"}, {"name": "docker"}],
        )
        self.assertEqual([m["name"] for m in merged], ["Node.js", "Docker"])

    def test_schema_check(self) -> None:
        result = parse_skill_gap('{"matchPercentage": 40, "missingSkills": ["Docker"], "summary": "ok"}')
        data = result.model_dump(by_alias=True)
        self.assertTrue(validate_skills_gap_schema(data))
        self.assertFalse(validate_skills_gap_schema(dict(data, matchPercentage=120)))
        self.assertFalse(validate_skills_gap_schema(dict(data, missingSkills=[dict(data["missingSkills"][0],
                                                                                   priority="Urgent")])))
        self.assertFalse(validate_skills_gap_schema(dict(data, summary=None)))
        self.assertFalse(validate_skills_gap_schema([]))


class ProjectIdeaResultTests(unittest.TestCase):
    def test_wrapped_array(self) -> None:
        ideas = parse_project_ideas('{"projects": [{"title": "Chat App", "tags": "oops"}]}')
        self.assertEqual([(i.id, i.title) for i in ideas], [("project-1", "Chat App")])
        self.assertEqual(ideas[0].tags, [])
        self.assertEqual(ideas[0].difficulty, "Intermediate")

    def test_single_idea_keeps_its_id(self) -> None:
        (idea,) = parse_project_ideas('{"id": "cli-tool", "title": "CLI Tool", "learningResources": '
                                      '[{"title": "Docs", "type": "blog"}, {"url": "x"}]}')
        self.assertEqual(idea.id, "cli-tool")
        self.assertEqual([(r.title, r.type) for r in idea.learning_resources], [("Docs", "Other")])

    def test_titles_are_salvaged_from_unusable_output(self) -> None:
        raw = 'Ideas: "title": "Chat App", "description": "Realtime chat", "skillsAddressed": ["WebSockets", "Redis"]'
        (idea,) = parse_project_ideas(raw, ["Docker"])
        self.assertEqual((idea.id, idea.title, idea.description), ("project-1", "Chat App", "Realtime chat"))
        self.assertEqual(idea.skills_addressed, ["WebSockets", "Redis"])

    def test_generic_idea_when_nothing_is_known(self) -> None:
        (idea,) = parse_project_ideas("")
        self.assertEqual(idea.title, "Project Idea 1")
        self.assertEqual(idea.skills_addressed, ["Relevant skill"])
        self.assertEqual(idea.description, "A project to help you develop missing skills.")
        self.assertEqual(len(idea.steps), 5)

    def test_fallback_caps_at_three_projects(self) -> None:
        ideas = fallback_project_ideas("", ["A", "B", "C", "D"])
        self.assertEqual([i.skills_addressed for i in ideas], [["A", "D"], ["B"], ["C"]])
        self.assertEqual(fallback_project_ideas("", ["A", "B", "C", "D"]), ideas)


class FallbackAnalysisTests(unittest.TestCase):
    def test_rule_based_analysis(self) -> None:
        resume = ResumeAnalysisResult(skills=ExtractedSkills(technical=["Python", "Docker"]))
        job = JobAnalysisResult(required_skills=["Python", "Kubernetes"], preferred_skills=["Docker", "Go"])
        result = generate_fallback_analysis(resume, job)
        self.assertEqual(result.match_percentage, 50)
        self.assertEqual([(s.name, s.priority) for s in result.missing_skills],
                         [("kubernetes", "High"), ("go", "Medium")])
        self.assertEqual([s.name for s in result.matched_skills], ["python", "docker"])
        self.assertEqual([(r.type, r.time_to_acquire) for r in result.recommendations],
                         [("Project", "1-3 months"), ("Course", "2-4 months")])
        self.assertEqual(result.summary, "You match approximately 50% of the job requirements. Focus on "
                                         "acquiring the missing required skills first, particularly kubernetes.")

    def test_is_deterministic(self) -> None:
        resume = ResumeAnalysisResult(skills=ExtractedSkills(technical=["Java"]))
        job = JobAnalysisResult(required_skills=["Rust", "Go", "C++", "Zig", "Elixir", "Haskell"])
        self.assertEqual(generate_fallback_analysis(resume, job), generate_fallback_analysis(resume, job))
        self.assertEqual(len(generate_fallback_analysis(resume, job).recommendations), 5)

    def test_no_job_skills(self) -> None:
        result = generate_fallback_analysis(ResumeAnalysisResult(), JobAnalysisResult())
        self.assertEqual(result.match_percentage, 0)
        self.assertEqual(result.summary, "You match approximately 0% of the job requirements.")


if __name__ == "__main__":
    unittest.main()
