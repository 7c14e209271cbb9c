# src/projectbridge/ui/gradio_app.py
from __future__ import annotations
import logging
from typing import List

import gradio as gr

from projectbridge.analysis.models import ExtractedSkills, SkillGapAnalysisResult
from projectbridge.parsing.extract import (
    analyze_job_description, analyze_resume, analyze_skills_gap_from_results,
    extract_skill_names, generate_project_ideas,
)
from projectbridge.skills.service import enhance_skills_gap_analysis

logger = logging.getLogger(__name__)


# ---------- helpers ----------
def read_text_file(file_path: str) -> str:
    if not file_path:
        return ""
    with open(file_path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()


def _split_list(text: str) -> List[str]:
    return [s.strip() for s in (text or "").replace("\n", ",").split(",") if s.strip()]


def on_analyze_click(resume_text: str, jd_text: str, resume_file, jd_file, role_focus: str):
    resume_text = resume_text or read_text_file(resume_file)
    jd_text = jd_text or read_text_file(jd_file)
    if not resume_text.strip() or not jd_text.strip():
        error = {"error": "Provide both a resume and a job description"}
        return error, error
    resume = analyze_resume(resume_text)
    job = analyze_job_description(jd_text)
    result = analyze_skills_gap_from_results(resume, job)
    logger.info("[ui] gap analysis done: %d%% match", result.match_percentage)
    ideas = generate_project_ideas(resume, job, role_focus or "")
    return result.model_dump(by_alias=True), [idea.model_dump(by_alias=True, exclude_none=True) for idea in ideas]


def on_extract_click(text: str, source: str, enhanced: bool, min_confidence: float):
    if not (text or "").strip():
        return {"error": "Paste a resume or a job description"}
    skills = extract_skill_names(text, "job" if source == "Job description" else "resume",
                                 enhanced=enhanced, min_confidence=min_confidence or 0.0)
    return skills.model_dump()


def on_match_click(have_text: str, need_text: str):
    """Offline: graph-only matching of two comma separated skill lists, no LLM."""
    need = _split_list(need_text)
    if not need:
        return {"error": "List at least one required skill"}
    result = enhance_skills_gap_analysis(
        ExtractedSkills(technical=_split_list(have_text)), need, SkillGapAnalysisResult()
    )
    return result.model_dump(by_alias=True, exclude={"missing_qualifications", "missing_experience", "summary"})


with gr.Blocks(title="ProjectBridge: Resume vs JD Skill Gap") as demo:
    gr.Markdown("# ProjectBridge\nCompare a resume with a job description and get a prioritized skill gap.")

    with gr.Tab("Full analysis (LLM)"):
        with gr.Row():
            resume_in = gr.Textbox(label="Resume", lines=14)
            jd_in = gr.Textbox(label="Job description", lines=14)
        with gr.Row():
            resume_file = gr.File(label="...or upload resume (.txt)", file_types=[".txt"], type="filepath")
            jd_file = gr.File(label="...or upload JD (.txt)", file_types=[".txt"], type="filepath")
        role_focus_in = gr.Textbox(label="Role focus (optional)", placeholder="e.g. backend, platform engineering")
        analyze_btn = gr.Button("Analyze gap", variant="primary")
        gap_json = gr.JSON(label="Skill gap analysis")
        ideas_json = gr.JSON(label="Project ideas")

    with gr.Tab("Skill extraction (LLM)"):
        extract_in = gr.Textbox(label="Resume or job description", lines=12)
        with gr.Row():
            source_in = gr.Radio(["Resume", "Job description"], value="Resume", label="Source")
            enhanced_in = gr.Checkbox(label="Enhanced (AI categories, confidence scores)", value=False)
            confidence_in = gr.Slider(0.0, 1.0, value=0.0, step=0.05, label="Min confidence (enhanced only)")
        extract_btn = gr.Button("Extract skills", variant="secondary")
        skills_json = gr.JSON(label="Extracted skills")

    with gr.Tab("Quick match (offline)"):
        have_in = gr.Textbox(label="Your skills (comma separated)", placeholder="JavaScript, CSS, Git")
        need_in = gr.Textbox(label="Required skills (comma separated)", placeholder="React, Docker, Kubernetes")
        match_btn = gr.Button("Match", variant="secondary")
        match_json = gr.JSON(label="Graph match")

    # Wire events
    analyze_btn.click(
        fn=on_analyze_click,
        inputs=[resume_in, jd_in, resume_file, jd_file, role_focus_in],
        outputs=[gap_json, ideas_json],
    )
    extract_btn.click(
        fn=on_extract_click,
        inputs=[extract_in, source_in, enhanced_in, confidence_in],
        outputs=skills_json,
    )
    match_btn.click(
        fn=on_match_click,
        inputs=[have_in, need_in],
        outputs=match_json,
    )

if __name__ == "__main__":
    demo.launch()
