# src/projectbridge/skills/abbreviations.py
from typing import Iterable, List

ABBREVIATIONS = {
    # cloud & infrastructure
    "AWS": "Amazon Web Services",
    "GCP": "Google Cloud Platform",
    "Azure": "Microsoft Azure",
    "K8s": "Kubernetes",
    "IaC": "Infrastructure as Code",
    "CI/CD": "Continuous Integration/Continuous Deployment",
    "VM": "Virtual Machine",
    "EC2": "Elastic Compute Cloud",
    "S3": "Simple Storage Service",
    "IAM": "Identity and Access Management",
    # ai & ml
    "ML": "Machine Learning",
    "AI": "Artificial Intelligence",
    "DL": "Deep Learning",
    "NLP": "Natural Language Processing",
    "CV": "Computer Vision",
    "RL": "Reinforcement Learning",
    "RAG": "Retrieval Augmented Generation",
    "LLM": "Large Language Model",
    "CNN": "Convolutional Neural Network",
    "RNN": "Recurrent Neural Network",
    # programming
    "JS": "JavaScript",
    "TS": "TypeScript",
    "OOP": "Object-Oriented Programming",
    "FP": "Functional Programming",
    "API": "Application Programming Interface",
    "REST": "Representational State Transfer",
    "SOAP": "Simple Object Access Protocol",
    "SQL": "Structured Query Language",
    "NoSQL": "Not Only SQL",
    "ORM": "Object-Relational Mapping",
    "IDE": "Integrated Development Environment",
    "SDK": "Software Development Kit",
    "UI": "User Interface",
    "UX": "User Experience",
    "CSS": "Cascading Style Sheets",
    "HTML": "HyperText Markup Language",
    "DOM": "Document Object Model",
    # devops & sre
    "SRE": "Site Reliability Engineering",
    "DevOps": "Development and Operations",
    "SLA": "Service Level Agreement",
    "SLO": "Service Level Objective",
    "SLI": "Service Level Indicator",
    # data
    "ETL": "Extract, Transform, Load",
    "ELT": "Extract, Load, Transform",
    "BI": "Business Intelligence",
    "DW": "Data Warehouse",
    "OLAP": "Online Analytical Processing",
    "OLTP": "Online Transaction Processing",
    # frameworks & libraries
    "React": "React.js",
    "Vue": "Vue.js",
    "Angular": "Angular.js",
    "Node": "Node.js",
    "TF": "TensorFlow",
    "PT": "PyTorch",
    # methodologies
    "XP": "Extreme Programming",
    "TDD": "Test-Driven Development",
    "BDD": "Behavior-Driven Development",
    "DDD": "Domain-Driven Design",
    # security
    "SSO": "Single Sign-On",
    "MFA": "Multi-Factor Authentication",
    "2FA": "Two-Factor Authentication",
    "SIEM": "Security Information and Event Management",
    "GDPR": "General Data Protection Regulation",
    "HIPAA": "Health Insurance Portability and Accountability Act",
    # databases
    "RDBMS": "Relational Database Management System",
    "DB": "Database",
}

_BY_LOWER = {abbr.lower(): full for abbr, full in ABBREVIATIONS.items()}
_REVERSE = {full.lower(): abbr for abbr, full in ABBREVIATIONS.items()}


def resolve_abbreviation(skill: str) -> str:
    """'k8s' -> 'Kubernetes'; unknown names come back trimmed but otherwise untouched."""
    trimmed = (skill or "").strip()
    return _BY_LOWER.get(trimmed.lower(), trimmed)


def get_abbreviation(full_name: str) -> str:
    trimmed = (full_name or "").strip()
    return _REVERSE.get(trimmed.lower(), trimmed)


def are_skills_equivalent(a: str, b: str) -> bool:
    return resolve_abbreviation(a).lower() == resolve_abbreviation(b).lower()


def expand_skill_list(skills: Iterable[str]) -> List[str]:
    """
    Original names plus their expansions, first occurrence order, no duplicates.
    Both spellings are kept since the taxonomy may only know one of them
    ('HTML' is a node name, 'HyperText Markup Language' is not).
    """
    out, seen = [], set()
    for skill in skills:
        for name in (skill.strip(), resolve_abbreviation(skill)):
            if name and name.lower() not in seen:
                seen.add(name.lower())
                out.append(name)
    return out
