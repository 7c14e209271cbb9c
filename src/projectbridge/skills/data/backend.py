# Backend / cloud / devops skill taxonomy.
from projectbridge.skills.graph import SkillsGraph

_LANG = "PROGRAMMING_LANGUAGE"

SKILLS = [
    # languages
    {"id": "javascript", "name": "JavaScript", "aliases": ["JS", "ECMAScript"], "category": _LANG,
     "domains": ["FRONTEND", "BACKEND", "FULLSTACK"],
     "description": "A high-level, interpreted programming language", "popularity": 95},
    {"id": "typescript", "name": "TypeScript", "aliases": ["TS"], "category": _LANG,
     "domains": ["FRONTEND", "BACKEND", "FULLSTACK"],
     "description": "A strongly typed superset of JavaScript", "popularity": 85},
    {"id": "python", "name": "Python", "category": _LANG, "domains": ["BACKEND", "DATA", "AI_ML"],
     "description": "A general-purpose programming language", "popularity": 90,
     "versions": ["Python 2", "Python 3"]},
    {"id": "java", "name": "Java", "category": _LANG, "domains": ["BACKEND", "MOBILE"],
     "description": "A class-based, object-oriented programming language", "popularity": 80},
    {"id": "csharp", "name": "C#", "aliases": ["CSharp", "C Sharp"], "category": _LANG, "domains": ["BACKEND"],
     "description": "A multi-paradigm language developed by Microsoft", "popularity": 75},
    {"id": "go", "name": "Go", "aliases": ["Golang"], "category": _LANG, "domains": ["BACKEND", "DEVOPS"],
     "description": "A statically typed, compiled language designed at Google", "popularity": 70},
    {"id": "php", "name": "PHP", "category": _LANG, "domains": ["BACKEND"],
     "description": "A general-purpose scripting language for web development", "popularity": 65},
    {"id": "ruby", "name": "Ruby", "category": _LANG, "domains": ["BACKEND"],
     "description": "A dynamic, open source programming language", "popularity": 60},
    # frameworks
    {"id": "nodejs", "name": "Node.js", "aliases": ["Node"], "category": "FRAMEWORK", "domains": ["BACKEND"],
     "description": "A JavaScript runtime built on the V8 engine", "popularity": 90},
    {"id": "express", "name": "Express.js", "aliases": ["Express"], "category": "FRAMEWORK",
     "domains": ["BACKEND"], "description": "A minimal Node.js web application framework", "popularity": 85},
    {"id": "django", "name": "Django", "category": "FRAMEWORK", "domains": ["BACKEND"],
     "description": "A high-level Python web framework", "popularity": 75},
    {"id": "flask", "name": "Flask", "category": "FRAMEWORK", "domains": ["BACKEND"],
     "description": "A lightweight WSGI web application framework", "popularity": 70},
    {"id": "spring-boot", "name": "Spring Boot", "aliases": ["Spring"], "category": "FRAMEWORK",
     "domains": ["BACKEND"], "description": "A Java framework for stand-alone Spring applications", "popularity": 80},
    {"id": "dotnet", "name": ".NET", "aliases": ["dotNET", "ASP.NET"], "category": "FRAMEWORK",
     "domains": ["BACKEND"], "description": "A developer platform built by Microsoft", "popularity": 75,
     "versions": [".NET Framework", ".NET Core", ".NET 5+"]},
    {"id": "laravel", "name": "Laravel", "category": "FRAMEWORK", "domains": ["BACKEND"],
     "description": "A PHP web application framework", "popularity": 65},
    {"id": "ruby-on-rails", "name": "Ruby on Rails", "aliases": ["Rails"], "category": "FRAMEWORK",
     "domains": ["BACKEND"], "description": "A server-side web application framework in Ruby", "popularity": 60},
    # databases
    {"id": "mongodb", "name": "MongoDB", "category": "DATABASE", "domains": ["BACKEND", "DATA"],
     "description": "A document-oriented NoSQL database", "popularity": 85},
    {"id": "postgresql", "name": "PostgreSQL", "aliases": ["Postgres"], "category": "DATABASE",
     "domains": ["BACKEND", "DATA"], "description": "An open source object-relational database", "popularity": 85},
    {"id": "mysql", "name": "MySQL", "category": "DATABASE", "domains": ["BACKEND", "DATA"],
     "description": "An open-source relational database management system", "popularity": 80},
    {"id": "redis", "name": "Redis", "category": "DATABASE", "domains": ["BACKEND"],
     "description": "An in-memory data structure store", "popularity": 75},
    {"id": "elasticsearch", "name": "Elasticsearch", "category": "DATABASE", "domains": ["BACKEND", "DATA"],
     "description": "A distributed search and analytics engine", "popularity": 70},
    # api and architecture
    {"id": "restful-api", "name": "RESTful API", "aliases": ["REST API", "REST", "RESTful API Design"],
     "category": "CONCEPT", "domains": ["BACKEND", "FRONTEND"],
     "description": "An API style built on HTTP requests", "popularity": 85},
    {"id": "graphql", "name": "GraphQL", "category": "CONCEPT", "domains": ["BACKEND", "FRONTEND"],
     "description": "A query language for APIs", "popularity": 75},
    {"id": "microservices", "name": "Microservices", "aliases": ["Microservices Architecture"],
     "category": "CONCEPT", "domains": ["BACKEND", "DEVOPS"],
     "description": "An architecture of loosely coupled services", "popularity": 80},
    {"id": "serverless", "name": "Serverless", "aliases": ["Serverless Architecture", "FaaS"],
     "category": "CONCEPT", "domains": ["BACKEND", "DEVOPS"],
     "description": "A cloud execution model with provider-managed servers", "popularity": 75},
    # cloud
    {"id": "aws", "name": "AWS", "aliases": ["Amazon Web Services"], "category": "PLATFORM",
     "domains": ["BACKEND", "DEVOPS"], "description": "Amazon's cloud computing platform", "popularity": 90},
    {"id": "azure", "name": "Azure", "aliases": ["Microsoft Azure"], "category": "PLATFORM",
     "domains": ["BACKEND", "DEVOPS"], "description": "Microsoft's cloud computing platform", "popularity": 85},
    {"id": "gcp", "name": "GCP", "aliases": ["Google Cloud Platform"], "category": "PLATFORM",
     "domains": ["BACKEND", "DEVOPS"], "description": "Google's cloud computing platform", "popularity": 80},
    # devops
    {"id": "docker", "name": "Docker", "category": "TOOL", "domains": ["DEVOPS", "BACKEND"],
     "description": "A platform for developing and running applications in containers", "popularity": 85},
    {"id": "kubernetes", "name": "Kubernetes", "aliases": ["K8s"], "category": "TOOL",
     "domains": ["DEVOPS", "BACKEND"], "description": "A container orchestration system", "popularity": 80},
    {"id": "cicd", "name": "CI/CD", "aliases": ["Continuous Integration", "Continuous Deployment", "CI/CD Pipelines"],
     "category": "CONCEPT", "domains": ["DEVOPS"],
     "description": "Continuous integration and delivery practices", "popularity": 85},
    # security
    {"id": "security-best-practices", "name": "Security Best Practices", "aliases": ["Web Security"],
     "category": "CONCEPT", "domains": ["SECURITY", "FRONTEND", "BACKEND"],
     "description": "Guidelines and practices for securing web applications", "popularity": 80},
    {"id": "oauth", "name": "OAuth", "aliases": ["OAuth 2.0"], "category": "CONCEPT",
     "domains": ["SECURITY", "BACKEND"], "description": "An open standard for access delegation", "popularity": 75},
    {"id": "jwt", "name": "JWT", "aliases": ["JSON Web Token"], "category": "CONCEPT",
     "domains": ["SECURITY", "BACKEND"], "description": "A compact token format for claims", "popularity": 75},
]

RELATIONSHIPS = [
    # languages
    {"source_id": "typescript", "target_id": "javascript", "type": "REQUIRES", "strength": 0.9},
    # frameworks
    {"source_id": "nodejs", "target_id": "javascript", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "express", "target_id": "nodejs", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "django", "target_id": "python", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "flask", "target_id": "python", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "spring-boot", "target_id": "java", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "dotnet", "target_id": "csharp", "type": "USED_WITH", "strength": 0.9},
    {"source_id": "laravel", "target_id": "php", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "ruby-on-rails", "target_id": "ruby", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "express", "target_id": "django", "type": "ALTERNATIVE_TO", "strength": 0.6},
    {"source_id": "django", "target_id": "flask", "type": "ALTERNATIVE_TO", "strength": 0.8},
    {"source_id": "spring-boot", "target_id": "dotnet", "type": "ALTERNATIVE_TO", "strength": 0.7},
    # databases
    {"source_id": "postgresql", "target_id": "mysql", "type": "ALTERNATIVE_TO", "strength": 0.9},
    {"source_id": "mongodb", "target_id": "postgresql", "type": "ALTERNATIVE_TO", "strength": 0.5,
     "context": "NoSQL vs SQL"},
    # api and architecture
    {"source_id": "graphql", "target_id": "restful-api", "type": "ALTERNATIVE_TO", "strength": 0.8},
    {"source_id": "microservices", "target_id": "serverless", "type": "USED_WITH", "strength": 0.7},
    # cloud
    {"source_id": "aws", "target_id": "azure", "type": "ALTERNATIVE_TO", "strength": 0.9},
    {"source_id": "aws", "target_id": "gcp", "type": "ALTERNATIVE_TO", "strength": 0.9},
    # devops
    {"source_id": "kubernetes", "target_id": "docker", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "cicd", "target_id": "docker", "type": "USED_WITH", "strength": 0.7},
    # security
    {"source_id": "jwt", "target_id": "oauth", "type": "USED_WITH", "strength": 0.7},
    {"source_id": "security-best-practices", "target_id": "oauth", "type": "PARENT_OF", "strength": 0.8},
    {"source_id": "security-best-practices", "target_id": "jwt", "type": "PARENT_OF", "strength": 0.8},
]


def build_backend_skills_graph() -> SkillsGraph:
    graph = SkillsGraph()
    for node in SKILLS:
        graph.add_skill(node)
    for rel in RELATIONSHIPS:
        graph.add_relationship(rel)
    return graph
