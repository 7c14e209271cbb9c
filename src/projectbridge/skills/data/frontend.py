# Frontend skill taxonomy: nodes first, then edges between their ids.
from projectbridge.skills.graph import SkillsGraph

SKILLS = [
    {"id": "javascript", "name": "JavaScript", "aliases": ["JS", "ECMAScript"],
     "category": "PROGRAMMING_LANGUAGE", "domains": ["FRONTEND", "BACKEND", "FULLSTACK"],
     "description": "A high-level, interpreted programming language used for web development",
     "popularity": 95, "versions": ["ES5", "ES6", "ES2020", "ES2021"]},
    {"id": "typescript", "name": "TypeScript", "aliases": ["TS"],
     "category": "PROGRAMMING_LANGUAGE", "domains": ["FRONTEND", "BACKEND", "FULLSTACK"],
     "description": "A strongly typed programming language that builds on JavaScript", "popularity": 85},
    {"id": "html", "name": "HTML", "aliases": ["HTML5"],
     "category": "PROGRAMMING_LANGUAGE", "domains": ["FRONTEND"],
     "description": "The standard markup language for web documents", "popularity": 95,
     "versions": ["HTML4", "HTML5"]},
    {"id": "css", "name": "CSS", "aliases": ["CSS3", "Cascading Style Sheets"],
     "category": "PROGRAMMING_LANGUAGE", "domains": ["FRONTEND"],
     "description": "A style sheet language for describing document presentation", "popularity": 95,
     "versions": ["CSS2", "CSS3"]},
    {"id": "react", "name": "React", "aliases": ["React.js", "ReactJS"],
     "category": "FRAMEWORK", "domains": ["FRONTEND"],
     "description": "A JavaScript library for building user interfaces", "popularity": 90},
    {"id": "angular", "name": "Angular", "aliases": ["Angular.js", "AngularJS"],
     "category": "FRAMEWORK", "domains": ["FRONTEND"],
     "description": "A platform for building mobile and desktop web applications", "popularity": 75,
     "versions": ["AngularJS", "Angular 2+"]},
    {"id": "vue", "name": "Vue", "aliases": ["Vue.js", "VueJS"],
     "category": "FRAMEWORK", "domains": ["FRONTEND"],
     "description": "A progressive framework for building user interfaces", "popularity": 70},
    {"id": "nextjs", "name": "Next.js", "aliases": ["Next", "NextJS"],
     "category": "FRAMEWORK", "domains": ["FRONTEND", "FULLSTACK"],
     "description": "A React framework for production", "popularity": 80},
    {"id": "tailwind", "name": "Tailwind CSS", "aliases": ["Tailwind"],
     "category": "FRAMEWORK", "domains": ["FRONTEND"],
     "description": "A utility-first CSS framework", "popularity": 85},
    {"id": "bootstrap", "name": "Bootstrap", "category": "FRAMEWORK", "domains": ["FRONTEND"],
     "description": "A CSS framework for responsive, mobile-first front-end development", "popularity": 80},
    {"id": "sass", "name": "Sass", "aliases": ["SCSS"], "category": "LIBRARY", "domains": ["FRONTEND"],
     "description": "A preprocessor scripting language compiled into CSS", "popularity": 75},
    {"id": "redux", "name": "Redux", "category": "LIBRARY", "domains": ["FRONTEND"],
     "description": "A predictable state container for JavaScript apps", "popularity": 75},
    {"id": "gsap", "name": "GSAP", "aliases": ["GreenSock Animation Platform"],
     "category": "LIBRARY", "domains": ["FRONTEND"],
     "description": "A JavaScript animation library", "popularity": 65},
    {"id": "framer-motion", "name": "Framer Motion", "aliases": ["Motion"],
     "category": "LIBRARY", "domains": ["FRONTEND"],
     "description": "A production-ready motion library for React", "popularity": 60},
    {"id": "jest", "name": "Jest", "category": "TOOL", "domains": ["FRONTEND", "BACKEND"],
     "description": "A JavaScript testing framework", "popularity": 80},
    {"id": "cypress", "name": "Cypress", "category": "TOOL", "domains": ["FRONTEND"],
     "description": "A JavaScript end-to-end testing framework", "popularity": 75},
    {"id": "threejs", "name": "Three.js", "aliases": ["ThreeJS"], "category": "LIBRARY", "domains": ["FRONTEND"],
     "description": "A JavaScript 3D library", "popularity": 60},
    {"id": "sanity", "name": "Sanity", "aliases": ["Sanity.io"], "category": "PLATFORM",
     "domains": ["FRONTEND", "BACKEND"], "description": "A headless CMS platform", "popularity": 55},
    {"id": "responsive-design", "name": "Responsive Design", "aliases": ["Responsive Web Design"],
     "category": "CONCEPT", "domains": ["FRONTEND", "DESIGN"],
     "description": "Web pages that render well on a variety of devices", "popularity": 90},
    {"id": "component-library", "name": "Component Library", "aliases": ["UI Library", "Design System"],
     "category": "CONCEPT", "domains": ["FRONTEND", "DESIGN"],
     "description": "A collection of reusable UI components", "popularity": 80},
    {"id": "seo", "name": "SEO", "aliases": ["Search Engine Optimization"],
     "category": "CONCEPT", "domains": ["FRONTEND"],
     "description": "Improving the quality and quantity of website traffic", "popularity": 75},
    {"id": "restful-api", "name": "RESTful API", "aliases": ["REST API", "REST", "RESTful API Design"],
     "category": "CONCEPT", "domains": ["BACKEND", "FRONTEND"],
     "description": "An API style built on HTTP requests", "popularity": 85},
    {"id": "security-best-practices", "name": "Security Best Practices", "aliases": ["Web Security"],
     "category": "CONCEPT", "domains": ["SECURITY", "FRONTEND", "BACKEND"],
     "description": "Guidelines and practices for securing web applications", "popularity": 80},
]

RELATIONSHIPS = [
    # languages
    {"source_id": "typescript", "target_id": "javascript", "type": "REQUIRES", "strength": 0.9,
     "context": "TypeScript is a superset of JavaScript"},
    # framework requirements
    {"source_id": "react", "target_id": "javascript", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "angular", "target_id": "typescript", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "vue", "target_id": "javascript", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "nextjs", "target_id": "react", "type": "REQUIRES", "strength": 0.95,
     "context": "Next.js is a React framework"},
    # framework alternatives
    {"source_id": "react", "target_id": "angular", "type": "ALTERNATIVE_TO", "strength": 0.8},
    {"source_id": "react", "target_id": "vue", "type": "ALTERNATIVE_TO", "strength": 0.8},
    # css
    {"source_id": "tailwind", "target_id": "css", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "bootstrap", "target_id": "css", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "sass", "target_id": "css", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "tailwind", "target_id": "bootstrap", "type": "ALTERNATIVE_TO", "strength": 0.7},
    # state, animation, testing, 3d
    {"source_id": "redux", "target_id": "react", "type": "USED_WITH", "strength": 0.8},
    {"source_id": "gsap", "target_id": "javascript", "type": "REQUIRES", "strength": 0.8},
    {"source_id": "framer-motion", "target_id": "react", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "gsap", "target_id": "framer-motion", "type": "ALTERNATIVE_TO", "strength": 0.7,
     "context": "For React applications"},
    {"source_id": "jest", "target_id": "javascript", "type": "REQUIRES", "strength": 0.8},
    {"source_id": "cypress", "target_id": "javascript", "type": "REQUIRES", "strength": 0.8},
    {"source_id": "threejs", "target_id": "javascript", "type": "REQUIRES", "strength": 0.8},
    # concepts
    {"source_id": "responsive-design", "target_id": "css", "type": "REQUIRES", "strength": 0.9},
    {"source_id": "component-library", "target_id": "react", "type": "USED_WITH", "strength": 0.8},
    {"source_id": "component-library", "target_id": "angular", "type": "USED_WITH", "strength": 0.8},
    {"source_id": "component-library", "target_id": "vue", "type": "USED_WITH", "strength": 0.8},
]


def build_frontend_skills_graph() -> SkillsGraph:
    graph = SkillsGraph()
    for node in SKILLS:
        graph.add_skill(node)
    for rel in RELATIONSHIPS:
        graph.add_relationship(rel)
    return graph
