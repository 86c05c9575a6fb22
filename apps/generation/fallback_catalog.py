"""Static curricula and resources served when generation fails."""

from __future__ import annotations

from typing import Dict, List

from careerpath.core.models import CareerStep, ResourceBundle, ResourceItem

from .extraction import video_search_url

DEFAULT_CAREER = "web-development"


def _step(number: int, title: str, duration: str, description: str, skills: List[str]) -> Dict[str, object]:
    return {
        "stepNumber": number,
        "title": title,
        "duration": duration,
        "description": description,
        "skills": skills,
    }


def _item(title: str, description: str, url: str | None, difficulty: str, duration: str) -> Dict[str, object]:
    return {
        "title": title,
        "description": description,
        "url": url,
        "difficulty": difficulty,
        "duration": duration,
    }


DEFAULT_STEPS: Dict[str, List[Dict[str, object]]] = {
    "web-development": [
        _step(
            1,
            "HTML & CSS Fundamentals",
            "2-3 weeks",
            "Learn the building blocks of web development. Master HTML structure and CSS styling "
            "to create beautiful, responsive websites.",
            ["HTML5", "CSS3", "Flexbox", "CSS Grid", "Responsive Design"],
        ),
        _step(
            2,
            "JavaScript Basics",
            "3-4 weeks",
            "Understand programming fundamentals with JavaScript. Learn variables, functions, "
            "DOM manipulation, and event handling.",
            ["JavaScript ES6+", "DOM Manipulation", "Event Handling", "Functions", "Objects"],
        ),
        _step(
            3,
            "Frontend Framework - React",
            "4-5 weeks",
            "Master React.js to build dynamic, interactive user interfaces. Learn components, "
            "state management, and hooks.",
            ["React.js", "JSX", "Components", "State Management", "React Hooks"],
        ),
        _step(
            4,
            "Backend Development - Node.js",
            "4-5 weeks",
            "Build server-side applications with Node.js and Express. Learn to create APIs and "
            "handle server logic.",
            ["Node.js", "Express.js", "REST APIs", "Middleware", "Authentication"],
        ),
        _step(
            5,
            "Database Management",
            "3-4 weeks",
            "Learn database design and management with MongoDB and SQL. Understand data modeling "
            "and queries.",
            ["MongoDB", "SQL", "Database Design", "Mongoose", "Data Modeling"],
        ),
        _step(
            6,
            "Full-Stack Project",
            "4-6 weeks",
            "Build a complete full-stack application integrating frontend, backend, and database "
            "technologies.",
            ["Full-Stack Integration", "Project Planning", "Git", "Deployment", "Testing"],
        ),
    ],
    "data-science": [
        _step(
            1,
            "Python Programming Fundamentals",
            "3-4 weeks",
            "Master Python programming basics including syntax, data structures, and "
            "object-oriented programming concepts.",
            ["Python", "Data Structures", "OOP", "Functions", "File Handling"],
        ),
        _step(
            2,
            "Statistics and Mathematics",
            "4-5 weeks",
            "Learn essential statistical concepts and mathematical foundations required for data science.",
            ["Statistics", "Probability", "Linear Algebra", "Calculus", "Hypothesis Testing"],
        ),
        _step(
            3,
            "Data Manipulation with Pandas",
            "3-4 weeks",
            "Master data manipulation and analysis using Pandas library. Learn to clean and "
            "transform data effectively.",
            ["Pandas", "NumPy", "Data Cleaning", "Data Transformation", "Data Analysis"],
        ),
        _step(
            4,
            "Data Visualization",
            "2-3 weeks",
            "Create compelling visualizations using Matplotlib, Seaborn, and Plotly to communicate "
            "insights effectively.",
            ["Matplotlib", "Seaborn", "Plotly", "Data Storytelling", "Dashboard Creation"],
        ),
        _step(
            5,
            "Machine Learning Basics",
            "5-6 weeks",
            "Understand fundamental machine learning algorithms and implement them using Scikit-learn.",
            ["Scikit-learn", "Supervised Learning", "Unsupervised Learning", "Model Evaluation", "Feature Engineering"],
        ),
        _step(
            6,
            "Advanced Machine Learning",
            "4-5 weeks",
            "Explore deep learning with TensorFlow/PyTorch and advanced algorithms for complex problems.",
            ["TensorFlow", "PyTorch", "Deep Learning", "Neural Networks", "Model Optimization"],
        ),
    ],
}

STEP_VIDEOS: Dict[str, List[Dict[str, object]]] = {
    "HTML & CSS Fundamentals": [
        _item(
            "HTML & CSS Full Course Tutorial",
            "Complete HTML and CSS tutorial from basics to advanced",
            "https://youtube.com/results?search_query=html+css+full+course+tutorial+2024",
            "beginner",
            "4-8 hours",
        ),
        _item(
            "CSS Flexbox and Grid Tutorial",
            "Master modern CSS layout techniques",
            "https://youtube.com/results?search_query=css+flexbox+grid+tutorial+responsive",
            "intermediate",
            "2-3 hours",
        ),
    ],
    "JavaScript Basics": [
        _item(
            "JavaScript Tutorial for Beginners",
            "Complete JavaScript course covering fundamentals",
            "https://youtube.com/results?search_query=javascript+tutorial+beginners+2024+full+course",
            "beginner",
            "6-10 hours",
        ),
        _item(
            "Modern JavaScript ES6+ Features",
            "Learn modern JavaScript features and syntax",
            "https://youtube.com/results?search_query=javascript+es6+modern+features+tutorial",
            "intermediate",
            "3-4 hours",
        ),
    ],
    "Frontend Framework - React": [
        _item(
            "React JS Full Course for Beginners",
            "Complete React tutorial from scratch",
            "https://youtube.com/results?search_query=react+js+full+course+beginners+2024",
            "intermediate",
            "8-12 hours",
        ),
        _item(
            "React Hooks Tutorial",
            "Master React Hooks with practical examples",
            "https://youtube.com/results?search_query=react+hooks+tutorial+useState+useEffect",
            "intermediate",
            "2-3 hours",
        ),
    ],
    "Python Programming Fundamentals": [
        _item(
            "Python for Beginners - Full Course",
            "Complete Python tutorial for beginners",
            "https://youtube.com/results?search_query=python+programming+full+course+beginners+2024",
            "beginner",
            "8-12 hours",
        ),
        _item(
            "Python Object Oriented Programming",
            "Learn OOP concepts in Python",
            "https://youtube.com/results?search_query=python+object+oriented+programming+oop+tutorial",
            "intermediate",
            "4-6 hours",
        ),
    ],
}

STATIC_DOCUMENTS: List[Dict[str, object]] = [
    _item(
        "MDN Web Docs - HTML",
        "Official Mozilla documentation for HTML",
        "https://developer.mozilla.org/en-US/docs/Web/HTML",
        "beginner",
        "2-3 hours",
    ),
    _item(
        "CSS-Tricks - Complete Guide",
        "Comprehensive CSS guides and tutorials",
        "https://css-tricks.com/snippets/css/a-guide-to-flexbox/",
        "intermediate",
        "1-2 hours",
    ),
    _item(
        "W3Schools - Web Development",
        "Interactive tutorials and references",
        "https://www.w3schools.com/html/",
        "beginner",
        "3-4 hours",
    ),
]

STATIC_PROJECTS: List[Dict[str, object]] = [
    _item(
        "Personal Portfolio Website",
        "Build your own responsive portfolio using HTML, CSS, and JavaScript",
        "https://github.com/topics/portfolio-website",
        "beginner",
        "1-2 weeks",
    ),
    _item(
        "Landing Page Design",
        "Create a modern, responsive landing page",
        "https://github.com/topics/landing-page",
        "intermediate",
        "3-5 days",
    ),
    _item(
        "CSS Animation Challenge",
        "Build interactive animations and transitions",
        "https://github.com/topics/css-animation",
        "intermediate",
        "1 week",
    ),
]

STATIC_PRACTICE: List[Dict[str, object]] = [
    _item(
        "freeCodeCamp",
        "Free coding bootcamp with certification",
        "https://www.freecodecamp.org/learn/2022/responsive-web-design/",
        "beginner",
        "Ongoing",
    ),
    _item(
        "Codecademy",
        "Interactive HTML & CSS courses",
        "https://www.codecademy.com/learn/learn-html",
        "beginner",
        "Ongoing",
    ),
    _item(
        "CSS Battle",
        "CSS coding challenges and competitions",
        "https://cssbattle.dev/",
        "intermediate",
        "Ongoing",
    ),
    _item(
        "Frontend Mentor",
        "Real-world frontend challenges",
        "https://www.frontendmentor.io/challenges",
        "intermediate",
        "Ongoing",
    ),
]


class FallbackCatalog:
    """Lookup tables for the hardcoded curricula and resource bundles."""

    def known_careers(self) -> List[str]:
        return list(DEFAULT_STEPS)

    def default_steps(self, career: str) -> List[CareerStep]:
        """Exact-key lookup; unknown careers get the web-development path."""
        entries = DEFAULT_STEPS.get(career) or DEFAULT_STEPS[DEFAULT_CAREER]
        return [CareerStep.model_validate(entry) for entry in entries]

    def default_resources(self, career: str, step_title: str) -> ResourceBundle:
        """Exact step-title lookup for videos; the other categories are fixed."""
        videos = STEP_VIDEOS.get(step_title)
        if videos is None:
            videos = [self._generic_video(step_title)]
        return ResourceBundle(
            videos=[ResourceItem.model_validate(item) for item in videos],
            documents=[ResourceItem.model_validate(item) for item in STATIC_DOCUMENTS],
            projects=[ResourceItem.model_validate(item) for item in STATIC_PROJECTS],
            practice=[ResourceItem.model_validate(item) for item in STATIC_PRACTICE],
        )

    @staticmethod
    def _generic_video(step_title: str) -> Dict[str, object]:
        return _item(
            f"{step_title} - Tutorial",
            "Learn the fundamentals and practical applications",
            video_search_url(f"{step_title} tutorial"),
            "beginner",
            "2-4 hours",
        )


__all__ = ["DEFAULT_CAREER", "DEFAULT_STEPS", "FallbackCatalog"]
