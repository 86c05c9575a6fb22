"""Prompt text for curriculum and resource generation."""

from __future__ import annotations

from textwrap import dedent

STEP_FIELDS: tuple[str, ...] = ("stepNumber", "title", "duration", "description", "skills")
RESOURCE_FIELDS: tuple[str, ...] = ("title", "description", "url", "searchQuery", "difficulty", "duration")


def _require_text(value: str, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value


def build_curriculum_prompt(career: str) -> str:
    """Ask for an 8-10 step learning path as a JSON array of step objects."""
    _require_text(career, "career")
    return dedent(
        f"""\
        Generate a comprehensive learning path for {career} with 8-10 detailed steps.
        Each step should include:
        - Step number and title
        - Duration estimate
        - Detailed description (2-3 sentences)
        - Key skills to learn

        Format the answer as a JSON array of objects with exactly these fields:
        {", ".join(STEP_FIELDS)}. "skills" must be an array of strings and
        "stepNumber" a positive integer.

        Make it practical and industry-relevant for 2024-2025."""
    )


def build_resource_prompt(career: str, step_title: str, step_description: str) -> str:
    """Ask for a videos/documents/projects/practice JSON object for one step."""
    _require_text(career, "career")
    _require_text(step_title, "step_title")
    _require_text(step_description, "step_description")
    return dedent(
        f"""\
        Generate detailed learning resources for this step in {career}:
        Step: {step_title}
        Description: {step_description}

        IMPORTANT: Only suggest resources that actually exist. For YouTube videos,
        suggest search terms instead of specific URLs that might not exist.

        Provide resources in these categories:
        1. YouTube Search Terms (5-7 search queries that will find relevant videos)
        2. Documentation/Articles (4-5 items with real websites like MDN, official docs)
        3. Project Ideas (3-4 practical projects with descriptions - no URLs needed)
        4. Practice Platforms (3-4 real coding/learning platforms like freeCodeCamp, Codecademy)

        Format as a JSON object with exactly the keys: videos, documents, projects, practice
        For videos: use title, description, searchQuery (instead of url), difficulty, duration
        For others: title, description, url (only if it's a real site), difficulty, duration
        Use beginner, intermediate or advanced for difficulty.

        Example for video entry:
        {{
          "title": "JavaScript Basics Tutorial",
          "description": "Learn JavaScript fundamentals",
          "searchQuery": "javascript tutorial for beginners 2024",
          "difficulty": "beginner",
          "duration": "2-4 hours"
        }}"""
    )


__all__ = ["RESOURCE_FIELDS", "STEP_FIELDS", "build_curriculum_prompt", "build_resource_prompt"]
