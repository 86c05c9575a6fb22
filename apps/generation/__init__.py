"""Prompt building, generative client, JSON extraction and the fallback-backed services."""

from .client import GenerativeTextClient, build_client
from .curriculum import CurriculumOutcome, CurriculumService
from .extraction import extract_json, extract_resources, extract_steps, video_search_url
from .fallback_catalog import FallbackCatalog
from .prompts import build_curriculum_prompt, build_resource_prompt
from .resources import ResourceOutcome, ResourceService

__all__ = [
    "CurriculumOutcome",
    "CurriculumService",
    "FallbackCatalog",
    "GenerativeTextClient",
    "ResourceOutcome",
    "ResourceService",
    "build_client",
    "build_curriculum_prompt",
    "build_resource_prompt",
    "extract_json",
    "extract_resources",
    "extract_steps",
    "video_search_url",
]
