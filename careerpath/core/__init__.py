"""
Configuration, records, errors and logging utilities for the Career Path Generator.

Higher-level packages (``apps.generation``, ``user_store``, the CLI and the
portal) depend on these modules; nothing here performs network or storage I/O
beyond reading config files and appending to the event log.
"""

from .config import AppConfig, GenerationConfig, PortalConfig, StorageConfig, load_app_config
from .errors import (
    AccountError,
    ExtractionError,
    GenerationConfigError,
    GenerationError,
    MalformedResponseError,
    ParseError,
    PromptError,
    ShapeError,
    TransportError,
)
from .events import GenerationEvent, GenerationEventLog
from .models import CareerStep, ResourceBundle, ResourceItem, UserRecord
from .result import StageResult

__all__ = [
    "AccountError",
    "AppConfig",
    "CareerStep",
    "ExtractionError",
    "GenerationConfig",
    "GenerationConfigError",
    "GenerationError",
    "GenerationEvent",
    "GenerationEventLog",
    "MalformedResponseError",
    "ParseError",
    "PromptError",
    "PortalConfig",
    "ResourceBundle",
    "ResourceItem",
    "ShapeError",
    "StageResult",
    "StorageConfig",
    "TransportError",
    "UserRecord",
    "load_app_config",
]
