from .base import BaseLLMService
from .factory import get_llm_service
from .types import LLMResponse

__all__ = ["BaseLLMService", "get_llm_service", "LLMResponse"]
