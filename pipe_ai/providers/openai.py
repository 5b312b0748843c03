from .base import AISuiteProvider
from .registry import register_provider


@register_provider("openai")
class OpenAIProvider(AISuiteProvider):
    pass
