from .base import AISuiteProvider
from .registry import register_provider


@register_provider("anthropic")
class AnthropicProvider(AISuiteProvider):
    """Claude models. aisuite sends the input data as Anthropic's top-level system prompt."""
