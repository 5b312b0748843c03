from typing import Dict

from .base import AISuiteProvider
from .registry import register_provider


@register_provider("ollama")
class OllamaProvider(AISuiteProvider):
    """A local Ollama server. Set `configuration.api_url` if it is not on localhost:11434."""

    def provider_config(self, config: Dict) -> Dict:
        # Ollama has no API key.
        return dict(config.get("configuration") or {})
