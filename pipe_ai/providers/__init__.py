"""
Backends pipe-ai can send a prompt to. Each one registers itself under the name
used in the `provider` key of the configuration.
"""

from .base import AISuiteProvider, Provider
from .registry import PROVIDERS, available_providers, load_provider, register_provider
from . import anthropic, ollama, openai  # noqa: F401  (registers the backends)

__all__ = [
    "AISuiteProvider",
    "PROVIDERS",
    "Provider",
    "available_providers",
    "load_provider",
    "register_provider",
]
