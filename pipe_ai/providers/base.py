import logging

from abc import ABC, abstractmethod
from typing import Dict, List

from ..errors import ConfigurationError, ProviderRequestError
from ..llm import LLMClient

logger = logging.getLogger(__name__)


class Provider(ABC):
    """A backend that turns (configuration, input data, prompt) into a reply."""

    name: str = ""

    @abstractmethod
    def respond(self, config: Dict, input_data: str, prompt: str) -> str:
        pass


class AISuiteProvider(Provider):
    """
    A provider served through aisuite.

    The configuration is passed through as follows:
      - `configuration`: client settings (base URL, timeout, ...).
      - `apiKey`: the API key. It is applied last so `configuration` cannot override it.
      - `defaultRequestOptions`: request options. `model` is required. Everything
        else (temperature, max_tokens, ...) goes to the request untouched.
    """

    def provider_config(self, config: Dict) -> Dict:
        client_settings = dict(config.get("configuration") or {})
        if config.get("apiKey"):
            client_settings["api_key"] = config["apiKey"]
        return client_settings

    def format_messages(self, input_data: str, prompt: str) -> List[Dict]:
        return [
            LLMClient.format_system_message(input_data),
            LLMClient.format_user_message(prompt),
        ]

    def respond(self, config: Dict, input_data: str, prompt: str) -> str:
        options = dict(config.get("defaultRequestOptions") or {})
        model = options.pop("model", None)
        if not model:
            raise ConfigurationError(
                f"'defaultRequestOptions.model' is required by the '{self.name}' provider."
            )

        logger.debug("Requesting a completion from %s:%s", self.name, model)
        try:
            llm = LLMClient({self.name: self.provider_config(config)})
            response = llm.completion(
                model=f"{self.name}:{model}",
                messages=self.format_messages(input_data, prompt),
                **options,
            )
        except Exception as e:
            raise ProviderRequestError(f"The '{self.name}' request failed: {e}") from e

        if not response.content:
            raise ProviderRequestError(f"The '{self.name}' provider returned an empty reply.")
        return response.content
