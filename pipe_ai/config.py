import logging
import yaml

from typing import Dict, Optional

from .errors import ConfigurationError, MissingProviderError, NotFoundError
from .files import resolve_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config"


def validate_configuration(config: Dict) -> Dict:
    provider = config.get("provider")
    if not provider or not isinstance(provider, str):
        raise MissingProviderError()
    return config


def load_configuration(identifier: Optional[str] = None) -> Dict:
    """
    Loads the YAML configuration named by `identifier` (a name or a path).

    Without an identifier, `config.yaml` is looked up in `~/.config/pipe-ai` and then
    in the installation directory.
    """
    try:
        content = resolve_file(identifier or DEFAULT_CONFIG, "config")
    except NotFoundError as e:
        raise ConfigurationError(str(e)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error reading or parsing the configuration file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError("The configuration file must contain a mapping of settings.")

    logger.debug("Configuration loaded for provider '%s'", data.get("provider"))
    return validate_configuration(data)


def load_pre_prompt(identifier: str) -> str:
    """Loads a pre-defined prompt by name (from the prompts directories) or by path."""
    if not identifier:
        raise ConfigurationError("Pre-prompt option '-p' or '--pre-prompt' requires a value.")
    return resolve_file(identifier, "prompt")
