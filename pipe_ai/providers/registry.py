from typing import Callable, Dict, List, Type

from ..config import validate_configuration
from ..errors import ProviderNotFoundError
from .base import Provider

PROVIDERS: Dict[str, Type[Provider]] = {}


def register_provider(name: str) -> Callable[[Type[Provider]], Type[Provider]]:
    def decorator(cls: Type[Provider]) -> Type[Provider]:
        if name in PROVIDERS:
            raise ValueError(f"Provider '{name}' is already registered.")
        cls.name = name
        PROVIDERS[name] = cls
        return cls

    return decorator


def available_providers() -> List[str]:
    return sorted(PROVIDERS)


def load_provider(config: Dict) -> Provider:
    """
    Returns the provider named by `config["provider"]`.

    The configuration is checked before anything else, so a missing provider is
    reported without touching the network or the filesystem.
    """
    validate_configuration(config)
    name = config["provider"]

    provider_cls = PROVIDERS.get(name)
    if provider_cls is None:
        raise ProviderNotFoundError(name, available_providers())
    return provider_cls()
