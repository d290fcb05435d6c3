from typing import ClassVar

from app.config.settings import Settings
from app.exceptions import ConfigurationMissingError
from app.simplification.base import BaseSimplifier
from app.simplification.example_client_adapter import ExampleClientAdapter
from app.simplification.openai_client_adapter import OpenAIClientAdapter
from app.simplification.simplifier import Simplifier


class SimplifierFactory:
    """Creates the configured simplifier."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseSimplifier:
        """Create a configured simplifier from application settings.

        Raises:
            ConfigurationMissingError: if the provider lacks an API key or model.
            ValueError: if the provider is unknown.
        """
        provider = settings.simplification_provider.strip().lower()
        if provider == "example":
            return Simplifier(client=ExampleClientAdapter(), model="example", temperature=0.0)

        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.simplification_api_key.strip()
        if not api_key and provider != "ollama":
            raise ConfigurationMissingError(
                "Server is not configured: simplification API key is missing."
            )
        model = settings.simplification_model_name.strip()
        if not model:
            raise ConfigurationMissingError(
                "Server is not configured: simplification model name is missing."
            )

        client = OpenAIClientAdapter(
            api_key=api_key or provider,
            timeout_seconds=settings.simplification_timeout_seconds,
            base_url=base_url,
            max_retries=settings.simplification_max_retries,
        )
        return Simplifier(
            client=client,
            model=model,
            temperature=settings.simplification_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.simplification_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ConfigurationMissingError(
                    "simplification_base_url is required for "
                    "simplification_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]
        raise ValueError(f"Unknown simplification provider '{provider}'. Choose from: {supported}")
