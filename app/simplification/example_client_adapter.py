"""Offline simplification client.

Returns a fixed, schema-shaped answer without any network call. Useful for
local development and tests, and as a template for new provider adapters:
implement BaseSimplificationClient and register the provider in
SimplifierFactory.
"""

from app.simplification.client_base import BaseSimplificationClient


class ExampleClientAdapter(BaseSimplificationClient):
    """Deterministic adapter echoing the target-language line of the prompt."""

    TEMPLATE = (
        "1) Short summary\n"
        "This is an offline example answer ({language_line}).\n\n"
        "8) Disclaimer\n"
        "This is an AI-generated simplification meant as a reading aid "
        "and is not legal advice."
    )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt
        language_line = user_prompt.splitlines()[0] if user_prompt else ""
        return self.TEMPLATE.format(language_line=language_line.rstrip("."))
