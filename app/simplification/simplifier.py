"""AI-powered plain-language rewriter for official letters."""

from pathlib import Path

from app.logging.logger import Log
from app.simplification.base import BaseSimplifier
from app.simplification.client_base import BaseSimplificationClient
from app.simplification.exceptions import SimplificationError
from app.simplification.models import TargetLanguage
from app.simplification.prompt_loader import load_system_prompt, load_user_prompt_template


class Simplifier(BaseSimplifier):
    """Rewrites redacted text in plain language through a chat completion client."""

    MAX_TEMPERATURE = 0.3

    def __init__(
        self,
        *,
        client: BaseSimplificationClient,
        model: str,
        temperature: float = 0.2,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(self.MAX_TEMPERATURE, temperature))
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._user_prompt_template = load_user_prompt_template(user_prompt_path)

    def simplify(self, redacted_text: str, target_language: TargetLanguage) -> str:
        prompt = self._user_prompt_template.format(
            language=target_language.english_name,
            redacted_text=redacted_text,
        )
        Log.debug(
            f"Simplifying {len(redacted_text)} chars into {target_language.value} "
            f"with model {self._model}"
        )

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
        simplified = raw_response.strip()
        if not simplified:
            raise SimplificationError("No answer received from the model")

        Log.info(f"Simplification complete: {len(simplified)} chars")
        return simplified
