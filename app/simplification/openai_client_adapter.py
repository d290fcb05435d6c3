import httpx
import openai

from app.logging.logger import Log
from app.simplification.client_base import BaseSimplificationClient
from app.simplification.exceptions import SimplificationError, SimplificationNetworkError


class OpenAIClientAdapter(BaseSimplificationClient):
    """Chat-completions client for OpenAI and every OpenAI-compatible host.

    Groq, OpenRouter, Together, DeepSeek and Ollama all speak the same
    protocol; only ``base_url`` differs.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_retries: int = 1,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=httpx.Timeout(timeout_seconds, connect=10.0),
            max_retries=max_retries,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=messages,
            )
        except openai.RateLimitError as exc:
            raise SimplificationNetworkError(f"AI provider rate limit hit: {exc}") from exc
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            raise SimplificationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise SimplificationNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise SimplificationError("AI returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "length":
            Log.warning(f"Model {model} stopped at its output token limit")
        if choice.message.content is None:
            raise SimplificationError("AI returned empty response")
        return choice.message.content
