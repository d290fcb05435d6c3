from abc import ABC, abstractmethod


class BaseSimplificationClient(ABC):
    """One chat round-trip with a language model provider."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Send the two prompts and return the model's answer unmodified.

        Raises:
            SimplificationNetworkError: if the provider cannot be reached or
                rejects the request.
            SimplificationError: if the provider answers without content.
        """
