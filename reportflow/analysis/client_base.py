from abc import ABC, abstractmethod


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis AI clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_response: bool,
    ) -> str:
        """Return provider response as plain text.

        Raises:
            AnalysisNetworkError: on transport or provider API failures.
            AnalysisError: when the provider returns no usable content.
        """
