"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, Azure, etc.).
The scoring adapter and tag extractor depend only on this interface.
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.
    """

    @abstractmethod
    def complete_json(
        self,
        system_prompt: str,
        user_message: str,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Run a chat completion that is asked to answer with a JSON object.

        Returns the raw message content. Callers parse and validate it, since
        models do not always honour the JSON instruction.
        """
        pass

    @abstractmethod
    def generate_embedding(self, text: str) -> List[float]:
        """
        Generate a vector embedding for the given text.
        """
        pass

    def generate_embeddings(self, texts: List[str]) -> List[List[float]]:
        """Embed several texts. Providers with a batch endpoint should override."""
        return [self.generate_embedding(text) for text in texts]
