"""Completion service interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class ICompletionService(ABC):
    """Interface for single-shot chat completions."""

    @abstractmethod
    async def send_message(
        self,
        messages: List[Dict[str, str]],
        system_prompt: Optional[str] = None
    ) -> str:
        """Send the ordered conversation and return the assistant reply.

        Makes exactly one attempt. Raises one of the completion errors from
        ``domain.exceptions`` on failure.
        """
        pass
