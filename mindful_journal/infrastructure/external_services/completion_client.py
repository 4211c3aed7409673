"""Chat completion client backed by the OpenAI API."""

import logging
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from ...application.interfaces import ICompletionService
from ...domain.exceptions import (
    InvalidCredentialError,
    MalformedResponseError,
    MissingCredentialError,
    RateLimitError,
    RemoteApiError,
    TransportError,
)
from ...domain.repositories import ISettingsRepository

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 500
API_KEY_SETTING_KEY = "openaiApiKey"


def _extract_error_message(body: Any) -> Optional[str]:
    """Pull the human readable message out of an error payload."""
    if not isinstance(body, dict):
        return None
    error = body.get("error", body)
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class OpenAICompletionClient(ICompletionService):
    """Single-attempt chat completion client.

    The API key is read from the settings store on every call. Model,
    temperature and output length are fixed for the lifetime of the client.
    """

    def __init__(
        self,
        settings_repository: ISettingsRepository,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        base_url: Optional[str] = None,
        api_key_setting_key: str = API_KEY_SETTING_KEY,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.settings_repository = settings_repository
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.base_url = base_url
        self.api_key_setting_key = api_key_setting_key
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient()

    async def _get_api_key(self) -> str:
        api_key = await self.settings_repository.get(self.api_key_setting_key)
        if not api_key:
            raise MissingCredentialError()
        return api_key

    def _build_client(self, api_key: str) -> AsyncOpenAI:
        # Retries are disabled: a failed call is surfaced to the caller.
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            max_retries=0,
            http_client=self.http_client
        )

    async def send_message(
        self,
        messages: List[Dict[str, str]],
        system_prompt: Optional[str] = None
    ) -> str:
        """Send messages to the completion endpoint and return the reply text."""

        api_key = await self._get_api_key()

        request_messages: List[Dict[str, str]] = []
        if system_prompt:
            request_messages.append({"role": "system", "content": system_prompt})
        request_messages.extend(
            {"role": msg["role"], "content": msg["content"]} for msg in messages
        )

        client = self._build_client(api_key)

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=request_messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
        except openai.AuthenticationError as e:
            logger.warning("Completion request rejected: invalid API key")
            raise InvalidCredentialError() from e
        except openai.RateLimitError as e:
            logger.warning("Completion request rate limited")
            raise RateLimitError() from e
        except openai.APIStatusError as e:
            logger.error(f"Completion request failed with status {e.status_code}")
            raise RemoteApiError(e.status_code, _extract_error_message(e.body)) from e
        except openai.APIConnectionError as e:
            logger.error(f"Network error during completion request: {type(e).__name__}")
            raise TransportError() from e
        except openai.APIResponseValidationError as e:
            logger.error("Completion response could not be parsed")
            raise MalformedResponseError() from e
        except ValueError as e:
            # Success status with a body that is not valid JSON
            logger.error(f"Completion response body is not valid JSON: {type(e).__name__}")
            raise MalformedResponseError() from e

        return self._extract_reply(response)

    def _extract_reply(self, response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponseError()

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not content:
            raise MalformedResponseError("Empty response from API. Please try again.")

        return content

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()
