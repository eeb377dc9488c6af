"""OpenAI Responses API client for text prompts."""

from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI

from nutrition_diary.services.ai import TextClient


@dataclass
class OpenAITextClient(TextClient):
    """Text client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    http_client: httpx.AsyncClient | None = None
    reasoning_effort: str | None = None

    @classmethod
    def create(
        cls,
        api_key: str,
        timeout_seconds: float,
        reasoning_effort: str | None = None,
    ) -> "OpenAITextClient":
        """Create a client whose requests give up after ``timeout_seconds``."""
        http_client = httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, http_client=http_client, max_retries=1
            ),
            http_client=http_client,
            reasoning_effort=reasoning_effort,
        )

    async def complete(self, *, model: str, prompt: str) -> str:
        """Send a prompt and return the output text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "store": False,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.http_client is not None:
            await self.http_client.aclose()
