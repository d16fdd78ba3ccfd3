"""OpenAI Responses API client for ingredient extraction."""

from dataclasses import dataclass

from openai import (
    APIConnectionError,
    APIError,
    APIStatusError,
    AsyncOpenAI,
    RateLimitError,
)

from meal_nutrition.services.extraction import (
    ExtractionClient,
    ExtractionQuotaExceededError,
    ExtractionRateLimitedError,
    ExtractionUnavailableError,
)

PAYMENT_REQUIRED = 402
INSUFFICIENT_QUOTA = "insufficient_quota"


@dataclass
class OpenAIExtractionClient(ExtractionClient):
    """Extraction client backed by OpenAI structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIExtractionClient":
        """Create an OpenAI extraction client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        )

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        system_prompt: str,
        meal_description: str,
        schema: dict[str, object],
    ) -> str:
        """Return the raw JSON text produced for a meal description."""
        try:
            response = await self.client.responses.create(
                model=model,
                instructions=system_prompt,
                input=meal_description,
                text={
                    "format": {
                        "type": "json_schema",
                        "name": "meal_ingredients",
                        "strict": True,
                        "schema": schema,
                    }
                },
                temperature=0,
                max_output_tokens=300,
                store=store,
            )
        except RateLimitError as exc:
            if _error_code(exc) == INSUFFICIENT_QUOTA:
                raise ExtractionQuotaExceededError(str(exc)) from exc
            raise ExtractionRateLimitedError(str(exc)) from exc
        except APIStatusError as exc:
            if exc.status_code == PAYMENT_REQUIRED:
                raise ExtractionQuotaExceededError(str(exc)) from exc
            raise ExtractionUnavailableError(
                f"OpenAI returned status {exc.status_code}"
            ) from exc
        except APIConnectionError as exc:
            raise ExtractionUnavailableError("OpenAI is unreachable") from exc
        except APIError as exc:
            raise ExtractionUnavailableError(f"OpenAI request failed: {exc}") from exc
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _error_code(exc: APIStatusError) -> str | None:
    """Extract the provider error code from an API error, if available."""
    code = getattr(exc, "code", None)
    if isinstance(code, str):
        return code
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and isinstance(error.get("code"), str):
            return error["code"]
    return None
