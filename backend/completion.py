import anthropic

from errors import CompletionError
from logging_config import get_logger

logger = get_logger("completion")


class CompletionClient:
    """Single-shot text completion against the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5",
        temperature: float = 0.1,
        max_tokens: int = 512,
        timeout: float = 30.0,
        client: anthropic.AsyncAnthropic = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        # No retries: one request in, one completion call
        self.client = client or anthropic.AsyncAnthropic(
            api_key=api_key, timeout=timeout, max_retries=0
        )

    async def complete(self, system_prompt: str, text: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": text}],
            )
        except anthropic.APIError as e:
            logger.error(f"Completion failed ({type(e).__name__}): {e}")
            raise CompletionError(f"API error: {e}") from e

        raw = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        logger.debug(f"Claude response: {raw}")
        return raw

    async def close(self):
        await self.client.close()
