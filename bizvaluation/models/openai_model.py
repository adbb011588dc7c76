"""OpenAI-backed valuation model."""

from __future__ import annotations

import logging

from .base import ValuationModel
from ..core.config import settings
from ..core.errors import UpstreamModelError
from ..services.prompt import SYSTEM_MESSAGE

logger = logging.getLogger(__name__)


class OpenAIModel(ValuationModel):
    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL

        if client is None:
            if not api_key:
                raise RuntimeError("OPENAI_API_KEY missing from settings")
            if not self.model:
                raise RuntimeError("OPENAI_MODEL missing from settings")
            from openai import AsyncOpenAI

            client = AsyncOpenAI(api_key=api_key)
        self.client = client

    async def complete_json(self, prompt: str) -> str:
        """Call OpenAI's chat completion API in JSON mode.

        Parameters
        ----------
        prompt: str
            Rendered valuation instruction.

        Returns
        -------
        str
            Raw message content; parsing and defaulting happen downstream.
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_MESSAGE},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
        except Exception as exc:  # network, auth, rate limit, timeouts
            raise UpstreamModelError(f"OpenAI request failed: {exc}") from exc

        if not completion.choices:
            raise UpstreamModelError("OpenAI returned no choices")
        content = completion.choices[0].message.content or ""
        logger.info("model reply received (%d chars, model=%s)", len(content), self.model)
        return content
