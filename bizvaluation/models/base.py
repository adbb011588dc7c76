from typing import Protocol

class ValuationModel(Protocol):
    async def complete_json(self, prompt: str) -> str:
        """
        Sends the valuation prompt and returns the raw reply text,
        which should be a single JSON object. Raises UpstreamModelError
        when the provider call fails.
        """
        ...
