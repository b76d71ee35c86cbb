"""OpenAI Responses API client for nutrition estimates."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from snacktrack.services.analysis import AnalysisClient


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by OpenAI structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Call the Responses API and decode its JSON output."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "nutrition_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
            temperature=0.3,
            store=store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
