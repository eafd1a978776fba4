"""Rewrite capability: one prompt in, one completion out.

Claude models go through the Anthropic SDK; everything else (Gemini by
default) goes through LiteLLM.
"""

import logging
from typing import Optional, Sequence

import anthropic

from ..articles.models import Article
from ..errors import RewriteFailure
from ..extract.models import ExtractedContent
from ..utils.cost_tracker import (
    PipelineCosts,
    extract_usage_from_anthropic_response,
    extract_usage_from_litellm_response,
)
from ..utils.llm_client import get_completion_async
from .formatter import build_prompt, parse_response
from .models import OptimizedArticle, ReferenceCitation

logger = logging.getLogger(__name__)


def uses_anthropic(model_id: str) -> bool:
    return model_id.startswith("claude-")


class ArticleOptimizer:
    """
    Rewrites an article using extracted reference content.

    Pipeline:
    1. Build the prompt from the original article and references
    2. Call the model once
    3. Parse TITLE/CONTENT, falling back to the original title
    """

    def __init__(
        self,
        model_id: str = "gemini/gemini-2.5-flash",
        max_tokens: int = 8192,
        temperature: float = 0.7,
        api_key: Optional[str] = None,
        client: Optional[anthropic.AsyncAnthropic] = None,
        costs: Optional[PipelineCosts] = None,
    ):
        """
        Initialize the optimizer.

        Args:
            model_id: LiteLLM model id, or a claude-* id for the Anthropic SDK
            max_tokens: Maximum response tokens
            temperature: Sampling temperature
            api_key: Provider key for the selected backend
            client: Pre-built Anthropic client (claude-* models only)
            costs: Tracker that accumulates usage across the run
        """
        self.model_id = model_id
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.api_key = api_key
        self.costs = costs if costs is not None else PipelineCosts()

        self.client = client
        if uses_anthropic(model_id) and self.client is None:
            self.client = anthropic.AsyncAnthropic(api_key=api_key) if api_key else anthropic.AsyncAnthropic()

    async def rewrite(self, prompt: str) -> tuple[str, int, int, float]:
        """Send one prompt and return (text, input_tokens, output_tokens, cost)."""
        if uses_anthropic(self.model_id):
            response = await self.client.messages.create(
                model=self.model_id,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
            text = "".join(b.text for b in response.content if b.type == "text")
            usage = extract_usage_from_anthropic_response(response, self.model_id)
        else:
            text, response = await get_completion_async(
                model=self.model_id,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                api_key=self.api_key,
                return_full_response=True,
            )
            usage = extract_usage_from_litellm_response(response)

        return (text, *usage)

    async def optimize(
        self,
        original: Article,
        references: Sequence[ExtractedContent],
    ) -> OptimizedArticle:
        """
        Rewrite ``original`` in the manner of ``references``.

        Raises:
            RewriteFailure: On any backend error or an empty body
        """
        logger.info("[OPTIMIZER] Optimizing article with %s...", self.model_id)
        prompt = build_prompt(original, references)

        try:
            text, input_tokens, output_tokens, cost = await self.rewrite(prompt)
        except Exception as e:
            raise RewriteFailure(f"{self.model_id} call failed: {e}") from e

        self.costs.add_usage("rewrite", self.model_id, input_tokens, output_tokens, cost)

        parsed = parse_response(text)
        if not parsed.body:
            raise RewriteFailure(f"{self.model_id} returned no usable content")

        logger.info(
            "[OPTIMIZER] Optimization complete (%d chars, %d+%d tokens)",
            len(parsed.body),
            input_tokens,
            output_tokens,
        )

        return OptimizedArticle(
            title=parsed.title or original.title,
            body=parsed.body,
            references=[ReferenceCitation(title=r.title, url=r.url) for r in references],
            model=self.model_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost_usd=cost,
        )
