"""Token and USD accounting for rewrite calls, priced with LiteLLM."""

import logging
from dataclasses import dataclass, field
from typing import Any

import litellm

logger = logging.getLogger(__name__)

# USD per 1M (input, output) tokens, used when LiteLLM has no price
_FALLBACK_PRICES = {
    "opus": (15.0, 75.0),
    "sonnet": (3.0, 15.0),
    "gemini": (0.3, 2.5),
}


@dataclass
class StepCost:
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cost_usd: float = 0.0
    call_count: int = 0


@dataclass
class PipelineCosts:
    """Usage per pipeline step, accumulated over one batch run."""

    steps: dict[str, StepCost] = field(default_factory=dict)

    def add_usage(
        self,
        step_name: str,
        model: str,
        input_tokens: int,
        output_tokens: int,
        cost_usd: float,
    ) -> None:
        step = self.steps.setdefault(step_name, StepCost(model=model))
        step.input_tokens += input_tokens
        step.output_tokens += output_tokens
        step.cost_usd += cost_usd
        step.call_count += 1

    def total_cost(self) -> float:
        return sum(s.cost_usd for s in self.steps.values())

    def to_dict(self) -> dict:
        """JSON-ready view for the run report."""
        return {
            "total_cost_usd": round(self.total_cost(), 6),
            "steps": {
                name: {
                    "model": s.model,
                    "input_tokens": s.input_tokens,
                    "output_tokens": s.output_tokens,
                    "cost_usd": round(s.cost_usd, 6),
                    "call_count": s.call_count,
                }
                for name, s in self.steps.items()
            },
        }


def calculate_cost(model: str, input_tokens: int, output_tokens: int) -> float:
    try:
        return litellm.completion_cost(
            model=model,
            prompt_tokens=input_tokens,
            completion_tokens=output_tokens,
        ) or 0.0
    except Exception as e:
        logger.warning("[COSTS] No LiteLLM price for %s: %s", model, e)

    name = model.lower()
    for family, (input_price, output_price) in _FALLBACK_PRICES.items():
        if family in name:
            return (input_tokens * input_price + output_tokens * output_price) / 1_000_000
    return 0.0


def extract_usage_from_anthropic_response(response: Any, model: str) -> tuple[int, int, float]:
    """(input_tokens, output_tokens, cost_usd) for an Anthropic Message."""
    usage = response.usage
    return (
        usage.input_tokens,
        usage.output_tokens,
        calculate_cost(model, usage.input_tokens, usage.output_tokens),
    )


def extract_usage_from_litellm_response(response: Any) -> tuple[int, int, float]:
    """(input_tokens, output_tokens, cost_usd) for a LiteLLM ModelResponse."""
    usage = response.usage
    try:
        cost = litellm.completion_cost(completion_response=response) or 0.0
    except Exception as e:
        logger.warning("[COSTS] Falling back to table pricing: %s", e)
        cost = calculate_cost(
            getattr(response, "model", "unknown"), usage.prompt_tokens, usage.completion_tokens
        )
    return usage.prompt_tokens, usage.completion_tokens, cost
