"""
Boundary with the external text-understanding model.

Owns the prompt contract, tolerance for how the model wraps its JSON, and
the fail-safe fallback. `InterpretationGateway.interpret` never raises: any
failure (no API key, API error, unparsable reply) degrades to
`NormalizedWorkout.failure()`.

No retry happens here; callers that want one wrap the gateway.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

import anthropic

from app.services.normalizer import (
    NormalizedWorkout,
    WeightPolicy,
    WorkoutType,
    normalize_workout,
)
from app.settings import Settings

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^\s*```[\w-]*\s*\n?(?P<body>.*?)\n?\s*```\s*$", re.DOTALL)

_WEIGHT_RULES = {
    WeightPolicy.SUM: (
        '- If weight contains a compound expression like "(45+25+10 each side)", '
        "calculate the total (45+25+10=80 per side, so 160 total) and put the "
        "breakdown in notes"
    ),
    WeightPolicy.LEADING: (
        '- If weight contains a compound expression like "135 (45+25+10 each side)", '
        "use the leading number as the weight (135) and put the breakdown in notes"
    ),
}


class Interpreter(Protocol):
    def interpret(self, raw_text: str) -> NormalizedWorkout: ...


@dataclass(frozen=True, slots=True)
class InterpreterConfig:
    api_key: str | None = None
    model: str = "claude-haiku-4-5-20251001"
    max_tokens: int = 1024
    timeout_seconds: float = 30.0
    weight_policy: WeightPolicy = WeightPolicy.SUM

    @classmethod
    def from_settings(cls, s: Settings) -> "InterpreterConfig":
        return cls(
            api_key=s.ANTHROPIC_API_KEY or None,
            model=s.ANTHROPIC_MODEL,
            max_tokens=s.INTERPRETER_MAX_TOKENS,
            timeout_seconds=s.INTERPRETER_TIMEOUT_SECONDS,
            weight_policy=WeightPolicy(s.WEIGHT_POLICY),
        )


def build_system_prompt(weight_policy: WeightPolicy = WeightPolicy.SUM) -> str:
    types = ", ".join(t.value for t in WorkoutType)
    type_union = " | ".join(f'"{t.value}"' for t in WorkoutType)
    return f"""You are a fitness expert assistant that parses workout logs into structured data.

Extract the following information from the user's workout text:
1. Workout type: Classify as one of: {types}, or null if unclear
2. For each exercise: name, weight (in lbs), reps, sets, and any relevant notes

IMPORTANT PARSING RULES:
- If reps are described as "AMRAP" (as many as possible), "to failure", or similar, set reps to null and add this to notes
{_WEIGHT_RULES[weight_policy]}
- If an exercise has alternative names or descriptions in parentheses, extract the primary name and include the alternative in notes
- Sets should be an integer. If not specified, assume 1 set
- Weight and reps can be null if not specified
- Preserve all relevant details in the notes field

Respond ONLY with valid JSON in this exact format, no other text:
{{
  "workout_type": {type_union} | null,
  "exercises": [
    {{
      "exercise_name": "string",
      "weight": number | null,
      "reps": number | null,
      "sets": number,
      "notes": "string" | null
    }}
  ]
}}"""


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the whole payload, if any."""
    m = _FENCE.match(text)
    return (m.group("body") if m else text).strip()


class InterpretationGateway:
    def __init__(self, config: InterpreterConfig, client: Any = None):
        self.config = config
        self._client = client
        self._system_prompt = build_system_prompt(config.weight_policy)

    @property
    def client(self):
        if self._client is None:
            self._client = anthropic.Anthropic(
                api_key=self.config.api_key,
                timeout=self.config.timeout_seconds,
                max_retries=0,
            )
        return self._client

    def interpret(self, raw_text: str) -> NormalizedWorkout:
        if not self.config.api_key:
            logger.warning("ANTHROPIC_API_KEY not set, returning fallback parse")
            return NormalizedWorkout.failure()

        try:
            reply = self._request(raw_text)
        except anthropic.APIStatusError as e:
            logger.warning("interpreter returned HTTP %s: %s", e.status_code, e.message)
            return NormalizedWorkout.failure()
        except anthropic.APIError as e:
            logger.warning("interpreter call failed: %s", e)
            return NormalizedWorkout.failure()
        except Exception:
            logger.exception("unexpected error calling interpreter")
            return NormalizedWorkout.failure()

        if reply is None:
            logger.warning("no text content in interpreter response")
            return NormalizedWorkout.failure()

        try:
            parsed = json.loads(strip_code_fence(reply))
        except (ValueError, TypeError, RecursionError) as e:
            # ValueError covers JSONDecodeError and integers past the digit limit
            logger.warning("interpreter reply is not valid JSON: %s", e)
            return NormalizedWorkout.failure()

        try:
            result = normalize_workout(parsed, weight_policy=self.config.weight_policy)
        except Exception:
            logger.exception("could not normalize interpreter reply")
            return NormalizedWorkout.failure()
        if result.failed:
            logger.warning("interpreter reply is not a JSON object: %.200r", reply)
        elif result.rejected_count:
            logger.info("dropped %d malformed exercise entries", result.rejected_count)
        return result

    def _request(self, raw_text: str) -> str | None:
        """One Messages API call; returns the first text block, if any."""
        response = self.client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            system=self._system_prompt,
            messages=[{"role": "user", "content": raw_text}],
        )
        for block in response.content or []:
            if getattr(block, "type", None) == "text":
                return block.text
        return None
