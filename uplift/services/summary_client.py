"""
Nightly summary generation.
Sends the user's evening narration to Anthropic Claude and parses the JSON
summary it returns.
"""
import json
import logging
from datetime import date
from typing import Any, Dict, Optional

import anthropic

from uplift.config import get_api_key, get_summary_model
from uplift.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    MalformedResponseError,
    ServiceError,
)

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are the evening check-in assistant for Uplift, an app helping people with chronic fatigue and ME/CFS manage energy and avoid PEM.
Return ONLY valid JSON in the exact format below. Use the provided date in the "date" field.

Format:
{{
  "date": "YYYY-MM-DD",
  "activities": [
    {{
      "name": "brief activity name",
      "effort": [
        {{ "category": "physical|cognitive|social|sensory|emotional", "color": "green|yellow|red" }}
      ],
      "duration_minutes": null,
      "difficulty_noted": false,
      "notes": "any relevant context"
    }}
  ],
  "crash": {{ "occurred": false, "severity": null, "description": null }},
  "warning_flags": [
    {{
      "type": "pushed_through|delayed_onset|good_day_overexertion|cumulative_load|ignored_signals|rushed|symptom_increase",
      "severity": "high|medium|low",
      "description": "brief explanation of the concern",
      "related_activities": ["activity names"]
    }}
  ],
  "energy_balance": {{
    "assessment": "surplus|balanced|slight_deficit|moderate_deficit|significant_deficit",
    "current_state": "brief description of how they seem now",
    "recovery_needed": true
  }},
  "supportive_message": "1-2 sentence personalized, encouraging message"
}}

Date: {date}
User summary: {user_text}"""


def build_prompt(checkin_date: date, user_text: str) -> str:
    """Embed the instruction, target date and narration in one prompt."""
    return PROMPT_TEMPLATE.format(date=checkin_date.isoformat(), user_text=user_text)


def extract_json(text: str) -> Dict[str, Any]:
    """Parse the span from the first '{' to the last '}' as a JSON object."""
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace == -1 or last_brace < first_brace:
        raise MalformedResponseError("Summary response did not include JSON.")

    try:
        payload = json.loads(text[first_brace:last_brace + 1])
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Summary response was not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedResponseError("Summary response JSON was not an object.")
    return payload


class NightlySummaryGenerator:
    """Turns a free-text nightly check-in into a structured summary."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client=None,
        max_tokens: int = 2000,
    ):
        api_key = api_key or get_api_key()
        if not api_key:
            raise ConfigurationError("No summary service API key configured (set ANTHROPIC_API_KEY)")
        self.model = model or get_summary_model()
        self.max_tokens = max_tokens
        # No automatic retry: the user resubmits.
        self.client = client or anthropic.Anthropic(api_key=api_key, max_retries=0)

    def generate(self, checkin_date: date, user_text: str) -> Dict[str, Any]:
        """
        Generate the nightly summary for a date.

        Args:
            checkin_date: The day being summarized
            user_text: The user's narration of that day

        Returns:
            The parsed JSON object, unvalidated. Every field may be missing.

        Raises:
            ServiceError: the service answered with a failure status or could not be reached
            EmptyResponseError: the service returned no text
            MalformedResponseError: no JSON object could be parsed from the text
        """
        if not user_text or not user_text.strip():
            raise ValueError("Check-in text is required.")

        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{
                    "role": "user",
                    "content": build_prompt(checkin_date, user_text),
                }],
            )
        except anthropic.APIStatusError as e:
            raise ServiceError(e.status_code, e.response.text) from e
        except anthropic.APIConnectionError as e:
            # Includes timeouts; there is no status to report.
            raise ServiceError(None, str(e)) from e

        response_text = ""
        for block in response.content or []:
            if getattr(block, "type", None) == "text":
                response_text += block.text or ""

        if not response_text.strip():
            raise EmptyResponseError("Summary service returned an empty response.")

        summary = extract_json(response_text)
        logger.info(f"Generated nightly summary for {checkin_date.isoformat()}")
        return summary
