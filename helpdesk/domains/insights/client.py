"""Client for OpenAI-compatible chat-completion endpoints."""

import json
import logging
from collections.abc import Sequence

import requests

from helpdesk.domains.insights.context import build_insight_payload, build_insight_prompt
from helpdesk.domains.insights.models import (
    FALLBACK_RECOMMENDATION,
    LLMSettings,
    Recommendation,
)
from helpdesk.domains.tickets.models import AgentMetrics, Ticket

logger = logging.getLogger(__name__)

type Message = dict[str, str]

JSON_ONLY_INSTRUCTION = "You are a data analyst. Output valid JSON only."


class InsightError(RuntimeError):
    """The provider answered, but not with anything usable."""


class InsightClient:
    def __init__(
        self,
        settings: LLMSettings,
        timeout: int = 90,
        session: requests.Session | None = None,
    ):
        self.settings = settings
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def _complete(self, messages: list[Message], **options) -> str:
        payload = {"model": self.settings.model, "messages": messages, **options}
        response = self.session.post(
            self.settings.endpoint,
            headers=self._headers(),
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()

        choices = response.json().get("choices") or []
        content = choices[0].get("message", {}).get("content") if choices else None
        if not content:
            raise InsightError("No content from provider")
        return content

    def check_health(self) -> bool:
        try:
            response = self.session.post(
                self.settings.endpoint,
                headers=self._headers(),
                json={
                    "model": self.settings.model,
                    "messages": [{"role": "user", "content": "ping"}],
                    "max_tokens": 5,
                },
                timeout=self.timeout,
            )
            return response.ok
        except (requests.RequestException, ValueError):
            logger.exception("Health check failed for %s", self.settings.provider)
            return False

    def chat(self, message: str, system_instruction: str) -> str:
        """Answer one assistant question; failures come back as an error string."""
        try:
            return self._complete([
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": message},
            ])
        except (requests.RequestException, InsightError, ValueError) as exc:
            logger.exception("Assistant request failed")
            return f"Error: {exc}"

    def generate_insights(
        self,
        tickets: Sequence[Ticket],
        agents: Sequence[AgentMetrics],
        label: str,
    ) -> Recommendation:
        """Ask the model for a structured review of one period.

        Returns ``FALLBACK_RECOMMENDATION`` if the provider fails or answers
        with something that is not the expected JSON object.
        """
        prompt = build_insight_prompt(build_insight_payload(tickets, agents, label))
        try:
            content = self._complete(
                [
                    {"role": "system", "content": JSON_ONLY_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
            )
            payload = json.loads(content)
            if not isinstance(payload, dict):
                raise InsightError(f"Expected a JSON object, got {type(payload).__name__}")
        except (requests.RequestException, InsightError, ValueError):
            logger.exception("Insight generation failed for %s", label)
            return FALLBACK_RECOMMENDATION

        logger.info("Generated insights for %s", label)
        return Recommendation.from_payload(payload)
