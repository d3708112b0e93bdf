"""Insight payloads returned by the language model and the settings used to reach it."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class LLMProvider(StrEnum):
    GEMINI = "gemini"
    OPENAI = "openai"
    CUSTOM = "custom"


DEFAULT_BASE_URLS: dict[LLMProvider, str] = {
    LLMProvider.GEMINI: "https://generativelanguage.googleapis.com/v1beta/openai",
    LLMProvider.OPENAI: "https://api.openai.com/v1",
}


@dataclass(frozen=True)
class LLMSettings:
    provider: LLMProvider
    model: str
    api_key: str = ""
    base_url: str = ""

    @property
    def endpoint(self) -> str:
        base = self.base_url or DEFAULT_BASE_URLS.get(self.provider, "")
        if not base:
            raise ValueError(f"No base URL configured for provider '{self.provider}'")
        return f"{base.rstrip('/')}/chat/completions"

    def to_dict(self) -> dict[str, str]:
        """Serializable form; the API key is never persisted."""
        return {"provider": str(self.provider), "model": self.model, "base_url": self.base_url}

    @classmethod
    def from_dict(cls, data: dict[str, Any], api_key: str = "") -> "LLMSettings":
        return cls(
            provider=LLMProvider(data.get("provider", LLMProvider.GEMINI)),
            model=data.get("model", ""),
            api_key=api_key,
            base_url=data.get("base_url", ""),
        )


@dataclass(frozen=True)
class TeamInsight:
    team_name: str
    insight: str
    recommendation: str


@dataclass(frozen=True)
class AgentPerformance:
    top_performer: str
    needs_attention: str
    suggestion: str


@dataclass(frozen=True)
class Recommendation:
    summary: str
    period_context: str
    resource_allocation: str
    ticket_reduction_strategy: str
    team_analysis: list[TeamInsight] = field(default_factory=list)
    agent_performance: AgentPerformance = field(
        default_factory=lambda: AgentPerformance("N/A", "N/A", "N/A")
    )

    def to_payload(self) -> dict[str, Any]:
        """camelCase JSON shape, the same one the model is asked to produce."""
        return {
            "summary": self.summary,
            "periodContext": self.period_context,
            "resourceAllocation": self.resource_allocation,
            "ticketReductionStrategy": self.ticket_reduction_strategy,
            "teamAnalysis": [
                {"teamName": t.team_name, "insight": t.insight, "recommendation": t.recommendation}
                for t in self.team_analysis
            ],
            "agentPerformance": {
                "topPerformer": self.agent_performance.top_performer,
                "needsAttention": self.agent_performance.needs_attention,
                "suggestion": self.agent_performance.suggestion,
            },
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Recommendation":
        agent = payload.get("agentPerformance") or {}
        return cls(
            summary=str(payload.get("summary", "")),
            period_context=str(payload.get("periodContext", "")),
            resource_allocation=str(payload.get("resourceAllocation", "")),
            ticket_reduction_strategy=str(payload.get("ticketReductionStrategy", "")),
            team_analysis=[
                TeamInsight(
                    team_name=str(t.get("teamName", "")),
                    insight=str(t.get("insight", "")),
                    recommendation=str(t.get("recommendation", "")),
                )
                for t in payload.get("teamAnalysis") or []
                if isinstance(t, dict)
            ],
            agent_performance=AgentPerformance(
                top_performer=str(agent.get("topPerformer", "N/A")),
                needs_attention=str(agent.get("needsAttention", "N/A")),
                suggestion=str(agent.get("suggestion", "N/A")),
            ),
        )


FALLBACK_RECOMMENDATION = Recommendation(
    summary="Unable to generate insights at this time. Please check your API key.",
    period_context="Error",
    resource_allocation="Analyze agent load manually.",
    ticket_reduction_strategy="Review high volume categories.",
)
