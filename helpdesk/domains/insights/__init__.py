"""Insights domain: language-model summaries and the data assistant."""

from collections.abc import Sequence

from helpdesk.domains.insights.cache import InsightCache
from helpdesk.domains.insights.client import InsightClient, InsightError
from helpdesk.domains.insights.context import (
    assistant_instruction,
    build_data_context,
    build_insight_payload,
)
from helpdesk.domains.insights.models import (
    FALLBACK_RECOMMENDATION,
    LLMProvider,
    LLMSettings,
    Recommendation,
)
from helpdesk.domains.tickets.models import AgentMetrics, Ticket
from helpdesk.utils.types import TimeRange


def get_insights(
    tickets: Sequence[Ticket],
    agents: Sequence[AgentMetrics],
    label: str,
    client: InsightClient,
    cache: InsightCache,
    refresh: bool = False,
) -> Recommendation:
    """Cached insights for a period label, generating them on a miss.

    Fallback results are returned but never cached.
    """
    if not refresh:
        cached = cache.get(label)
        if cached is not None:
            return cached

    result = client.generate_insights(tickets, agents, label)
    if result is not FALLBACK_RECOMMENDATION:
        cache.put(label, result)
    return result


def ask(
    question: str,
    tickets: Sequence[Ticket],
    agents: Sequence[AgentMetrics],
    time_range: TimeRange | str,
    client: InsightClient,
) -> str:
    context = build_data_context(tickets, agents, time_range)
    return client.chat(question, assistant_instruction(context))
