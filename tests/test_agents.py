"""
Unit tests for agent rollups and chart series
"""

import unittest
from datetime import datetime

from helpdesk.domains.tickets.agents import agent_metrics, agent_metrics_frame
from helpdesk.domains.tickets.charts import agent_workload, type_distribution
from helpdesk.domains.tickets.models import AgentMetrics
from helpdesk.domains.tickets.sample import generate_sample_tickets
from tests.fixtures.sample_data import closed_ticket, make_ticket


class TestAgentMetrics(unittest.TestCase):
    """Test suite for per-agent metrics."""

    def setUp(self):
        self.tickets = [
            closed_ticket(hours=10, rating=4, id="1"),
            closed_ticket(hours=20, rating=5, id="2"),
            make_ticket(id="3"),
            make_ticket(id="4", assignees=("z@y.com", "w@y.com")),
            make_ticket(id="5", assignees=()),
        ]

    def test_single_agent_rollup(self):
        """Test two closed tickets rated 4 and 5 plus one open."""
        agents = {a.email: a for a in agent_metrics(self.tickets)}
        self.assertEqual(
            agents["x@y.com"],
            AgentMetrics(
                email="x@y.com",
                total_tickets=3,
                avg_rating=4.5,
                avg_resolution_hours=15.0,
                active_tickets=1,
            ),
        )

    def test_multi_assignee_counts_for_each(self):
        agents = {a.email: a for a in agent_metrics(self.tickets)}
        for email in ("z@y.com", "w@y.com"):
            self.assertEqual(agents[email].total_tickets, 1)
            self.assertEqual(agents[email].active_tickets, 1)
            self.assertEqual(agents[email].avg_rating, 0.0)

    def test_unassigned_tickets_skipped(self):
        emails = [a.email for a in agent_metrics(self.tickets)]
        self.assertEqual(len(emails), 3)
        self.assertNotIn("", emails)

    def test_sorted_by_volume_then_first_seen(self):
        emails = [a.email for a in agent_metrics(self.tickets)]
        self.assertEqual(emails, ["x@y.com", "z@y.com", "w@y.com"])

    def test_empty(self):
        self.assertEqual(agent_metrics([]), [])
        frame = agent_metrics_frame([])
        self.assertTrue(frame.empty)
        self.assertIn("email", frame.columns)


class TestCharts(unittest.TestCase):
    """Test suite for chart series."""

    def test_type_distribution(self):
        tickets = [
            make_ticket(id=str(i), ticket_type=t)
            for i, t in enumerate(["SFDC", "SmartApp", "SFDC", "IT Operations", " "])
        ]
        series = type_distribution(tickets)
        self.assertEqual(series[0], {"name": "SFDC", "value": 2})
        self.assertEqual(
            {entry["name"] for entry in series},
            {"SFDC", "SmartApp", "IT Operations", "Unspecified"},
        )
        self.assertEqual(len(type_distribution(tickets, limit=2)), 2)

    def test_type_distribution_empty(self):
        self.assertEqual(type_distribution([]), [])

    def test_agent_workload(self):
        agents = [
            AgentMetrics("alice@corp.com", 3, 4.44, 5.0, 1),
            AgentMetrics("bob@corp.com", 1, 0.0, 0.0, 1),
        ]
        self.assertEqual(
            agent_workload(agents, limit=1),
            [{"name": "alice", "tickets": 3, "rating": 4.4}],
        )


class TestSampleTickets(unittest.TestCase):
    """Test suite for demo data generation."""

    NOW = datetime(2024, 3, 20, 12, 0)

    def test_shape(self):
        tickets = generate_sample_tickets(count=50, seed=7, now=self.NOW)
        self.assertEqual([t.id for t in tickets], [str(i) for i in range(1, 51)])
        for t in tickets:
            self.assertLessEqual(t.created_at, self.NOW)
            self.assertGreaterEqual((self.NOW - t.created_at).days, 0)
            self.assertLess((self.NOW - t.created_at).days, 61)
            if t.is_closed:
                self.assertIsNotNone(t.resolved_at)
                self.assertLessEqual(t.resolution_time_hours, 48)
                self.assertIn(t.rating, (3.0, 4.0))
            else:
                self.assertIsNone(t.resolved_at)
                self.assertEqual(t.rating, 0.0)

    def test_seeded_runs_match(self):
        first = generate_sample_tickets(count=10, seed=3, now=self.NOW)
        second = generate_sample_tickets(count=10, seed=3, now=self.NOW)
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
