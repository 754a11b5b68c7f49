"""
Generation Flow Test

End-to-end run with both HTTP providers mocked at the requests layer:
draw ingest -> form lookups -> classification -> expansion.

Run with: pytest tests/integration/test_generation_flow.py -v
"""

from unittest.mock import Mock, patch

from stryktips.pipelines.generation_pipeline import GenerationPipeline
from tests.factories import (
    create_mock_draw_events,
    create_mock_draw_payload,
    create_mock_last_events_payload,
    create_mock_search_payload,
    create_mock_team_event,
)

ARSENAL_ID = "133604"


def _response(payload):
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    return response


def _fake_get(draw_payload, searched):
    """Dispatch requests.get by endpoint; only Arsenal is known to TheSportsDB."""

    def fake_get(url, params=None, **kwargs):
        if "svenskaspel" in url:
            return _response(draw_payload)
        if url.endswith("searchteams.php"):
            searched.append(params["t"])
            if params["t"] == "Arsenal":
                return _response(create_mock_search_payload(team_id=ARSENAL_ID))
            return _response(create_mock_search_payload(team_id=None))
        if url.endswith("eventslast.php"):
            wins = [create_mock_team_event(home_id=ARSENAL_ID, away_id="1", home_score="2", away_score="0")] * 5
            return _response(create_mock_last_events_payload(wins))
        raise AssertionError(f"unexpected url {url}")

    return fake_get


class TestGenerationFlow:
    """Full run against mocked providers."""

    @patch('requests.get')
    def test_full_run(self, mock_get):
        """A complete draw yields a 1296-row system."""
        searched = []
        mock_get.side_effect = _fake_get(create_mock_draw_payload(), searched)

        result = GenerationPipeline(trace_id="flow-trace").run()

        assert result.status == "success"
        assert result.rows_count == 1296
        assert len(set(result.rows)) == 1296
        assert len(searched) == 26

        arsenal = result.matches[0]
        assert arsenal.description == "Arsenal - Chelsea"
        assert arsenal.home_form == 15
        assert arsenal.away_form == 0

    @patch('requests.get')
    def test_names_mapped_before_search(self, mock_get):
        """Coupon abbreviations are searched by their canonical name."""
        searched = []
        mock_get.side_effect = _fake_get(create_mock_draw_payload(), searched)

        GenerationPipeline(trace_id="flow-trace").run()

        assert "Manchester City" in searched
        assert "Man City" not in searched

    @patch('requests.get')
    def test_unknown_teams_do_not_fail_run(self, mock_get):
        """Teams missing from TheSportsDB score 0 and the run still succeeds."""
        searched = []
        mock_get.side_effect = _fake_get(create_mock_draw_payload(), searched)

        result = GenerationPipeline(trace_id="flow-trace").run()

        assert all(m.home_form == 0 and m.away_form == 0 for m in result.matches[1:])
        assert result.status == "success"

    @patch('requests.get')
    def test_short_draw_publishes_nothing(self, mock_get):
        """A draw with 12 events fails without rows and without form lookups."""
        searched = []
        payload = create_mock_draw_payload(create_mock_draw_events(12))
        mock_get.side_effect = _fake_get(payload, searched)

        result = GenerationPipeline(trace_id="flow-trace").run()

        assert result.status == "error"
        assert result.rows == []
        assert result.error_cause == "INSUFFICIENT_MATCHES"
        assert searched == []
