"""
Tests unitaires pour la collecte de la grille Svenska Spel
"""
import pytest
from unittest.mock import Mock, patch

from requests.exceptions import ConnectionError, HTTPError, Timeout

from stryktips.contracts.input_models import DrawEventInput, SvenskaFolketInput
from stryktips.contracts.output_models import IngestionStatus
from stryktips.exceptions import DataSourceUnavailable, InsufficientMatches
from stryktips.pipelines.draw_ingest import DrawIngestPipeline
from tests.factories import create_mock_draw_event, create_mock_draw_events, create_mock_draw_payload


def _response(payload):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    return mock_response


class TestDrawIngestPipeline:
    """Tests pour la collecte"""

    def test_pipeline_initialization(self):
        """Test: Initialisation avec trace_id et statut PENDING"""
        pipeline = DrawIngestPipeline(trace_id="test-trace-123")
        assert pipeline.trace_id == "test-trace-123"
        assert pipeline.status == IngestionStatus.PENDING
        assert pipeline.match_count == 13

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_fetch_draw_events_success(self, mock_get):
        """Test: drawEvents extraits de l'enveloppe multifetch"""
        mock_get.return_value = _response(create_mock_draw_payload())

        events = DrawIngestPipeline(trace_id="t").fetch_draw_events()

        assert len(events) == 13
        assert events[0]["eventDescription"] == "Arsenal - Chelsea"

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_run_returns_first_thirteen_matches(self, mock_get):
        """Test: 15 evenements -> 13 premiers, ordre du coupon"""
        mock_get.return_value = _response(create_mock_draw_payload(create_mock_draw_events(15)))
        pipeline = DrawIngestPipeline(trace_id="t")

        matches = pipeline.run()

        assert len(matches) == 13
        assert matches[0].description == "Arsenal - Chelsea"
        assert matches[0].market_percentages == {"1": 40.0, "X": 30.0, "2": 30.0}
        assert matches[12].description == "Göteborg - Elfsborg"
        assert pipeline.status == IngestionStatus.SUCCESS

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_timeout_raises_data_source_unavailable(self, mock_get):
        """Test: Timeout -> DataSourceUnavailable, cause explicite"""
        mock_get.side_effect = Timeout("svenskaspel timeout")
        pipeline = DrawIngestPipeline(trace_id="t")

        with pytest.raises(DataSourceUnavailable) as exc_info:
            pipeline.run()

        assert exc_info.value.details["cause"] == "SOURCE_TIMEOUT"
        assert exc_info.value.error_code == "DATA_SOURCE_UNAVAILABLE"
        assert pipeline.status == IngestionStatus.SOURCE_ERROR

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_http_error_raises(self, mock_get):
        """Test: HTTP 503 -> SOURCE_HTTP_ERROR"""
        error_response = Mock()
        error_response.status_code = 503
        error = HTTPError("Service Unavailable")
        error.response = error_response
        mock_get.side_effect = error
        pipeline = DrawIngestPipeline(trace_id="t")

        with pytest.raises(DataSourceUnavailable):
            pipeline.fetch_draw_events()

        assert pipeline.error_cause == "SOURCE_HTTP_ERROR"
        assert pipeline.error_details == "HTTP 503"

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_transport_error_raises(self, mock_get):
        """Test: Erreur reseau -> SOURCE_UNAVAILABLE"""
        mock_get.side_effect = ConnectionError("connection refused")
        pipeline = DrawIngestPipeline(trace_id="t")

        with pytest.raises(DataSourceUnavailable):
            pipeline.fetch_draw_events()

        assert pipeline.error_cause == "SOURCE_UNAVAILABLE"

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_malformed_payload_raises(self, mock_get):
        """Test: Enveloppe inattendue -> SOURCE_MALFORMED"""
        mock_get.return_value = _response({"responses": []})
        pipeline = DrawIngestPipeline(trace_id="t")

        with pytest.raises(DataSourceUnavailable):
            pipeline.fetch_draw_events()

        assert pipeline.error_cause == "SOURCE_MALFORMED"

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_invalid_json_raises(self, mock_get):
        """Test: Corps non JSON -> SOURCE_MALFORMED"""
        mock_response = Mock()
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_response
        pipeline = DrawIngestPipeline(trace_id="t")

        with pytest.raises(DataSourceUnavailable):
            pipeline.fetch_draw_events()

        assert pipeline.error_cause == "SOURCE_MALFORMED"

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_fewer_than_thirteen_events(self, mock_get):
        """Test: 10 evenements -> InsufficientMatches (10/13)"""
        mock_get.return_value = _response(create_mock_draw_payload(create_mock_draw_events(10)))

        with pytest.raises(InsufficientMatches) as exc_info:
            DrawIngestPipeline(trace_id="t").run()

        assert exc_info.value.found == 10
        assert exc_info.value.required == 13
        assert "10" in str(exc_info.value) and "13" in str(exc_info.value)

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_no_events(self, mock_get):
        """Test: Grille vide -> message distinct"""
        mock_get.return_value = _response(create_mock_draw_payload([]))

        with pytest.raises(InsufficientMatches) as exc_info:
            DrawIngestPipeline(trace_id="t").run()

        assert exc_info.value.found == 0
        assert "No matches found" in exc_info.value.message

    @patch('stryktips.pipelines.draw_ingest.requests.get')
    def test_invalid_events_not_usable(self, mock_get):
        """Test: Evenements invalides ignores -> 12 exploitables sur 13"""
        events = create_mock_draw_events(13)
        events[5]["svenskaFolket"]["x"] = "n/a"
        mock_get.return_value = _response(create_mock_draw_payload(events))

        with pytest.raises(InsufficientMatches) as exc_info:
            DrawIngestPipeline(trace_id="t").run()

        assert exc_info.value.found == 12


class TestInputModels:
    """Tests pour les modeles de validation input"""

    def test_draw_event_valid(self):
        """Test: Pourcentages en texte convertis"""
        event = DrawEventInput.model_validate(create_mock_draw_event("Hull - Stoke", "50", "28", "22"))
        assert event.event_description == "Hull - Stoke"
        assert event.svenska_folket.as_percentages() == {"1": 50.0, "X": 28.0, "2": 22.0}

    def test_draw_event_missing_separator(self):
        """Test: Description sans ' - ' rejetee"""
        with pytest.raises(ValueError):
            DrawEventInput.model_validate(create_mock_draw_event("Hull vs Stoke"))

    def test_draw_event_missing_percentages(self):
        """Test: svenskaFolket manquant rejete"""
        with pytest.raises(ValueError):
            DrawEventInput.model_validate({"eventDescription": "Hull - Stoke"})

    def test_negative_percentage_rejected(self):
        """Test: Pourcentage negatif rejete"""
        with pytest.raises(ValueError):
            SvenskaFolketInput(one=-1, x=50, two=51)
