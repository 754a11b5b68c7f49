"""
Pipeline de collecte de la grille Stryktipset
Source: multifetch Svenska Spel (evenements et pourcentages Svenska folket)
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError
from requests.exceptions import Timeout, HTTPError, RequestException

from stryktips.config.generator_config import get_config
from stryktips.contracts.input_models import DrawEventInput
from stryktips.contracts.output_models import IngestionStatus
from stryktips.exceptions import DataSourceUnavailable, InsufficientMatches
from stryktips.scoring.classifier import Match

# Configuration logging structure
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class DrawIngestPipeline:
    """
    Pipeline de collecte de la grille
    Responsabilites:
    - Collecte API Svenska Spel
    - Validation contrat de donnees par evenement
    - Selection des match_count premiers evenements exploitables
    """

    def __init__(
        self,
        trace_id: Optional[str] = None,
        source_url: Optional[str] = None,
        timeout: Optional[float] = None,
        match_count: Optional[int] = None
    ):
        config = get_config()
        self.trace_id = trace_id or str(uuid.uuid4())
        self.source_url = source_url or config.sources.draws_url
        self.timeout = timeout or config.sources.request_timeout_seconds
        self.match_count = match_count or config.draw.match_count
        self.separator = config.draw.description_separator
        self.status = IngestionStatus.PENDING
        self.error_cause: Optional[str] = None
        self.error_details: Optional[str] = None

        logger.info(f"[{self.trace_id}] Draw ingest initialise - source: {self.source_url}")

    def _fail(self, cause: str, details: str) -> DataSourceUnavailable:
        self.status = IngestionStatus.SOURCE_ERROR
        self.error_cause = cause
        self.error_details = details
        return DataSourceUnavailable(
            "Could not fetch data from the Svenska Spel API.",
            cause=cause,
            details={"reason": details}
        )

    def fetch_draw_events(self) -> List[Dict[str, Any]]:
        """
        Recupere les evenements de la grille courante

        Returns:
            Liste brute des evenements (drawEvents)

        Raises:
            DataSourceUnavailable: Timeout, erreur HTTP/transport ou reponse malformee
        """
        self.status = IngestionStatus.COLLECTING
        logger.info(f"[{self.trace_id}] Debut collecte depuis {self.source_url}")

        try:
            response = requests.get(
                self.source_url,
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "X-Trace-Id": self.trace_id
                }
            )
            response.raise_for_status()
            data = response.json()

        except Timeout as e:
            logger.error(f"[{self.trace_id}] Timeout source: {e}")
            raise self._fail("SOURCE_TIMEOUT", f"API timeout after {self.timeout}s: {e}") from e

        except HTTPError as e:
            status_code = getattr(e.response, 'status_code', 'unknown')
            logger.error(f"[{self.trace_id}] HTTP error: {e}")
            raise self._fail("SOURCE_HTTP_ERROR", f"HTTP {status_code}") from e

        except ValueError as e:
            logger.error(f"[{self.trace_id}] Invalid JSON from source: {e}")
            raise self._fail("SOURCE_MALFORMED", f"Invalid JSON: {e}") from e

        except RequestException as e:
            logger.error(f"[{self.trace_id}] Source unavailable: {e}")
            raise self._fail("SOURCE_UNAVAILABLE", f"Request failed: {e}") from e

        try:
            events = data["responses"][0]["draws"][0]["drawEvents"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"[{self.trace_id}] Unexpected payload structure: {e}")
            raise self._fail("SOURCE_MALFORMED", f"Missing drawEvents: {e}") from e

        events = events or []
        logger.info(f"[{self.trace_id}] Collecte reussie: {len(events)} evenements")
        return list(events)

    def validate_events_batch(self, events: List[Dict[str, Any]]) -> List[DrawEventInput]:
        """
        Valide un lot d'evenements

        Args:
            events: Evenements bruts

        Returns:
            Evenements valides, ordre conserve
        """
        self.status = IngestionStatus.VALIDATING
        valid_events = []

        for position, event_data in enumerate(events, start=1):
            try:
                valid_events.append(DrawEventInput.model_validate(event_data))
            except ValidationError as e:
                logger.warning(f"[{self.trace_id}] Evenement {position} invalide ignore: {e}")
                continue

        logger.info(f"[{self.trace_id}] Validation: {len(valid_events)}/{len(events)} evenements valides")
        return valid_events

    def run(self) -> List[Match]:
        """
        Execute la collecte complete

        Returns:
            Les match_count premiers matchs exploitables, ordre du coupon

        Raises:
            DataSourceUnavailable: Echec de la source
            InsufficientMatches: Moins de match_count evenements exploitables
        """
        raw_events = self.fetch_draw_events()
        valid_events = self.validate_events_batch(raw_events)

        if len(valid_events) < self.match_count:
            self.status = IngestionStatus.VALIDATION_ERROR
            self.error_cause = "INSUFFICIENT_MATCHES"
            self.error_details = f"{len(valid_events)}/{self.match_count} usable events"
            logger.error(f"[{self.trace_id}] {self.error_details}")
            raise InsufficientMatches(found=len(valid_events), required=self.match_count)

        matches = [
            Match(
                description=event.event_description,
                market_percentages=event.svenska_folket.as_percentages(),
                separator=self.separator
            )
            for event in valid_events[:self.match_count]
        ]

        self.status = IngestionStatus.SUCCESS
        logger.info(f"[{self.trace_id}] === Collecte succes: {len(matches)} matchs ===")
        return matches
