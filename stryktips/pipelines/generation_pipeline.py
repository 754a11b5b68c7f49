"""
Pipeline de generation d'un systeme Stryktipset
Orchestre collecte de la grille, classification et expansion des rangees
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from stryktips.config.generator_config import load_team_name_mapping
from stryktips.contracts.output_models import (
    GenerationResult,
    GenerationStatus,
    MatchBreakdown,
    Notification,
)
from stryktips.exceptions import GenerationError
from stryktips.pipelines.draw_ingest import DrawIngestPipeline
from stryktips.pipelines.sportsdb_lookup import SportsDbLookup
from stryktips.scoring.classifier import Match, MatchClassifier
from stryktips.scoring.form_estimator import FormEstimator
from stryktips.scoring.ticket_expander import TicketExpander

logger = logging.getLogger(__name__)


class GenerationPipeline:
    """
    Pipeline de generation MVP
    Un run = une grille, un classement, un systeme complet ou rien
    """

    def __init__(
        self,
        trace_id: Optional[str] = None,
        ingest: Optional[DrawIngestPipeline] = None,
        classifier: Optional[MatchClassifier] = None,
        expander: Optional[TicketExpander] = None
    ):
        self.trace_id = trace_id or str(uuid.uuid4())
        self.run_id = str(uuid.uuid4())
        self.status = GenerationStatus.PENDING

        # Sous-composants
        self.ingest = ingest or DrawIngestPipeline(trace_id=self.trace_id)
        self.classifier = classifier or MatchClassifier(
            form_estimator=FormEstimator(
                lookup=SportsDbLookup(trace_id=self.trace_id),
                name_mapping=load_team_name_mapping(),
                trace_id=self.trace_id
            ),
            trace_id=self.trace_id
        )
        self.expander = expander or TicketExpander()

    def run(self) -> GenerationResult:
        """
        Execute un run complet

        Returns:
            GenerationResult succes avec toutes les rangees, ou erreur sans aucune rangee
        """
        logger.info(f"[{self.trace_id}] Starting generation run {self.run_id}")

        try:
            # 1. Grille
            self.status = GenerationStatus.INGESTING
            matches = self.ingest.run()

            # 2. Classement (attend toutes les recherches de forme)
            self.status = GenerationStatus.CLASSIFYING
            classified = self.classifier.classify(matches)

            # 3. Rangees
            self.status = GenerationStatus.EXPANDING
            rows = self.expander.expand(classified)

        except GenerationError as e:
            self.status = GenerationStatus.FAILED
            error = e.to_dict()
            logger.error(f"[{self.trace_id}] Generation failed: {error}")
            return self._error_result(error["error_code"], error["error"], error["details"])

        self.status = GenerationStatus.COMPLETED
        breakdown = self._breakdown(classified)

        logger.info(f"[{self.trace_id}] Generation completed: {len(rows)} rows")

        return GenerationResult(
            status="success",
            trace_id=self.trace_id,
            run_id=self.run_id,
            rows_count=len(rows),
            rows=rows,
            matches=breakdown,
            notification=Notification(
                level="success",
                title="Stryktipset generated!",
                description=f"{len(rows)} rows have been created based on your strategy.",
                lines=[f"{b.position}. {b.tip} - {b.description} ({b.label})" for b in breakdown]
            )
        )

    def _breakdown(self, classified: List[Match]) -> List[MatchBreakdown]:
        return [
            MatchBreakdown(
                position=position,
                description=match.description,
                tier=match.tier.value,
                label=match.tier.label,
                tip=match.tip,
                allowed_outcomes=list(match.allowed_outcomes),
                uncertainty_score=round(match.uncertainty_score, 4),
                home_form=match.home_form,
                away_form=match.away_form
            )
            for position, match in enumerate(classified, start=1)
        ]

    def _error_result(
        self,
        cause: Optional[str],
        message: str,
        details: Dict[str, Any]
    ) -> GenerationResult:
        # Echec = aucune rangee publiee
        return GenerationResult(
            status="error",
            trace_id=self.trace_id,
            run_id=self.run_id,
            rows_count=0,
            rows=[],
            matches=[],
            notification=Notification(
                level="error",
                title="Generation failed",
                description=message
            ),
            error_cause=cause,
            error_details=str(details) if details else None
        )
