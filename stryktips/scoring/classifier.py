"""
Classification des matchs en helgarderingar, halvgarderingar et spikar
Score d'incertitude = poids marche * ecart + poids forme * ecart de forme
"""
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from stryktips.config.generator_config import ScoreWeights, TierSizes, get_config
from stryktips.exceptions import InsufficientMatches
from stryktips.scoring.form_estimator import FormEstimator
from stryktips.scoring.signal_aggregator import OUTCOME_SYMBOLS, SignalAggregator

logger = logging.getLogger(__name__)


class HedgeTier(str, Enum):
    """Niveau de couverture d'un match"""
    FULL_HEDGE = "FullHedge"
    PARTIAL_HEDGE = "PartialHedge"
    PINNED = "Pinned"

    @property
    def label(self) -> str:
        return TIER_LABELS[self]


TIER_LABELS = {
    HedgeTier.FULL_HEDGE: "Helgardering",
    HedgeTier.PARTIAL_HEDGE: "Halvgardering",
    HedgeTier.PINNED: "Spik",
}


@dataclass
class Match:
    """Match de la grille, enrichi au fil du run"""
    description: str
    market_percentages: Dict[str, float]
    home_form: int = 0
    away_form: int = 0
    spread: float = 0.0
    form_gap: int = 0
    ranked_outcomes: List[Tuple[str, float]] = field(default_factory=list)
    uncertainty_score: float = 0.0
    tier: Optional[HedgeTier] = None
    allowed_outcomes: List[str] = field(default_factory=list)
    separator: str = " - "

    @property
    def home_team(self) -> str:
        return self.description.split(self.separator, 1)[0].strip()

    @property
    def away_team(self) -> str:
        parts = self.description.split(self.separator, 1)
        return parts[1].strip() if len(parts) > 1 else ""

    @property
    def tip(self) -> str:
        return "".join(self.allowed_outcomes)


def partition_tiers(
    ranked_matches: Sequence[Match],
    tier_sizes: TierSizes
) -> Dict[HedgeTier, List[Match]]:
    """
    Decoupe un classement en tiers par position de rang

    Args:
        ranked_matches: Matchs tries par score croissant
        tier_sizes: Tailles des tiers (doivent couvrir tout le classement)

    Returns:
        Dict tier -> matchs, dans l'ordre du classement
    """
    if tier_sizes.total != len(ranked_matches):
        raise ValueError(
            f"Tier sizes cover {tier_sizes.total} matches, got {len(ranked_matches)}"
        )

    first = tier_sizes.full_hedge
    second = first + tier_sizes.partial_hedge

    return {
        HedgeTier.FULL_HEDGE: list(ranked_matches[:first]),
        HedgeTier.PARTIAL_HEDGE: list(ranked_matches[first:second]),
        HedgeTier.PINNED: list(ranked_matches[second:]),
    }


def allowed_outcomes_for(tier: HedgeTier, ranked_outcomes: Sequence[Tuple[str, float]]) -> List[str]:
    """Resultats retenus pour un match selon son tier"""
    if tier == HedgeTier.FULL_HEDGE:
        return list(OUTCOME_SYMBOLS)
    if tier == HedgeTier.PARTIAL_HEDGE:
        return [symbol for symbol, _ in ranked_outcomes[:2]]
    return [ranked_outcomes[0][0]]


class MatchClassifier:
    """
    Classificateur de la grille
    Agregation marche, forme (en parallele), score, rang, tiers
    """

    def __init__(
        self,
        form_estimator: Optional[FormEstimator] = None,
        weights: Optional[ScoreWeights] = None,
        tier_sizes: Optional[TierSizes] = None,
        match_count: Optional[int] = None,
        max_workers: Optional[int] = None,
        trace_id: Optional[str] = None
    ):
        config = get_config()
        self.trace_id = trace_id or str(uuid.uuid4())
        self.form_estimator = form_estimator or FormEstimator(trace_id=self.trace_id)
        self.weights = weights or config.weights
        self.tier_sizes = tier_sizes or config.tiers
        self.match_count = match_count or config.draw.match_count
        self.max_workers = max_workers or config.sources.lookup_workers
        self.aggregator = SignalAggregator()

    def classify(
        self,
        matches: Sequence[Match],
        weights: Optional[ScoreWeights] = None
    ) -> List[Match]:
        """
        Classe les matchs de la grille

        Args:
            matches: Matchs dans l'ordre du coupon (au-dela de match_count ignores)
            weights: Poids du score (defaut: configuration)

        Returns:
            Les match_count premiers matchs, dans l'ordre d'entree, avec tier et resultats retenus

        Raises:
            InsufficientMatches: Si moins de match_count matchs
        """
        if len(matches) < self.match_count:
            raise InsufficientMatches(found=len(matches), required=self.match_count)

        weights = weights or self.weights
        selected = list(matches[:self.match_count])

        # 1. Signal marche
        for match in selected:
            signal = self.aggregator.aggregate(match.market_percentages)
            match.spread = signal.spread
            match.ranked_outcomes = list(signal.ranked_outcomes)

        # 2. Forme domicile/exterieur, toutes les recherches terminees avant le score
        self._collect_forms(selected)

        # 3. Score d'incertitude
        for match in selected:
            match.form_gap = abs(match.home_form - match.away_form)
            match.uncertainty_score = (
                weights.market_weight * match.spread +
                weights.form_weight * match.form_gap
            )

        # 4. Classement croissant, stable sur l'ordre d'entree
        ranked = sorted(selected, key=lambda m: m.uncertainty_score)

        # 5-6. Tiers et resultats retenus
        for tier, members in partition_tiers(ranked, self.tier_sizes).items():
            for match in members:
                match.tier = tier
                match.allowed_outcomes = allowed_outcomes_for(tier, match.ranked_outcomes)

        logger.info(
            f"[{self.trace_id}] Classified {len(selected)} matches: "
            + ", ".join(f"{m.description}={m.tip}" for m in selected)
        )

        return selected

    def _collect_forms(self, matches: Sequence[Match]) -> None:
        """Recherches de forme en parallele (deux par match), jointure sur l'ensemble"""
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                (
                    match,
                    executor.submit(self.form_estimator.team_form, match.home_team),
                    executor.submit(self.form_estimator.team_form, match.away_team),
                )
                for match in matches
            ]

            for match, home_future, away_future in futures:
                match.home_form = home_future.result()
                match.away_form = away_future.result()

        logger.debug(f"[{self.trace_id}] Form lookups completed for {len(matches)} matches")
