"""
Estimateur de forme recente d'une equipe
Victoire = 3, nul = 1, defaite = 0 sur les derniers matchs joues
"""
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from requests.exceptions import RequestException

from stryktips.config.generator_config import FormConfig, get_config

logger = logging.getLogger(__name__)


class TeamLookup(Protocol):
    """Source de donnees equipe (TheSportsDB en production)"""

    def search_team_id(self, team_name: str) -> Optional[str]:
        ...

    def last_events(self, team_id: str) -> List[Dict[str, Any]]:
        ...


def _parse_score(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class FormEstimator:
    """
    Calcul du score de forme avec politique de degradation:
    tout echec de recherche equipe ou d'historique donne 0, jamais une erreur
    """

    def __init__(
        self,
        lookup: Optional[TeamLookup] = None,
        name_mapping: Optional[Mapping[str, str]] = None,
        trace_id: Optional[str] = None,
        form_config: Optional[FormConfig] = None
    ):
        self.trace_id = trace_id or str(uuid.uuid4())
        self.lookup = lookup
        self.name_mapping = dict(name_mapping or {})
        self.form_config = form_config or get_config().form

    def estimate(self, recent_results: Sequence[Dict[str, Any]], team_id: str) -> int:
        """
        Score de forme a partir des derniers resultats (plus recent en premier)

        Args:
            recent_results: Evenements termines (intHomeScore, intAwayScore, idHomeTeam, idAwayTeam)
            team_id: Identifiant de l'equipe evaluee

        Returns:
            Score entier >= 0
        """
        cfg = self.form_config
        team_id = str(team_id)
        score = 0

        for event in list(recent_results)[:cfg.window]:
            home_score = _parse_score(event.get("intHomeScore"))
            away_score = _parse_score(event.get("intAwayScore"))
            if home_score is None or away_score is None:
                continue

            if home_score > away_score and str(event.get("idHomeTeam")) == team_id:
                score += cfg.win_points
            elif away_score > home_score and str(event.get("idAwayTeam")) == team_id:
                score += cfg.win_points
            elif home_score == away_score:
                score += cfg.draw_points
            else:
                score += cfg.loss_points

        return max(score, 0)

    def search_name(self, team_name: str) -> str:
        """Nom canonique pour la recherche (table de correspondance injectee)"""
        return self.name_mapping.get(team_name, team_name)

    def team_form(self, team_name: str) -> int:
        """
        Recherche l'equipe puis calcule sa forme

        Args:
            team_name: Nom affiche sur le coupon

        Returns:
            Score de forme, 0 si l'equipe ou son historique est introuvable
        """
        if self.lookup is None:
            return 0

        search_name = self.search_name(team_name)

        try:
            team_id = self.lookup.search_team_id(search_name)
            if not team_id:
                logger.warning(f"[{self.trace_id}] Team not found in TheSportsDB: {search_name}")
                return 0

            events = self.lookup.last_events(team_id)
            form = self.estimate(events, team_id)
            logger.debug(f"[{self.trace_id}] Form {team_name} ({team_id}): {form}")
            return form

        except RequestException as e:
            logger.warning(f"[{self.trace_id}] Form lookup failed for {team_name}: {e}")
            return 0

        except Exception as e:
            logger.warning(f"[{self.trace_id}] Form data unusable for {team_name}: {e}")
            return 0
