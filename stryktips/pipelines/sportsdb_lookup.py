"""
Client TheSportsDB
Recherche d'equipe et derniers matchs joues, pour l'estimation de forme
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

import requests

from stryktips.config.generator_config import get_config

logger = logging.getLogger(__name__)


class SportsDbLookup:
    """
    Lectures seules sur TheSportsDB
    Les erreurs de transport remontent: l'estimateur de forme les absorbe
    """

    def __init__(
        self,
        trace_id: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        sources = get_config().sources
        self.trace_id = trace_id or str(uuid.uuid4())
        self.base_url = (base_url or sources.sportsdb_base_url).rstrip('/')
        self.api_key = api_key or sources.sportsdb_api_key
        self.timeout = timeout or sources.request_timeout_seconds

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/{self.api_key}/{endpoint}"
        response = requests.get(
            url,
            params=params,
            timeout=self.timeout,
            headers={
                "Accept": "application/json",
                "X-Trace-Id": self.trace_id
            }
        )
        response.raise_for_status()
        return response.json() or {}

    def search_team_id(self, team_name: str) -> Optional[str]:
        """
        Identifiant de la premiere equipe correspondant au nom

        Args:
            team_name: Nom canonique de recherche

        Returns:
            idTeam ou None si aucune equipe
        """
        data = self._get("searchteams.php", {"t": team_name})
        teams = data.get("teams") or []
        if not teams:
            return None
        return str(teams[0]["idTeam"])

    def last_events(self, team_id: str) -> List[Dict[str, Any]]:
        """
        Derniers matchs termines de l'equipe (plus recent en premier)

        Args:
            team_id: idTeam TheSportsDB

        Returns:
            Liste des evenements (vide si aucun)
        """
        data = self._get("eventslast.php", {"id": team_id})
        results = data.get("results") or []
        logger.debug(f"[{self.trace_id}] {len(results)} last events for team {team_id}")
        return list(results)
