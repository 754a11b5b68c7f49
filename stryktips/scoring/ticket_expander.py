"""
Expansion des resultats retenus en rangees de systeme
Produit cartesien dans l'ordre du coupon
"""
import math
from typing import List, Sequence

from stryktips.scoring.classifier import Match


class TicketExpander:
    """
    Expanseur de systeme
    Nombre de rangees = produit des tailles des resultats retenus
    """

    def expand(self, classified_matches: Sequence[Match]) -> List[str]:
        """
        Construit toutes les rangees du systeme

        Args:
            classified_matches: Matchs classes, dans l'ordre du coupon

        Returns:
            Rangees (une chaine de symboles par rangee), ordre deterministe
        """
        rows = [""]

        for match in classified_matches:
            if not match.allowed_outcomes:
                raise ValueError(f"Match not classified: {match.description}")
            rows = [prefix + symbol for prefix in rows for symbol in match.allowed_outcomes]

        return rows

    def expected_rows(self, classified_matches: Sequence[Match]) -> int:
        """Nombre de rangees attendu pour un classement"""
        return math.prod(len(m.allowed_outcomes) for m in classified_matches)

    def render_rows(self, rows: Sequence[str]) -> str:
        """Une rangee par ligne, pour collage direct chez Svenska Spel"""
        return "\n".join(rows)
