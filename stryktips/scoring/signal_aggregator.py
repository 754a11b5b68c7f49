"""
Agregateur du signal marche (Svenska folket)
Ecart entre resultat le plus et le moins joue, classement des resultats
"""
from dataclasses import dataclass
from typing import Mapping, Tuple

OUTCOME_SYMBOLS: Tuple[str, ...] = ("1", "X", "2")

# Ordre de preseance en cas d'egalite stricte
OUTCOME_PRECEDENCE = {symbol: rank for rank, symbol in enumerate(OUTCOME_SYMBOLS)}


@dataclass(frozen=True)
class MarketSignal:
    """Signal marche d'un match"""
    spread: float
    ranked_outcomes: Tuple[Tuple[str, float], ...]

    @property
    def favourite(self) -> str:
        return self.ranked_outcomes[0][0]


class SignalAggregator:
    """
    Agregateur pur, sans effet de bord
    """

    def aggregate(self, percentages: Mapping[str, float]) -> MarketSignal:
        """
        Calcule l'ecart et le classement des resultats d'un match

        Args:
            percentages: Pourcentages indexes par symbole ("1", "X", "2")

        Returns:
            MarketSignal avec spread et resultats classes du plus au moins joue
        """
        values = [(symbol, float(percentages[symbol])) for symbol in OUTCOME_SYMBOLS]
        numbers = [value for _, value in values]

        ranked = sorted(values, key=lambda item: (-item[1], OUTCOME_PRECEDENCE[item[0]]))

        return MarketSignal(
            spread=max(numbers) - min(numbers),
            ranked_outcomes=tuple(ranked)
        )
