"""
Module de classification et d'expansion des systemes Stryktipset
Forme, signal marche, tiers de couverture, rangees
"""
from .form_estimator import FormEstimator, TeamLookup
from .signal_aggregator import SignalAggregator, MarketSignal, OUTCOME_SYMBOLS
from .classifier import MatchClassifier, Match, HedgeTier, partition_tiers, allowed_outcomes_for
from .ticket_expander import TicketExpander

__all__ = [
    'FormEstimator',
    'TeamLookup',
    'SignalAggregator',
    'MarketSignal',
    'OUTCOME_SYMBOLS',
    'MatchClassifier',
    'Match',
    'HedgeTier',
    'partition_tiers',
    'allowed_outcomes_for',
    'TicketExpander',
]
