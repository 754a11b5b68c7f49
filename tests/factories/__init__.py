"""
Test Data Factories

This module provides factory functions for creating test data.
All test data should be created through these factories to ensure consistency.

Usage:
    from tests.factories import create_mock_draw_payload, create_mock_match_list

    payload = create_mock_draw_payload()
    matches = create_mock_match_list(count=13)
"""

from .draws import (
    DEFAULT_FIXTURES,
    create_mock_draw_event,
    create_mock_draw_events,
    create_mock_draw_payload,
)
from .matches import create_mock_match, create_mock_match_list, forms_for
from .team_events import (
    FixedFormEstimator,
    StubTeamLookup,
    create_mock_last_events_payload,
    create_mock_search_payload,
    create_mock_team_event,
)

__all__ = [
    'DEFAULT_FIXTURES',
    'create_mock_draw_event',
    'create_mock_draw_events',
    'create_mock_draw_payload',
    'create_mock_match',
    'create_mock_match_list',
    'forms_for',
    'FixedFormEstimator',
    'StubTeamLookup',
    'create_mock_last_events_payload',
    'create_mock_search_payload',
    'create_mock_team_event',
]
