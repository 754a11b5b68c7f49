# Config module
from .generator_config import (
    GeneratorConfig,
    ScoreWeights,
    TierSizes,
    get_config,
    get_setting,
    load_team_name_mapping,
    reload_config,
)

__all__ = [
    'GeneratorConfig',
    'ScoreWeights',
    'TierSizes',
    'get_config',
    'get_setting',
    'load_team_name_mapping',
    'reload_config',
]
