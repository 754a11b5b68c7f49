# Contracts module
from .input_models import DrawEventInput, SvenskaFolketInput
from .output_models import (
    GenerationResult,
    GenerationStatus,
    IngestionStatus,
    MatchBreakdown,
    Notification,
)

__all__ = [
    'DrawEventInput',
    'SvenskaFolketInput',
    'GenerationResult',
    'GenerationStatus',
    'IngestionStatus',
    'MatchBreakdown',
    'Notification'
]
