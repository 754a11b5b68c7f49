"""
Pipelines de collecte et de generation
"""
from .draw_ingest import DrawIngestPipeline
from .sportsdb_lookup import SportsDbLookup
from .generation_pipeline import GenerationPipeline

__all__ = ["DrawIngestPipeline", "SportsDbLookup", "GenerationPipeline"]
