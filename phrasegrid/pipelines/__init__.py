"""Pipeline modules for orchestrating corpus-level workflows."""

from .extraction_pipeline import ExtractionPipeline, ExtractionPipelineConfig, PhrasePairRecord

__all__ = [
    "ExtractionPipeline",
    "ExtractionPipelineConfig",
    "PhrasePairRecord",
]
