"""
Pipeline Package - Stage Composition.

Components:
    - ViewPipeline: Holds the three stages of a view and runs them in order
    - compose: One-shot search -> filter -> paginate over a collection

The pipeline is responsible for:
    - Running stages in the fixed order search -> filter -> pagination
    - Deriving PipelineStats on every run
    - Recording the per-stage audit trail and metrics
    - Logging control values it had to correct
"""

from portal_dataview.pipeline.view_pipeline import ViewPipeline, compose

__all__ = ["ViewPipeline", "compose"]
