"""Text transformer: ordered rewrite pipelines per file role."""

from ngmodernize.transformer.base import TransformContext
from ngmodernize.transformer.control_flow import migrate_template
from ngmodernize.transformer.engine import (
    PIPELINES,
    TransformResult,
    run_pipeline,
    transform,
)

__all__ = [
    "PIPELINES",
    "TransformContext",
    "TransformResult",
    "migrate_template",
    "run_pipeline",
    "transform",
]
