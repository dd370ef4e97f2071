"""Pipeline package exports."""

from pipelines.unified_pipeline import (
    execute_create_pipeline,
    execute_list_pipeline,
    execute_targets_pipeline,
    open_client,
)

__all__ = [
    "execute_create_pipeline",
    "execute_list_pipeline",
    "execute_targets_pipeline",
    "open_client",
]
