"""Pipeline execution for objective-ci."""

from objective_ci.pipeline.executor import PipelineExecutor

__all__ = ["PipelineExecutor"]
