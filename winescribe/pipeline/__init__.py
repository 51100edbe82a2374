"""Pipeline orchestration for blog generation."""

from winescribe.pipeline.orchestrator import BlogGenerationPipeline

__all__ = ["BlogGenerationPipeline"]
