"""
JSON report for a single render: output text plus structural counters.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RenderReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output: str
    conditional_blocks: int = Field(alias="conditionalBlocks")
    loop_blocks: int = Field(alias="loopBlocks")
    variables: int
    paths: List[str] = Field(default_factory=list)
    malformed_markers: int = Field(alias="malformedMarkers")
    conditions_evaluated: int = Field(alias="conditionsEvaluated")
    conditions_true: int = Field(alias="conditionsTrue")
    loop_items: int = Field(alias="loopItems")
    depth_limit_hits: int = Field(alias="depthLimitHits")

    @classmethod
    def from_meta(cls, output: str, meta: dict) -> "RenderReport":
        """Build from the metadata dict returned by process_template()."""
        prefix = "slotvars."
        fields = {k[len(prefix):]: v for k, v in meta.items() if k.startswith(prefix)}
        return cls(output=output, **fields)


__all__ = ["RenderReport"]
