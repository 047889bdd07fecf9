"""Pydantic output models for the Connected Papers tools."""

from typing import Optional

from pydantic import BaseModel

from core.connected_papers import GraphStatus, PaperDetails, SnapshotSummary


class ConnectedPapersGraphOutput(BaseModel):
    """Output schema for connected_papers_graph tool."""

    paper_id: str
    fresh_only: bool
    snapshots_seen: int = 0
    status: Optional[GraphStatus] = None
    result: Optional[SnapshotSummary] = None
    error: Optional[str] = None


class ConnectedPapersPaperInfoOutput(BaseModel):
    """Output schema for connected_papers_paper_info tool."""

    paper_id: str
    status: Optional[GraphStatus] = None
    progress: Optional[float] = None
    paper: Optional[PaperDetails] = None
    error: Optional[str] = None


class ConnectedPapersUsageOutput(BaseModel):
    """Output schema for connected_papers_remaining_usages tool."""

    remaining_usages: Optional[int] = None
    error: Optional[str] = None
