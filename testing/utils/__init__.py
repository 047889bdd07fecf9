"""
Shared testing utilities.

- fakes: scripted GraphFetcher, recording sleep, snapshot builders
- mock_api: httpx.MockTransport-backed Connected Papers API
- mock_s2: httpx.MockTransport-backed Semantic Scholar API
"""

from .fakes import RecordingSleep, ScriptedFetcher, drain, make_graph, snap
from .mock_api import MockConnectedPapersAPI
from .mock_s2 import MockSemanticScholarAPI, make_paper

__all__ = [
    "MockConnectedPapersAPI",
    "MockSemanticScholarAPI",
    "RecordingSleep",
    "ScriptedFetcher",
    "drain",
    "make_graph",
    "make_paper",
    "snap",
]
