"""
Pipeline Module
===============

Search orchestration and the public search operations.
"""

from datelens_core.pipeline.search import (
    PhonePayload,
    PhotoPayload,
    SearchKind,
    SearchOrchestrator,
    SearchPayload,
    SearchResultEnvelope,
    get_default_orchestrator,
    perform_image_search,
    perform_phone_search,
    set_default_orchestrator,
)

__all__ = [
    "PhonePayload",
    "PhotoPayload",
    "SearchKind",
    "SearchOrchestrator",
    "SearchPayload",
    "SearchResultEnvelope",
    "get_default_orchestrator",
    "perform_image_search",
    "perform_phone_search",
    "set_default_orchestrator",
]
