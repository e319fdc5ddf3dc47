# content-pipeline - Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from content_pipeline.core.ports.content_repo import ContentRepoPort

__all__ = [
    "ContentRepoPort",
]
