"""
Provisioning drivers: remote sync and local link materialization.
"""

from hcpmirror.sync.link import run_local_link
from hcpmirror.sync.remote import run_remote_sync
from hcpmirror.sync.types import ReferenceMaterializer, Remover, RunSummary, SubjectResult, TreeSync

__all__ = [
    "run_remote_sync",
    "run_local_link",
    "RunSummary",
    "SubjectResult",
    "TreeSync",
    "ReferenceMaterializer",
    "Remover",
]
