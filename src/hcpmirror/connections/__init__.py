"""
Storage collaborators: the remote S3 dataset and the local filesystem.
"""

from hcpmirror.connections.filesystem import (
    CloneMaterializer,
    SymlinkMaterializer,
    TreeRemover,
    build_materializer,
    make_writable,
)
from hcpmirror.connections.s3 import S3Connection

__all__ = [
    "S3Connection",
    "CloneMaterializer",
    "SymlinkMaterializer",
    "TreeRemover",
    "build_materializer",
    "make_writable",
]
