"""
hcpmirror - Stage-scoped provisioning of per-subject HCP neuroimaging data.

Syncs subject directories from the remote dataset, or builds lightweight
per-project reference trees from a local mirror.
"""

__version__ = "0.1.0"

from hcpmirror.config.loader import Config, load_config
from hcpmirror.config.options import LinkMode, RunOptions, Tool, resolve_options

# Exceptions
from hcpmirror.exceptions import ConfigurationError, HcpMirrorError, OverwriteDeclined
from hcpmirror.stage import STAGE_PLANS, Stage, StagePlan, parse_stage, subdirectories_for
from hcpmirror.subjects import read_subject_list, resolve_subjects

# Drivers
from hcpmirror.sync.link import run_local_link
from hcpmirror.sync.remote import run_remote_sync
from hcpmirror.sync.types import RunSummary, SubjectResult

# Logging utilities
from hcpmirror.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Stage policy
    "Stage",
    "StagePlan",
    "STAGE_PLANS",
    "parse_stage",
    "subdirectories_for",
    # Subjects and options
    "resolve_subjects",
    "read_subject_list",
    "resolve_options",
    "RunOptions",
    "LinkMode",
    "Tool",
    # Config
    "Config",
    "load_config",
    # Drivers
    "run_remote_sync",
    "run_local_link",
    "RunSummary",
    "SubjectResult",
    # Exceptions
    "HcpMirrorError",
    "ConfigurationError",
    "OverwriteDeclined",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
]
