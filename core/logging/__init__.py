"""Module-based logging with run-based rotation.

Per-module log files for project code, a single file for third-party
libraries, and rotation at run boundaries (CLI invocation, MCP server
start, test module).

Usage:
    # At entry points:
    from core.config import configure_logging

    configure_logging("graph-9397e7ac")

    # In modules:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("This goes to the appropriate module log file")

Log files are created in logs/ (override with CONNECTED_PAPERS_LOG_DIR):
    - logs/connected-papers.log, logs/graph-session.log, etc. (per-module)
    - logs/run-3p.log (all third-party libraries)
    - logs/*.previous.log (previous run's logs)
"""

from core.logging.handlers import ModuleDispatchHandler, ThirdPartyHandler
from core.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    is_project_logger,
    module_to_log_name,
    start_run,
)

__all__ = [
    "start_run",
    "end_run",
    "get_current_run_id",
    "is_project_logger",
    "module_to_log_name",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
