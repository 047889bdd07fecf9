"""Run-based log rotation manager.

A "run" is one logical unit of work: a CLI invocation, an MCP server
lifetime, or a test module. The first write to each log file within a run
rotates the previous run's file out of the way.

Usage:
    from core.logging import start_run, end_run

    start_run("graph-9397e7ac")
    try:
        ...
    finally:
        end_run()
"""

from contextvars import ContextVar

# ContextVars so concurrent async runs don't share rotation state
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
_rotated_this_run: ContextVar[set[str] | None] = ContextVar("rotated_this_run", default=None)

# Module names don't change, so this cache is shared across runs
_module_log_cache: dict[str, str] = {}

# Longest-prefix match of module path -> log file name.
# Project modules not listed here go to "misc.log".
MODULE_TO_LOG = {
    # Connected Papers client
    "core.connected_papers": "connected-papers",
    "core.connected_papers.session": "graph-session",
    "core.connected_papers.cli": "cli",
    # Semantic Scholar client
    "core.semantic_scholar": "semantic-scholar",
    # Shared infrastructure
    "core.utils": "utils",
    "core.config": "config",
    "core.logging": "logging-internal",
    # Integration surfaces
    "langchain_tools": "langchain-tools",
    "mcp_server": "mcp-server",
    "testing": "testing",
}

# Top-level packages whose records go to per-module files; everything
# else is third-party and lands in run-3p.log
PROJECT_PACKAGES = frozenset(prefix.split(".")[0] for prefix in MODULE_TO_LOG)

_SORTED_PREFIXES = sorted(MODULE_TO_LOG.keys(), key=len, reverse=True)


def start_run(run_id: str) -> None:
    """Signal start of new run.

    Safe to call repeatedly; each call resets rotation tracking.

    Args:
        run_id: Unique identifier for this run (e.g., paper id, test name)
    """
    _current_run_id.set(run_id)
    _rotated_this_run.set(set())


def end_run() -> None:
    """Signal end of run.

    Best-effort: rotation is driven by start_run(), so a missed end_run()
    after a crash is harmless.
    """
    _current_run_id.set(None)
    _rotated_this_run.set(None)


def get_current_run_id() -> str | None:
    """Get the current run ID, if any."""
    return _current_run_id.get()


def should_rotate(log_name: str) -> bool:
    """Check, and mark, whether a log file is due for rotation in this run.

    Returns True only inside a run, and only the first time a given log
    name is asked about within that run.
    """
    run_id = _current_run_id.get()
    rotated = _rotated_this_run.get()

    if run_id is None or rotated is None:
        return False

    if log_name in rotated:
        return False

    rotated.add(log_name)
    return True


def is_project_logger(logger_name: str) -> bool:
    """True when a logger belongs to one of this project's packages."""
    return logger_name.split(".")[0] in PROJECT_PACKAGES


def module_to_log_name(module_name: str) -> str:
    """Resolve module path to log filename (cached).

    Args:
        module_name: The __name__ of the module
            (e.g., "core.connected_papers.client")

    Returns:
        Log file name without extension (e.g., "connected-papers")
    """
    if module_name not in _module_log_cache:
        _module_log_cache[module_name] = _compute_log_name(module_name)
    return _module_log_cache[module_name]


def _compute_log_name(module_name: str) -> str:
    """Find longest matching prefix in MODULE_TO_LOG, or "misc"."""
    for prefix in _SORTED_PREFIXES:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return MODULE_TO_LOG[prefix]
    return "misc"
