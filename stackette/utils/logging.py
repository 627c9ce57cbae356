from __future__ import annotations
"""Rich logging setup and tree rendering for Stackette.

The root logger is configured once with a :class:`rich.logging.RichHandler`
so library messages and CLI output share the same console.
"""
from logging import Logger, getLogger, INFO, DEBUG, WARNING, ERROR, basicConfig
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from stackette.utils.events import (
    subscribe,
    ResourceAdded,
    IngressRuleAdded,
    StackSynthesized,
)

console = Console()

__all__ = [
    "console",
    "get",
    "log",
    "show_tree",
]

_LEVEL_MAP = {
    "info": INFO,
    "debug": DEBUG,
    "warning": WARNING,
    "error": ERROR,
}

# Configure root once with Rich handler for plain log messages
basicConfig(
    level=INFO,
    format="%(message)s",
    datefmt="%H:%M:%S",
    handlers=[RichHandler(console=console, rich_tracebacks=True, markup=True)],
)

log: Logger = getLogger("stackette")


def get(level: str = "info") -> Logger:  # noqa: D401
    """Return the package logger set to *level* (str)."""
    lvl = _LEVEL_MAP.get(level.lower(), INFO)
    lg = getLogger("stackette")
    lg.setLevel(lvl)
    return lg


# --------------------------------------------------------------------------- #
# Event subscribers
# --------------------------------------------------------------------------- #
@subscribe(ResourceAdded)
def _on_resource(evt: ResourceAdded):  # noqa: D401 – event hook
    log.debug("%s: added %s (%s)", evt.stack, evt.path, evt.resource_type)


@subscribe(IngressRuleAdded)
def _on_ingress(evt: IngressRuleAdded):  # noqa: D401 – event hook
    log.debug("%s: allow ingress from %s on %s", evt.group, evt.peer, evt.port)


@subscribe(StackSynthesized)
def _on_synth(evt: StackSynthesized):  # noqa: D401 – event hook
    log.info("Synthesized [bold]%s[/] (%d resources)", evt.stack, evt.resource_count)


# --------------------------------------------------------------------------- #
# Public helpers
# --------------------------------------------------------------------------- #

def show_tree(root: Any) -> None:  # noqa: D401
    """Render the construct tree below *root* (App, Stack or any construct)."""
    from stackette.utils.dag import build_rich_tree

    console.print(build_rich_tree(root))
