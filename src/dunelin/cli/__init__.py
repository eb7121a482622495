"""dunelin CLI: scaffold and update agentic workspaces."""

from ._helpers import main  # noqa: F401  entry point

# Import command modules to register Click commands with the main group.
from . import _init, _update, _serve  # noqa: F401
