from .runner import run_tool
from .catalog import CATALOG, get_tool, list_tools
from .validation import validate_arguments

__all__ = ["CATALOG", "get_tool", "list_tools", "run_tool", "validate_arguments"]
