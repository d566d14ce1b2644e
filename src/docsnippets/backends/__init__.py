"""Build tool interface exports."""
from .base import BuildTool, BuildToolManager, CommandResult, build_tool_manager, run_command
from .cargo import CargoBuildTool
from .plugins import load_plugins


def register_default_tools() -> None:
    if "cargo" not in build_tool_manager.names():
        build_tool_manager.register("cargo", CargoBuildTool)


register_default_tools()

__all__ = [
    "BuildTool",
    "BuildToolManager",
    "CargoBuildTool",
    "CommandResult",
    "build_tool_manager",
    "load_plugins",
    "register_default_tools",
    "run_command",
]
