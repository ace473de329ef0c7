"""Arcade tool provisioning and gated execution."""

from .gating import GatedToolExecutor, build_langchain_tool
from .models import ToolDescriptor
from .provisioner import ToolProvisioner

__all__ = [
    "GatedToolExecutor",
    "ToolDescriptor",
    "ToolProvisioner",
    "build_langchain_tool",
]
