"""Quarantine planning, cleanup scripts and file operations."""

from .file_service import FileService
from .plan_service import PlanService, EmitResult
from .script_builder import ShellScriptBuilder, BatchScriptBuilder, script_builder_for

__all__ = ["FileService", "PlanService", "EmitResult", "ShellScriptBuilder", "BatchScriptBuilder", "script_builder_for"]
