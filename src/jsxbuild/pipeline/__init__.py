from .build import BuildPipeline, restore
from .models import BuildResult, Fragments, HostDocument, ScriptBlock

__all__ = ["BuildPipeline", "restore", "BuildResult", "Fragments", "HostDocument", "ScriptBlock"]
