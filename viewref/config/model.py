from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectConfig(BaseModel):
    """
    Project layout conventions (viewref.yaml).

    All directories are POSIX paths relative to the project root,
    except components_dir which is relative to views_dir.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    views_dir: str = "resources/views"
    components_dir: str = "components"
    template_ext: str = ".edge"

    controllers_dir: str = "app/Controllers/Http"
    controller_extensions: List[str] = Field(default_factory=lambda: [".ts", ".js"])

    # Directory traversal
    respect_gitignore: bool = True
    exclude: List[str] = Field(default_factory=lambda: ["node_modules", ".git"])

    max_workers: int = Field(default=8, ge=1)
    hover_preview_lines: int = Field(default=10, ge=0)

    @field_validator("views_dir", "components_dir", "controllers_dir")
    @classmethod
    def _posix_dir(cls, v: str) -> str:
        v = v.replace("\\", "/").strip().strip("/")
        if ".." in v.split("/"):
            raise ValueError("must not contain '..'")
        return v

    @field_validator("template_ext")
    @classmethod
    def _dotted_ext(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v if v.startswith(".") else "." + v

    @field_validator("controller_extensions")
    @classmethod
    def _dotted_exts(cls, v: List[str]) -> List[str]:
        out = [e if e.startswith(".") else "." + e for e in (s.strip() for s in v) if e]
        if not out:
            raise ValueError("at least one extension is required")
        return out

    @property
    def components_root(self) -> str:
        """components_dir relative to the project root."""
        if not self.views_dir:
            return self.components_dir
        if not self.components_dir:
            return self.views_dir
        return f"{self.views_dir}/{self.components_dir}"


DEFAULT_CONFIG = ProjectConfig()

__all__ = ["ProjectConfig", "DEFAULT_CONFIG"]
