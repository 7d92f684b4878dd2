from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "folio.yml"


class Config(BaseModel):
    project_name: str = Field(default="Folio Project")
    content_dir: Path = Field(default=Path("content"))
    output_dir: Path = Field(
        default=Path("public"),
        description="Directory receiving the derived index and collection report.",
    )
    default_author: str | None = Field(
        default=None,
        description="Author written into newly scaffolded documents.",
    )
    document_suffixes: list[str] = Field(
        default_factory=lambda: [".md", ".markdown"],
        description="File suffixes treated as content documents.",
    )
    dangling_assets_fatal: bool = Field(
        default=False,
        description="Report missing cover images as errors instead of warnings.",
    )
    require_code_language: bool = Field(
        default=False,
        description="Warn about fenced code blocks without a language tag.",
    )

    @field_validator("content_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("document_suffixes")
    def _normalize_suffixes(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for suffix in value:
            text = suffix.strip().lower()
            if not text:
                continue
            if not text.startswith("."):
                text = f".{text}"
            normalized.append(text)
        if not normalized:
            raise ValueError("document_suffixes must list at least one suffix")
        return normalized


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/blog/folio.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # Allow pointing at a project directory without a config file; use defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs_required(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs_required(cfg.content_dir)
    cfg.output_dir = _abs_required(cfg.output_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping.")
    return data
