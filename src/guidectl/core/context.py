from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from .clock import utc_now
from .env import getenv
from .repo_root import find_corpus_root

if TYPE_CHECKING:
    from ..config import GuidectlConfig

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    corpus_root: Path
    config: GuidectlConfig
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @property
    def as_json(self) -> bool:
        return self.output_format == "json"

    @classmethod
    def from_args(
        cls,
        root: str | None = None,
        config_path: str | None = None,
        run_id: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        from ..config import load_config

        corpus_root = find_corpus_root(Path(root) if root else None)
        default_run = f"guidectl-{utc_now().strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or getenv("RUN_ID", default_run) or default_run,
            corpus_root=corpus_root,
            config=load_config(corpus_root, config_path),
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
