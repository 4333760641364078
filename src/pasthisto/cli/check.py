"""``pasthisto check``: decode documents and report which ones are valid."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from pasthisto.config.loader import Config
from pasthisto.domain.compare import walk
from pasthisto.io.errors import DecodeError
from pasthisto.io.loader import load

__all__ = ["CheckSummary", "iter_documents", "check_documents"]


@dataclass(slots=True)
class CheckSummary:
    ok: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def iter_documents(paths: Iterable[str | Path], pattern: str) -> Iterator[Path]:
    """Expand directories with ``pattern`` (sorted); files pass through."""
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            yield from sorted(q for q in p.glob(pattern) if q.is_file())
        else:
            yield p


def check_documents(paths: Iterable[str | Path], cfg: Config, verbose: bool = False) -> CheckSummary:
    summary = CheckSummary()
    options = cfg.decode_options()
    for path in iter_documents(paths, cfg.check.pattern):
        try:
            tree = load(path, options)
        except (DecodeError, OSError) as e:
            logging.error(f"[check] FAIL {path}: {e}")
            summary.failed.append((str(path), str(e)))
            if cfg.check.fail_fast:
                logging.info("[check] stopping at first failure (check.fail_fast)")
                break
            continue
        logging.info(f"[check] OK {path}: {tree.kind.tag} entries={tree.entries!r}")
        if verbose:
            for node_path, node in walk(tree):
                logging.info(f"[check]   {node_path or '<root>'} : {node.kind.tag} entries={node.entries!r}")
        summary.ok.append(str(path))
    logging.info(f"[check] {len(summary.ok)} ok, {len(summary.failed)} failed")
    return summary
