from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from appwrap.config import DEFAULT_COMPRESSION, CompressionStrategy
from appwrap.errors import OptimizeError
from appwrap.optimize.attempts import Attempt, AttemptsExhausted, run_attempts
from appwrap.utils.subprocess import SubprocessError, run_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizeStats:
    size_before: int = 0
    size_after: int = 0
    strategy: str = ""

    @property
    def bytes_reclaimed(self) -> int:
        return self.size_before - self.size_after


def optimize_binary(
    binary: Path,
    *,
    strip: str = "strip",
    upx: str = "upx",
    strategies: Iterable[CompressionStrategy] = DEFAULT_COMPRESSION,
) -> OptimizeStats:

    if not binary.is_file():
        raise OptimizeError(f"Binary to optimize not found: {binary}")

    size_before = binary.stat().st_size

    strip_binary(binary, strip=strip)

    try:
        strategy, _ = run_attempts(
            Attempt(name=s.name, action=_compressor(upx, s.args, binary))
            for s in strategies
        )
    except AttemptsExhausted as exc:
        raise OptimizeError(
            f"Failed to compress {binary}:\n{exc}"
        ) from exc

    stats = OptimizeStats(
        size_before=size_before,
        size_after=binary.stat().st_size,
        strategy=strategy,
    )
    logger.info(
        "Optimized %s with '%s': %d -> %d bytes",
        binary.name,
        stats.strategy,
        stats.size_before,
        stats.size_after,
    )
    return stats


def strip_binary(binary: Path, *, strip: str = "strip") -> None:
    try:
        run_command([strip, "--strip-all", str(binary)])
    except SubprocessError as exc:
        raise OptimizeError(f"Failed to strip {binary}:\n{exc}") from exc


def _compressor(upx: str, args: list[str], binary: Path):
    def compress() -> None:
        run_command([upx, *args, str(binary)])

    return compress
