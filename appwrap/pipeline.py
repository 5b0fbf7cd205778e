from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from appwrap.appdir.assembler import Optimizer, assemble_appdir
from appwrap.appdir.layout import AppDirLayout
from appwrap.context import BuildContext
from appwrap.package.packager import package_appdir
from appwrap.tools.provision import ensure_tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    tool: Path
    layout: AppDirLayout
    artifact: Path


def run_pipeline(
    context: BuildContext,
    *,
    optimizer: Optional[Optimizer] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> PipelineResult:
    """Provision the tool, assemble the AppDir, then package it.

    Stages run strictly in order; the first failure propagates and stops
    the run.
    """

    tool = ensure_tool(context, transport=transport)
    layout = assemble_appdir(context, optimizer=optimizer)
    artifact = package_appdir(context, layout, tool)

    logger.info("Built %s", artifact)
    return PipelineResult(tool=tool, layout=layout, artifact=artifact)
