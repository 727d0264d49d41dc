from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from docsgen.config import DocsConfig
from docsgen.domain.models import Endpoint
from docsgen.errors import NoFilesError
from docsgen.extractors.annotations import parse_files
from docsgen.registry import EndpointRegistry
from docsgen.repo.scanner import scan_source_files
from docsgen.store.serializer import write_docs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerateResult:
    files_scanned: int
    endpoints: list[Endpoint]
    output_path: Path


def parse_repo(root: Path, config: DocsConfig) -> tuple[list[str], list[Endpoint]]:
    """Scan root with config.pattern and parse every match."""
    files = scan_source_files(root.resolve(), pattern=config.pattern)
    if not files:
        raise NoFilesError(config.pattern)
    logger.debug("parsing %d file(s) under %s", len(files), root)
    return files, parse_files(files)


def build_registry(
    root: Path,
    config: DocsConfig,
    registry: EndpointRegistry | None = None,
) -> EndpointRegistry:
    """Populate (or create) a registry from the annotated handlers under root.

    Call once before serving; hand the same registry to the capture middleware.
    """
    _, endpoints = parse_repo(root, config)
    if registry is None:
        registry = EndpointRegistry()
    registry.load(endpoints)
    return registry


def run_generate(
    root: Path,
    config: DocsConfig,
    out_dir: Path | None = None,
    registry: EndpointRegistry | None = None,
) -> GenerateResult:
    """
    Parse root and write the docs file. When a registry is passed, static
    records are merged into it first so captured responses are kept in the
    output.
    """
    files, endpoints = parse_repo(root, config)
    if registry is None:
        registry = EndpointRegistry()
    registry.load(endpoints)

    out_path = write_docs(registry.snapshot(), config, directory=out_dir)
    return GenerateResult(files_scanned=len(files), endpoints=endpoints, output_path=out_path)


def flush(registry: EndpointRegistry, config: DocsConfig, out_dir: Path | None = None) -> Path:
    """Write the registry as it stands, e.g. at shutdown after serving traffic."""
    return write_docs(registry.snapshot(), config, directory=out_dir)
