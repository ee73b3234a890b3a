import logging
import time
from dataclasses import dataclass, field
from typing import List, Tuple

from tqdm import tqdm

from . import config
from .errors import ParseError, UpstreamError
from .extractor import extract
from .graph import GraphAssembler
from .listing import list_entities

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Per-entity outcome of one build run."""

    attempted: int = 0
    succeeded: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    not_attempted: List[str] = field(default_factory=list)
    triples: int = 0

    def render(self):
        lines = [f"Data for {name} added to the graph." for name in self.succeeded]
        lines.extend(f"Error for {name}: {error}" for name, error in self.failed)
        if self.not_attempted:
            lines.append(f"Deadline reached; {len(self.not_attempted)} entities not attempted.")
        lines.append(
            f"{len(self.succeeded)}/{self.attempted} entities added, {self.triples} triples in graph."
        )
        return "\n".join(lines)


def process_entities(names, assembler, translations=None, *, deadline=config.RUN_DEADLINE_SECONDS, extract_fn=None):
    """Extract and assemble each entity in turn.

    Failures stay scoped to the entity that raised them; the loop always moves
    on to the next name. When a deadline (seconds) is set, names left after it
    expires are recorded as not attempted.
    """
    extract_fn = extract_fn or extract
    report = BuildReport()
    started = time.monotonic()
    names = list(names)
    for idx, name in enumerate(tqdm(names, desc="Extracting entities", unit="entity", disable=not names)):
        if deadline is not None and time.monotonic() - started > deadline:
            report.not_attempted = names[idx:]
            logger.warning("[!] Run deadline of %ss reached; stopping before %s.", deadline, name)
            break
        report.attempted += 1
        try:
            entity = extract_fn(name)
        except (UpstreamError, ParseError) as exc:
            logger.warning("[!] Error while processing %s: %s", name, exc)
            report.failed.append((name, str(exc)))
            continue
        assembler.add_entity(entity, translations)
        report.succeeded.append(name)
    report.triples = len(assembler.graph)
    return report


def build_knowledge_graph(
    translations=None,
    *,
    assembler=None,
    limit=None,
    page_size=config.LISTING_PAGE_SIZE,
    max_pages=config.LISTING_MAX_PAGES,
    deadline=config.RUN_DEADLINE_SECONDS,
    link_same_as=False,
):
    """List every entity, then extract and assemble them into one graph.

    Returns (assembler, report). A listing failure propagates as UpstreamError.
    """
    assembler = assembler if assembler is not None else GraphAssembler(link_same_as=link_same_as)
    names = list_entities(page_size=page_size, max_pages=max_pages)
    if limit is not None:
        names = names[:limit]
    logger.info("[*] Processing %s entities.", len(names))
    report = process_entities(names, assembler, translations, deadline=deadline)
    logger.info(
        "[+] Build complete: %s added, %s failed, %s triples.",
        len(report.succeeded),
        len(report.failed),
        report.triples,
    )
    return assembler, report
