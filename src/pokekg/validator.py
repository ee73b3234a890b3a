"""SHACL validation of the published graph.

The store is the ground truth here: the graph is pulled back from the data
endpoint instead of reusing the in-memory one built during the run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pyshacl import validate as shacl_validate
from rdflib import Graph
from rdflib.namespace import RDF, SH

from . import config
from .errors import FetchError, UpstreamError
from .utils import http_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    focus_node: str
    path: Optional[str]
    value: Optional[str]
    message: str


@dataclass
class ValidationResult:
    conforms: bool
    violations: List[Violation] = field(default_factory=list)

    def render(self):
        if self.conforms:
            return "Validation passed: every RDF triple conforms to the SHACL shapes."
        lines = [f"Validation failed ({len(self.violations)} violation(s)):", ""]
        for violation in self.violations:
            lines.append(f"Focus Node: {violation.focus_node}")
            lines.append(f"Path: {violation.path}")
            lines.append(f"Value: {violation.value}")
            lines.append(f"Message: {violation.message}")
            lines.append("")
        return "\n".join(lines)


def _text(node):
    return None if node is None else str(node)


def parse_validation_report(conforms, report_graph):
    """Turn a SHACL report graph into a ValidationResult with a stable violation order."""
    violations = []
    for result in report_graph.subjects(RDF.type, SH.ValidationResult):
        violations.append(
            Violation(
                focus_node=_text(report_graph.value(result, SH.focusNode)),
                path=_text(report_graph.value(result, SH.resultPath)),
                value=_text(report_graph.value(result, SH.value)),
                message=_text(report_graph.value(result, SH.resultMessage)) or "",
            )
        )
    violations.sort(key=lambda v: (v.focus_node or "", v.path or "", v.message, v.value or ""))
    return ValidationResult(conforms=bool(conforms), violations=violations)


def validate_graph(data_graph, shapes_graph):
    """Run pySHACL; non-conforming data is a normal result, not an error."""
    conforms, report_graph, _ = shacl_validate(
        data_graph,
        shacl_graph=shapes_graph,
        inference="none",
        abort_on_first=False,
        allow_warnings=False,
    )
    result = parse_validation_report(conforms, report_graph)
    if result.conforms:
        logger.info("[+] Graph conforms to the shapes (%s triples).", len(data_graph))
    else:
        logger.warning("[!] Graph does not conform: %s violation(s).", len(result.violations))
    return result


def load_shapes(path=config.SHAPES_FILE):
    file_path = Path(path)
    shapes = Graph()
    try:
        shapes.parse(file_path, format="turtle")
    except OSError as exc:
        raise FetchError(f"Cannot read shape document {file_path}: {exc}") from exc
    except Exception as exc:
        raise FetchError(f"Shape document {file_path} is not valid Turtle: {exc}") from exc
    return shapes


def fetch_store_graph(endpoint=config.FUSEKI_DATA_ENDPOINT):
    """Download the store's default graph as Turtle."""
    try:
        response = http_get(endpoint, headers={"Accept": config.TURTLE_CONTENT_TYPE})
    except UpstreamError as exc:
        raise FetchError(f"Cannot fetch graph from {endpoint}: {exc}", details={"status": exc.status}) from exc
    graph = Graph()
    try:
        graph.parse(data=response.content, format="turtle")
    except Exception as exc:
        raise FetchError(f"Store response from {endpoint} is not valid Turtle: {exc}") from exc
    logger.info("[*] Fetched %s triples from %s", len(graph), endpoint)
    return graph


def validate(endpoint=config.FUSEKI_DATA_ENDPOINT, shapes_path=config.SHAPES_FILE):
    """Validate the store contents against the shape document.

    Raises FetchError when either source cannot be loaded.
    """
    data_graph = fetch_store_graph(endpoint)
    shapes_graph = load_shapes(shapes_path)
    return validate_graph(data_graph, shapes_graph)


def validate_file(path, shapes_path=config.SHAPES_FILE):
    """Validate a local Turtle file, e.g. the one written by publish()."""
    file_path = Path(path)
    data_graph = Graph()
    try:
        data_graph.parse(file_path, format="turtle")
    except OSError as exc:
        raise FetchError(f"Cannot read {file_path}: {exc}") from exc
    except Exception as exc:
        raise FetchError(f"{file_path} is not valid Turtle: {exc}") from exc
    return validate_graph(data_graph, load_shapes(shapes_path))
