import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from . import config
from .errors import PublishError
from .utils import is_success

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    local_path: Path
    triples: int
    remote_status: Optional[int] = None

    def summary(self):
        return f"Sent {self.triples} triples to the store (HTTP {self.remote_status}); wrote {self.local_path}."


def serialize_graph(graph):
    """Turtle text for the graph. Statement order within a subject is not stable across runs."""
    return graph.serialize(format="turtle")


def write_turtle(data, path):
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as fh:
        fh.write(data)
    return file_path


def push_to_store(data, endpoint=config.FUSEKI_DATA_ENDPOINT, timeout=config.API_TIMEOUT):
    """POST a Turtle document to the store's data endpoint; returns the HTTP status."""
    try:
        response = requests.post(
            endpoint,
            data=data.encode("utf-8"),
            headers={"Content-Type": f"{config.TURTLE_CONTENT_TYPE}; charset=utf-8"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise PublishError(f"Could not reach {endpoint}: {exc}") from exc
    if not is_success(response.status_code):
        raise PublishError(
            f"Store rejected the upload: {response.status_code} - {response.reason}",
            status=response.status_code,
            reason=response.reason,
        )
    return response.status_code


def publish(graph, local_path=config.OUTPUT_TURTLE_FILE, endpoint=config.FUSEKI_DATA_ENDPOINT):
    """Write the graph to local_path, then push the same document to the store.

    A rejected push raises PublishError but does not undo the local write.
    """
    data = serialize_graph(graph)
    file_path = write_turtle(data, local_path)
    logger.info("[+] Wrote %s triples to %s", len(graph), file_path)

    try:
        status = push_to_store(data, endpoint)
    except PublishError as exc:
        exc.details.setdefault("local_path", str(file_path))
        raise
    logger.info("[+] Sent RDF triples to %s (HTTP %s).", endpoint, status)
    return PublishResult(local_path=file_path, triples=len(graph), remote_status=status)
