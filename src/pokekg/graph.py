import logging
from urllib.parse import quote

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD

from . import config

logger = logging.getLogger(__name__)

EX = Namespace(config.ENTITY_NAMESPACE)
PROP = Namespace(config.PROPERTY_NAMESPACE)

HAS_NAME = PROP.hasName
HAS_TYPE = PROP.hasType
HAS_HEIGHT = PROP.hasHeight
HAS_WEIGHT = PROP.hasWeight


def create_graph():
    """Return an empty graph with the fixed prefix bindings."""
    graph = Graph(bind_namespaces="core")
    graph.bind("rdf", RDF)
    graph.bind("rdfs", RDFS)
    graph.bind("xsd", XSD)
    graph.bind("owl", OWL)
    graph.bind("ex", EX)
    graph.bind("prop", PROP)
    return graph


def entity_uri(source_name):
    """Deterministic subject IRI: the same source name always maps to the same node."""
    return EX[quote(source_name.replace(" ", "_"), safe="()_'")]


def same_as_uri(canonical_name):
    return URIRef(config.SAME_AS_BASE + quote(canonical_name.replace(" ", "_"), safe=""))


def normalize_language_tag(language):
    """Map a translation-table language label to a lowercase BCP 47 tag.

    Returns "" for blank labels and the lowercased label itself when no
    remap entry exists, so excluded markers survive for the caller to drop.
    """
    if not isinstance(language, str):
        return ""
    label = language.strip().lower()
    if not label:
        return ""
    return config.LANGUAGE_TAG_REMAP.get(label, label)


def is_valid_language_tag(tag):
    return bool(config.LANGUAGE_TAG_PATTERN.match(tag)) and tag in config.KNOWN_LANGUAGE_TAGS


class GraphAssembler:
    """Single owner of the run's RDF graph; every mutation goes through add_entity."""

    def __init__(self, graph=None, *, link_same_as=False):
        self.graph = graph if graph is not None else create_graph()
        self.link_same_as = link_same_as

    def __len__(self):
        return len(self.graph)

    def label_literals(self, source_name, translations):
        """Yield the language-tagged labels recorded for source_name.

        Entries are dropped when the tag is blank, excluded (romanized
        Japanese) or not a known locale.
        """
        if translations is None:
            return
        identifier = translations.find_id_by_english_name(source_name)
        if identifier is None:
            return
        for name, language in translations.names_for(identifier):
            tag = normalize_language_tag(language)
            if not tag or tag in config.EXCLUDED_LANGUAGE_TAGS:
                continue
            if not is_valid_language_tag(tag):
                logger.debug("[!] Dropping label %r for %s: unknown language %r", name, source_name, language)
                continue
            yield Literal(name, lang=tag)

    def add_entity(self, entity, translations=None):
        """Assert the attribute and label triples for one entity.

        Returns the number of triples that were new to the graph; re-adding an
        identical entity returns 0.
        """
        before = len(self.graph)
        subject = entity_uri(entity.source_name)

        self.graph.add((subject, HAS_NAME, Literal(entity.canonical_name)))
        self.graph.add((subject, HAS_TYPE, Literal(entity.category)))
        self.graph.add((subject, HAS_HEIGHT, Literal(entity.height)))
        self.graph.add((subject, HAS_WEIGHT, Literal(entity.weight)))

        for label in self.label_literals(entity.source_name, translations):
            self.graph.add((subject, RDFS.label, label))

        if self.link_same_as and entity.canonical_name != config.NAME_NOT_FOUND:
            self.graph.add((subject, OWL.sameAs, same_as_uri(entity.canonical_name)))

        added = len(self.graph) - before
        logger.debug("[+] %s: %s new triples", entity.source_name, added)
        return added
