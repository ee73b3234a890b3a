import argparse
import logging
import sys

from pokekg import config
from pokekg.errors import FetchError, PublishError, UpstreamError
from pokekg.pipeline import build_knowledge_graph
from pokekg.publisher import publish
from pokekg.translations import load_translation_index
from pokekg.validator import validate, validate_file

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def run_validation(args):
    try:
        if args.validate_local:
            result = validate_file(args.validate_local, shapes_path=args.shapes)
        else:
            result = validate(endpoint=args.endpoint, shapes_path=args.shapes)
    except FetchError as exc:
        logger.error("[!] Validation could not run: %s", exc)
        return 2
    print(result.render())
    return 0 if result.conforms else 1


def run_build(args):
    try:
        translations = load_translation_index(args.translations)
    except OSError as exc:
        logger.warning("[!] Translations unavailable (%s); labels will be skipped.", exc)
        translations = None

    try:
        assembler, report = build_knowledge_graph(
            translations,
            limit=args.limit,
            page_size=args.page_size,
            max_pages=args.max_pages,
            deadline=args.deadline,
            link_same_as=args.same_as,
        )
    except UpstreamError as exc:
        logger.error("[!] Unable to list entities: %s", exc)
        return 2
    print(report.render())

    if args.no_publish:
        return 0
    try:
        result = publish(assembler.graph, args.output, args.endpoint)
    except PublishError as exc:
        print(f"Error while sending: {exc}")
        return 1
    print(result.summary())
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build the Pokémon knowledge graph from Bulbapedia.")
    parser.add_argument(
        "--translations",
        default=str(config.TRANSLATIONS_FILE),
        help="Tab-separated i18n table (recordType, id, name, language).",
    )
    parser.add_argument(
        "--output",
        default=str(config.OUTPUT_TURTLE_FILE),
        help="Local Turtle file written at publish time.",
    )
    parser.add_argument(
        "--endpoint",
        default=config.FUSEKI_DATA_ENDPOINT,
        help="Triple store data endpoint used for upload and validation reads.",
    )
    parser.add_argument("--shapes", default=str(config.SHAPES_FILE), help="SHACL shape document.")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Process at most this many listed entities (debugging helper).",
    )
    parser.add_argument("--page-size", type=int, default=config.LISTING_PAGE_SIZE, help="Listing page size (cmlimit).")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=config.LISTING_MAX_PAGES,
        help="Listing pages to follow; 0 follows every continuation.",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=config.RUN_DEADLINE_SECONDS,
        help="Stop starting new entities after this many seconds.",
    )
    parser.add_argument(
        "--same-as",
        action="store_true",
        help="Also assert owl:sameAs links to same-named DBpedia resources.",
    )
    parser.add_argument("--no-publish", action="store_true", help="Build and report without writing or uploading.")
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Validate the store contents against the shapes and exit.",
    )
    parser.add_argument(
        "--validate-local",
        default=None,
        help="Validate a local Turtle file against the shapes and exit.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.validate_only or args.validate_local:
        return run_validation(args)
    return run_build(args)


if __name__ == "__main__":
    sys.exit(main())
