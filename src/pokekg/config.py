import re
from pathlib import Path

# HTTP identity and timeouts
HEADERS = {"User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"}
API_TIMEOUT = 30  # Seconds per HTTP request
HTTP_MAX_RETRIES = 2  # Extra attempts on 429/5xx/transport errors
HTTP_BACKOFF_SECONDS = 1.0
RUN_DEADLINE_SECONDS = None  # Overall entity-loop deadline; None means unbounded

# Bulbapedia endpoints
LISTING_API_URL = "https://bulbapedia.bulbagarden.net/w/api.php"
PAGE_URL_TEMPLATE = "https://bulbapedia.bulbagarden.net/wiki/{title}"
PAGE_TITLE_SUFFIX = "_(Pokémon)"
LISTING_CATEGORY = "Category:Pokémon"
LISTING_PAGE_SIZE = 50
LISTING_MAX_PAGES = 1

# Page title normalization
TITLE_SUFFIX = " (Pokémon)"
EXCLUDED_TITLES = {"Pokémon (species)"}

# Listing payload contract
LISTING_SCHEMA = {
    "type": "object",
    "required": ["query"],
    "properties": {
        "query": {
            "type": "object",
            "required": ["categorymembers"],
            "properties": {
                "categorymembers": {"type": "array", "items": {"type": "object"}},
            },
        },
        "continue": {"type": "object"},
    },
}

# Infobox markers
INFOBOX_CLASS_MARKER = "roundy"
TYPE_LINK_MARKER = "(type)"
DIMENSIONS = ("Height", "Weight")
HTML_PARSER = "html.parser"

# Placeholders asserted when a field is missing from the infobox
NAME_NOT_FOUND = "Name not found"
TYPE_NOT_FOUND = "Type not found"
DIMENSION_NOT_FOUND = "{dimension} not found"

# Triple store
FUSEKI_DATA_ENDPOINT = "http://localhost:3030/Pokemon/data"
TURTLE_CONTENT_TYPE = "text/turtle"

# RDF namespaces (rdf, rdfs, xsd and owl come from rdflib)
ENTITY_NAMESPACE = "http://example.org/pokemon/"
PROPERTY_NAMESPACE = "http://example.org/property/"
SAME_AS_BASE = "http://dbpedia.org/resource/"

# Translation table
TRANSLATION_RECORD_TYPE = "pokemon"
TRANSLATION_COLUMNS = 4
ENGLISH_LANGUAGE = "english"
EXCLUDED_LANGUAGE_TAGS = {"official roomaji"}
LANGUAGE_TAG_REMAP = {
    "english": "en",
    "french": "fr",
    "german": "de",
    "italian": "it",
    "spanish": "es",
    "japanese": "ja",
    "korean": "ko",
    "chinese": "zh",
    "chinese (simplified)": "zh-hans",
    "chinese (traditional)": "zh-hant",
    "simplified chinese": "zh-hans",
    "traditional chinese": "zh-hant",
    "chinese (mandarin)": "zh-hans",
    "chinese (cantonese)": "zh-hant",
    "mandarin": "zh-hans",
    "cantonese": "yue",
    "russian": "ru",
    "thai": "th",
    "hindi": "hi",
    "portuguese": "pt",
    "dutch": "nl",
    "polish": "pl",
    "czech": "cs",
    "hebrew": "he",
    "greek": "el",
    "turkish": "tr",
    "vietnamese": "vi",
    "indonesian": "id",
}
KNOWN_LANGUAGE_TAGS = {
    "cs", "de", "el", "en", "es", "fr", "he", "hi", "id", "it", "ja", "ko",
    "nl", "pl", "pt", "ru", "th", "tr", "vi", "yue", "zh", "zh-hans", "zh-hant",
}
LANGUAGE_TAG_PATTERN = re.compile(r"^[a-z]{2,3}(-[a-z0-9]{2,8})*$")

# Local data files
DATA_DIR = Path("data")
TRANSLATIONS_FILE = DATA_DIR / "pokedex-i18n.tsv"
OUTPUT_TURTLE_FILE = DATA_DIR / "pokemon.ttl"
SHAPES_FILE = DATA_DIR / "shapes.ttl"
