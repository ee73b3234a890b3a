import logging
from pathlib import Path

from . import config
from .errors import DataFormatError

logger = logging.getLogger(__name__)


def _identifier_sort_key(identifier):
    """Order numeric ids numerically ("2" < "010"), everything else after, lexically."""
    stripped = identifier.strip()
    if stripped.isdigit():
        return (0, int(stripped), identifier)
    return (1, 0, identifier)


def parse_translation_row(line, line_number=None):
    """Split one TSV line into (record_type, identifier, name, language).

    Accepts raw bytes from the file; raises DataFormatError when the line is
    not valid UTF-8 or the column count is wrong.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DataFormatError(
                f"Line is not valid UTF-8: {exc.reason} at byte {exc.start}",
                details={"line_number": line_number, "line": line},
            ) from exc
    columns = line.rstrip("\r\n").split("\t")
    if len(columns) != config.TRANSLATION_COLUMNS:
        raise DataFormatError(
            f"Expected {config.TRANSLATION_COLUMNS} columns, got {len(columns)}",
            details={"line_number": line_number, "line": line},
        )
    return tuple(columns)


class TranslationIndex:
    """Read-only map from pokedex identifier to its (name, language) pairs."""

    def __init__(self, entries=None):
        self._entries = {key: tuple(pairs) for key, pairs in (entries or {}).items()}
        self._english_ids = {}
        for identifier in sorted(self._entries, key=_identifier_sort_key):
            for name, language in self._entries[identifier]:
                if language.strip().lower() != config.ENGLISH_LANGUAGE:
                    continue
                # Lowest identifier wins when an English name is shared.
                self._english_ids.setdefault(name.strip().lower(), identifier)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, identifier):
        return identifier in self._entries

    def identifiers(self):
        return sorted(self._entries, key=_identifier_sort_key)

    def names_for(self, identifier):
        """Return the (name, language) pairs recorded for an identifier, or ()."""
        return self._entries.get(identifier, ())

    def find_id_by_english_name(self, name):
        """Case-insensitive reverse lookup on English names; None when absent."""
        if not isinstance(name, str):
            return None
        return self._english_ids.get(name.strip().lower())


def load_translation_index(path=config.TRANSLATIONS_FILE):
    """Build a TranslationIndex from the tab-separated i18n table.

    Malformed rows are skipped and rows whose record type is not
    TRANSLATION_RECORD_TYPE are ignored.
    """
    file_path = Path(path)
    entries = {}
    skipped = 0
    ignored = 0
    with open(file_path, "rb") as fh:
        for line_number, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                record_type, identifier, name, language = parse_translation_row(line, line_number)
            except DataFormatError as exc:
                skipped += 1
                logger.debug("[!] Skipping %s line %s: %s", file_path, line_number, exc)
                continue
            if record_type != config.TRANSLATION_RECORD_TYPE:
                ignored += 1
                continue
            entries.setdefault(identifier, []).append((name, language))

    logger.info(
        "[*] Loaded translations for %s identifiers from %s (%s malformed rows skipped, %s other rows ignored).",
        len(entries),
        file_path,
        skipped,
        ignored,
    )
    return TranslationIndex(entries)
