import tempfile
import unittest
from pathlib import Path

from pokekg.errors import DataFormatError
from pokekg.translations import TranslationIndex, load_translation_index, parse_translation_row


class TranslationIndexTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write_table(self, rows) -> Path:
        path = Path(self._tmp.name) / "pokedex-i18n.tsv"
        path.write_text("\n".join(rows) + "\n", encoding="utf-8")
        return path

    def test_pokemon_rows_are_indexed(self) -> None:
        path = self._write_table(
            [
                "pokemon\t001\tBulbasaur\tEnglish",
                "pokemon\t001\tBulbizarre\tFrench",
                "pokemon\t004\tCharmander\tEnglish",
            ]
        )
        index = load_translation_index(path)
        self.assertEqual(len(index), 2)
        self.assertIn(("Bulbizarre", "French"), index.names_for("001"))
        self.assertIn(("Bulbasaur", "English"), index.names_for("001"))
        self.assertEqual(index.names_for("004"), (("Charmander", "English"),))

    def test_other_record_types_are_ignored(self) -> None:
        path = self._write_table(
            [
                "move\t001\tPound\tEnglish",
                "ability\t065\tOvergrow\tEnglish",
                "pokemon\t001\tBulbasaur\tEnglish",
            ]
        )
        index = load_translation_index(path)
        self.assertEqual(index.identifiers(), ["001"])
        self.assertNotIn(("Pound", "English"), index.names_for("001"))
        self.assertNotIn("065", index)

    def test_malformed_rows_are_skipped(self) -> None:
        path = self._write_table(
            [
                "pokemon\t001\tBulbasaur",
                "pokemon\t002\tIvysaur\tEnglish\textra",
                "pokemon\t003\tVenusaur\tEnglish",
            ]
        )
        index = load_translation_index(path)
        self.assertEqual(index.identifiers(), ["003"])

    def test_undecodable_rows_are_skipped(self) -> None:
        path = Path(self._tmp.name) / "pokedex-i18n.tsv"
        path.write_bytes(
            b"pokemon\t001\tBulbasaur\tEnglish\n"
            b"pokemon\t002\t\xff\xfeIvy\tFrench\n"
            b"pokemon\t001\tBulbizarre\tFrench\n"
        )
        index = load_translation_index(path)
        self.assertEqual(index.identifiers(), ["001"])
        self.assertEqual(index.names_for("001"), (("Bulbasaur", "English"), ("Bulbizarre", "French")))

    def test_parse_row_rejects_invalid_utf8(self) -> None:
        with self.assertRaises(DataFormatError) as ctx:
            parse_translation_row(b"pokemon\t002\t\xffIvy\tFrench\n", line_number=2)
        self.assertEqual(ctx.exception.details["line_number"], 2)

    def test_parse_row_decodes_bytes(self) -> None:
        self.assertEqual(
            parse_translation_row("pokemon\t001\tBulbizarre\tFrench\r\n".encode("utf-8")),
            ("pokemon", "001", "Bulbizarre", "French"),
        )

    def test_parse_row_rejects_wrong_column_count(self) -> None:
        with self.assertRaises(DataFormatError) as ctx:
            parse_translation_row("pokemon\t001\tBulbasaur\n", line_number=7)
        self.assertEqual(ctx.exception.details["line_number"], 7)
        self.assertTrue(str(ctx.exception).startswith("DATA_FORMAT:"))

    def test_parse_row_keeps_empty_language(self) -> None:
        self.assertEqual(parse_translation_row("pokemon\t001\tBulbasaur\t\n"), ("pokemon", "001", "Bulbasaur", ""))

    def test_english_lookup_is_case_insensitive(self) -> None:
        index = TranslationIndex({"025": [("Pikachu", "ENGLISH"), ("Pikachu", "French")]})
        self.assertEqual(index.find_id_by_english_name("pikachu"), "025")
        self.assertEqual(index.find_id_by_english_name("PIKACHU"), "025")

    def test_english_lookup_ignores_other_languages(self) -> None:
        index = TranslationIndex({"001": [("Bulbizarre", "French")]})
        self.assertIsNone(index.find_id_by_english_name("Bulbizarre"))

    def test_english_lookup_not_found(self) -> None:
        index = TranslationIndex({"001": [("Bulbasaur", "English")]})
        self.assertIsNone(index.find_id_by_english_name("Missingno"))
        self.assertIsNone(index.find_id_by_english_name(None))

    def test_duplicate_english_names_resolve_to_lowest_identifier(self) -> None:
        index = TranslationIndex(
            {
                "150": [("Mewtwo", "English")],
                "010": [("Mewtwo", "english")],
                "99": [("Mewtwo", "English")],
            }
        )
        self.assertEqual(index.find_id_by_english_name("Mewtwo"), "010")

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(OSError):
            load_translation_index(Path(self._tmp.name) / "absent.tsv")


if __name__ == "__main__":
    unittest.main()
