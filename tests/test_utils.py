import unittest
from unittest import mock

from pokekg.errors import UpstreamError
from pokekg.utils import clean_text, http_get


class HttpGetTests(unittest.TestCase):
    @mock.patch("pokekg.utils.time.sleep")
    @mock.patch("pokekg.utils.requests.get")
    def test_negative_retries_still_make_one_attempt(self, mock_get, mock_sleep) -> None:
        mock_get.return_value = mock.Mock(status_code=503, reason="Unavailable")
        with self.assertRaises(UpstreamError) as ctx:
            http_get("http://wiki.test/page", max_retries=-3)
        self.assertEqual(ctx.exception.status, 503)
        self.assertEqual(mock_get.call_count, 1)
        mock_sleep.assert_not_called()

    @mock.patch("pokekg.utils.requests.get")
    def test_extra_headers_are_merged(self, mock_get) -> None:
        mock_get.return_value = mock.Mock(status_code=200)
        http_get("http://store.test/data", headers={"Accept": "text/turtle"}, max_retries=0)
        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs["headers"]["Accept"], "text/turtle")
        self.assertIn("User-Agent", kwargs["headers"])


class CleanTextTests(unittest.TestCase):
    def test_trims_non_breaking_spaces(self) -> None:
        self.assertEqual(clean_text("\xa0 6.9\xa0kg \n"), "6.9\xa0kg")
        self.assertIsNone(clean_text(None))


if __name__ == "__main__":
    unittest.main()
