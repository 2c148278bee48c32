"""
Tests for reel_relay/services/selector.py

Covers:
- First-variant policy (no re-ranking by size)
- NoPlayableVariant for non-ok status, empty items, missing versions
- Rejection of non-https variant URLs
- Only the selected path is validated
"""

import unittest

from reel_relay.models import ProviderResponse
from reel_relay.services.errors import NoPlayableVariant, UpstreamMalformedBody
from reel_relay.services.selector import is_https_url, select_variant


def _response(payload: dict) -> ProviderResponse:
    return ProviderResponse.model_validate(payload)


class TestSelectVariant(unittest.TestCase):
    def test_first_variant_wins_even_if_smaller(self):
        """Order from the provider is trusted, widths are not compared."""
        response = _response(
            {
                "status": "ok",
                "data": {
                    "items": [
                        {
                            "video_versions": [
                                {"url": "https://cdn.test/small.mp4", "width": 480, "height": 854, "type": 101},
                                {"url": "https://cdn.test/big.mp4", "width": 1080, "height": 1920, "type": 102},
                            ]
                        }
                    ]
                },
            }
        )
        self.assertEqual(select_variant(response).url, "https://cdn.test/small.mp4")

    def test_only_primary_item_is_consulted(self):
        response = _response(
            {
                "status": "ok",
                "data": {
                    "items": [
                        {"video_versions": []},
                        {"video_versions": [{"url": "https://cdn.test/other.mp4"}]},
                    ]
                },
            }
        )
        with self.assertRaises(NoPlayableVariant):
            select_variant(response)

    def test_non_ok_status(self):
        response = _response({"status": "fail", "message": "not found"})
        with self.assertRaises(NoPlayableVariant):
            select_variant(response)

    def test_ok_status_without_items(self):
        for payload in ({"status": "ok"}, {"status": "ok", "data": {"items": []}}):
            with self.subTest(payload=payload):
                with self.assertRaises(NoPlayableVariant):
                    select_variant(_response(payload))

    def test_video_versions_absent(self):
        response = _response({"status": "ok", "data": {"items": [{"caption": "a photo post"}]}})
        with self.assertRaises(NoPlayableVariant):
            select_variant(response)

    def test_plain_http_variant_is_malformed(self):
        response = _response(
            {"status": "ok", "data": {"items": [{"video_versions": [{"url": "http://cdn.test/a.mp4"}]}]}}
        )
        with self.assertRaises(UpstreamMalformedBody):
            select_variant(response)

    def test_non_ok_status_with_text_data(self):
        response = _response({"status": "fail", "data": "Media not found"})
        with self.assertRaises(NoPlayableVariant):
            select_variant(response)

    def test_unread_entries_are_not_validated(self):
        response = _response(
            {
                "status": "ok",
                "data": {
                    "items": [
                        {
                            "video_versions": [
                                {"url": "https://cdn.test/hd.mp4", "width": 1080},
                                {"url": None, "width": "wide"},
                            ]
                        },
                        {"video_versions": [{"width": 1}]},
                        "not-an-item",
                    ]
                },
            }
        )
        self.assertEqual(select_variant(response).url, "https://cdn.test/hd.mp4")

    def test_selected_path_must_be_well_formed(self):
        for data in (
            "Media not found",
            {"items": "nope"},
            {"items": ["not-an-item"]},
            {"items": [{"video_versions": [{"width": 1080}]}]},
            {"items": [{"video_versions": [{"url": None}]}]},
        ):
            with self.subTest(data=data):
                with self.assertRaises(UpstreamMalformedBody):
                    select_variant(_response({"status": "ok", "data": data}))

    def test_errors_map_to_expected_status_codes(self):
        self.assertEqual(NoPlayableVariant.status_code, 400)
        self.assertEqual(UpstreamMalformedBody.status_code, 500)


class TestIsHttpsUrl(unittest.TestCase):
    def test_accepts_absolute_https(self):
        self.assertTrue(is_https_url("https://scontent.cdninstagram.com/v/t50/abc.mp4?efg=1"))

    def test_rejects_other_forms(self):
        for url in ("", "/v/abc.mp4", "ftp://cdn.test/a.mp4", "https://", "cdn.test/a.mp4"):
            with self.subTest(url=url):
                self.assertFalse(is_https_url(url))


if __name__ == "__main__":
    unittest.main()
