"""Tests for capturing tokens from request headers."""

from __future__ import annotations

import base64
import os
import sys
import time
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ucanspect import (
    ContainerDecoder,
    DecoderChain,
    Inspector,
    RawTokenDecoder,
    TokenItem,
    capture_from_request,
    extract_raw_tokens,
    wrap_container,
)
from ucanspect._capture import split_ucans_header

from mock_tokens import DELEGATION, INVOCATION, VERSION

URL = "https://api.example.com/debug"
NOW = 1766597300000


def capture(headers, inspector=None):
    return capture_from_request(URL, headers, captured_at=NOW,
                                inspector=inspector or Inspector())


class TestExtract(unittest.TestCase):
    def test_authorization(self):
        got = extract_raw_tokens([("Authorization", "Bearer " + DELEGATION)])
        self.assertEqual(got, [("Authorization", DELEGATION)])

    def test_header_name_case_insensitive(self):
        got = extract_raw_tokens([("authorization", "Bearer abc"), ("UCANS", "def")])
        self.assertEqual(got, [("Authorization", "abc"), ("ucans", "def")])

    def test_bearer_prefix_case_sensitive(self):
        self.assertEqual(extract_raw_tokens([("Authorization", "bearer abc")]), [])
        self.assertEqual(extract_raw_tokens([("Authorization", "Basic abc")]), [])

    def test_ucans_split(self):
        self.assertEqual(split_ucans_header(" a, b ,,c ,"), ["a", "b", "c"])
        self.assertEqual(split_ucans_header(""), [])

    def test_other_headers_ignored(self):
        headers = [("Content-Type", "application/json"), ("X-Ucans", "abc")]
        self.assertEqual(extract_raw_tokens(headers), [])

    def test_har_headers(self):
        headers = [{"name": "Authorization", "value": "Bearer abc"},
                   {"name": "ucans", "value": "d, e"}]
        self.assertEqual(extract_raw_tokens(headers),
                         [("Authorization", "abc"), ("ucans", "d"), ("ucans", "e")])


class TestCapture(unittest.TestCase):
    def test_single_delegation(self):
        items = capture([("Authorization", "Bearer " + DELEGATION)])
        self.assertEqual(len(items), 1)
        item = items[0]
        self.assertEqual(item.token, DELEGATION)
        self.assertEqual(item.url, URL)
        self.assertEqual(item.header, "Authorization")
        self.assertEqual(item.captured_at, NOW)
        self.assertEqual(item.format, "raw")
        self.assertEqual(item.token_type, "delegation")
        self.assertEqual(item.version, VERSION)

    def test_single_invocation(self):
        items = capture([("Authorization", "Bearer " + INVOCATION)])
        self.assertEqual([(i.token_type, i.version) for i in items], [("invocation", VERSION)])

    def test_ucans_header_with_two_tokens(self):
        items = capture([("ucans", DELEGATION + ", " + INVOCATION)])
        self.assertEqual([i.token_type for i in items], ["delegation", "invocation"])
        self.assertTrue(all(i.header == "ucans" for i in items))
        self.assertTrue(all(i.format == "raw" for i in items))

    def test_both_headers(self):
        items = capture([("Authorization", "Bearer " + INVOCATION), ("ucans", DELEGATION)])
        self.assertEqual([(i.header, i.token_type) for i in items],
                         [("Authorization", "invocation"), ("ucans", "delegation")])

    def test_invalid_token_recorded_as_unknown(self):
        items = capture([("Authorization", "Bearer not-a-valid-token")])
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].token, "not-a-valid-token")
        self.assertEqual(items[0].token_type, "unknown")
        self.assertIsNone(items[0].version)

    def test_random_base64_recorded_as_unknown(self):
        noise = base64.b64encode(b"random data here").decode("ascii")
        items = capture([("ucans", noise)])
        self.assertEqual([(i.token, i.token_type) for i in items], [(noise, "unknown")])

    def test_container_in_authorization(self):
        header = wrap_container([base64.b64decode(DELEGATION), base64.b64decode(INVOCATION)])
        items = capture([("Authorization", "Bearer " + header)])
        self.assertEqual([i.token_type for i in items], ["delegation", "invocation"])
        self.assertTrue(all(i.format == "container" for i in items))
        self.assertTrue(all(i.token != header for i in items))

    def test_format_follows_decoder_not_text(self):
        class PassThroughContainer(ContainerDecoder):
            def decode(self, value):
                return [value]

        inspector = Inspector(chain=DecoderChain([PassThroughContainer(), RawTokenDecoder()]))
        items = capture([("ucans", "Cabc")], inspector)
        self.assertEqual([(i.token, i.format) for i in items], [("Cabc", "container")])

    def test_broken_container_kept_raw(self):
        items = capture([("ucans", "Cgarbage!")])
        self.assertEqual([(i.token, i.format, i.token_type) for i in items],
                         [("Cgarbage!", "raw", "unknown")])

    def test_no_tokens(self):
        self.assertEqual(capture([("Accept", "*/*")]), [])

    def test_default_timestamp(self):
        before = int(time.time() * 1000)
        items = capture_from_request(URL, [("ucans", DELEGATION)])
        after = int(time.time() * 1000)
        self.assertTrue(before <= items[0].captured_at <= after)

    def test_as_dict(self):
        item = capture([("ucans", DELEGATION)])[0]
        self.assertIsInstance(item, TokenItem)
        self.assertEqual(item.as_dict(), {
            "token": DELEGATION,
            "url": URL,
            "header": "ucans",
            "captured_at": NOW,
            "format": "raw",
            "token_type": "delegation",
            "version": VERSION,
        })


if __name__ == "__main__":
    unittest.main()
