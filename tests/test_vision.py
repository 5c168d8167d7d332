# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
import io
import json
import unittest
from unittest import mock

import httpx
from PIL import Image

from calorie_cam.errors import CaptureError, NetworkError
from calorie_cam.vision.client import (
    LabelDetectionClient,
    VisionSettings,
    build_request_payload,
    extract_error_from_response,
    parse_label_annotations,
)
from calorie_cam.vision.imaging import downsample_image
from calorie_cam.vision.labels import select_food_label

from helpers import labels, make_image_bytes

API_URL = "https://vision.example.test/v1/images:annotate"


def _client(handler, api_key: str | None = "test-key") -> LabelDetectionClient:
    vision = VisionSettings(api_url=API_URL, api_key=api_key, timeout=5, max_results=5)
    return LabelDetectionClient(vision, transport=httpx.MockTransport(handler))


def _ok_response(descriptions):
    return {
        "responses": [
            {"labelAnnotations": [{"mid": f"/m/{i}", "description": d, "score": 0.9 - i * 0.1} for i, d in enumerate(descriptions)]}
        ]
    }


class TestLabelDetectionClient(unittest.TestCase):
    def test_posts_label_detection_request(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["key"] = request.url.params.get("key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_ok_response(["Food", "Dish", "Bifana"]))

        result = _client(handler).detect_labels("aGVsbG8=")
        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["key"], "test-key")
        self.assertEqual(seen["body"], build_request_payload("aGVsbG8=", 5))
        self.assertEqual(seen["body"]["requests"][0]["features"], [{"type": "LABEL_DETECTION", "maxResults": 5}])
        self.assertEqual([l.description for l in result], ["Food", "Dish", "Bifana"])
        self.assertAlmostEqual(result[0].score, 0.9)

    def test_non_success_status_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"code": 403, "message": "API key not valid", "status": "PERMISSION_DENIED"}})

        with self.assertRaises(NetworkError) as ctx:
            _client(handler).detect_labels("aGVsbG8=")
        self.assertIn("API key not valid", str(ctx.exception))

    def test_unreachable_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(NetworkError):
            _client(handler).detect_labels("aGVsbG8=")

    def test_malformed_json_means_no_labels(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        self.assertEqual(_client(handler).detect_labels("aGVsbG8="), [])

    def test_per_image_error_is_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"responses": [{"error": {"code": 3, "message": "Bad image data."}}]})

        with self.assertRaises(NetworkError):
            _client(handler).detect_labels("aGVsbG8=")

    def test_missing_api_key_fails_before_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
            raise AssertionError("no request expected")

        with self.assertRaises(NetworkError):
            _client(handler, api_key=None).detect_labels("aGVsbG8=")


class TestLabelParsing(unittest.TestCase):
    def test_skips_malformed_annotations(self) -> None:
        data = {"responses": [{"labelAnnotations": [{"description": ""}, "junk", {"description": "Meal", "score": 0.8}]}]}
        self.assertEqual([l.description for l in parse_label_annotations(data)], ["Meal"])

    def test_unexpected_shapes_yield_empty(self) -> None:
        for data in (None, [], {}, {"responses": []}, {"responses": [{}]}, {"responses": [{"labelAnnotations": "x"}]}):
            with self.subTest(data=data):
                self.assertEqual(parse_label_annotations(data), [])

    def test_extract_error(self) -> None:
        self.assertIsNone(extract_error_from_response({"responses": [{}]}))
        self.assertEqual(
            extract_error_from_response({"error": {"message": "quota", "status": "RESOURCE_EXHAUSTED"}}),
            "RESOURCE_EXHAUSTED: quota",
        )


class TestSelectFoodLabel(unittest.TestCase):
    def test_first_food_indicative_label_wins(self) -> None:
        self.assertEqual(select_food_label(labels("plate", "food photography", "table")), "food photography")
        self.assertEqual(select_food_label(labels("Tableware", "Dish", "Meal")), "Dish")
        self.assertEqual(select_food_label(["Seafood", "Fish"]), "Seafood")

    def test_no_keyword_means_none(self) -> None:
        self.assertIsNone(select_food_label(labels("plate", "table", "fork")))
        self.assertIsNone(select_food_label([]))


class TestDownsampleImage(unittest.TestCase):
    def _decode(self, encoded) -> Image.Image:
        return Image.open(io.BytesIO(base64.b64decode(encoded.content)))

    def test_wide_image_shrinks_to_max_width(self) -> None:
        encoded = downsample_image(make_image_bytes(1600, 1200), max_width=800)
        self.assertEqual((encoded.width, encoded.height), (800, 600))
        img = self._decode(encoded)
        self.assertEqual(img.format, "JPEG")
        self.assertEqual(img.size, (800, 600))

    def test_small_image_is_not_upscaled(self) -> None:
        encoded = downsample_image(make_image_bytes(320, 240), max_width=800)
        self.assertEqual((encoded.width, encoded.height), (320, 240))

    def test_transparent_png_becomes_jpeg(self) -> None:
        encoded = downsample_image(make_image_bytes(1000, 500, fmt="PNG", mode="RGBA"))
        self.assertEqual(self._decode(encoded).mode, "RGB")
        self.assertEqual(encoded.mime, "image/jpeg")

    def test_garbage_is_capture_error(self) -> None:
        with self.assertRaises(CaptureError):
            downsample_image(b"definitely not an image")
        with self.assertRaises(CaptureError):
            downsample_image(b"")

    def test_decompression_bomb_is_capture_error(self) -> None:
        # A tiny upload that expands past the pixel ceiling when decoded.
        data = make_image_bytes(64, 64, fmt="PNG")
        with mock.patch.object(Image, "MAX_IMAGE_PIXELS", 100):
            with self.assertRaises(CaptureError):
                downsample_image(data)


if __name__ == "__main__":
    unittest.main()
