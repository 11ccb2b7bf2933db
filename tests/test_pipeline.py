# -*- coding: utf-8 -*-

from __future__ import annotations

import io
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi import UploadFile
from starlette.datastructures import Headers

from nutrilens.analysis.errors import (
    AnalysisFailure,
    InferenceError,
    ResponseParseError,
    UploadValidationError,
)
from nutrilens.analysis.ingest import ingest_upload
from nutrilens.analysis.inference import InferenceClient
from nutrilens.analysis.lifecycle import TransientImage
from nutrilens.analysis.models import AnalysisContext
from nutrilens.analysis.parser import parse_nutrition_reply
from nutrilens.analysis.pipeline import run_analysis


class StaticClient(InferenceClient):
    def __init__(self, reply: str = "{}", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error

    def generate(self, *, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        if self.error is not None:
            raise self.error
        return self.reply


class _TmpDirCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = Path(tempfile.mkdtemp(prefix="nutrilens-test-"))

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _image(self, data: bytes = b"img") -> TransientImage:
        path = self.tmp / "upload.bin"
        path.write_bytes(data)
        return TransientImage(path=path, mime_type="image/jpeg", size_bytes=len(data))


class TestResponseParser(unittest.TestCase):
    def test_parses_object(self) -> None:
        parsed = parse_nutrition_reply('{"foodName": "Rice", "warnings": []}')
        self.assertEqual(parsed, {"foodName": "Rice", "warnings": []})

    def test_strips_code_fence(self) -> None:
        parsed = parse_nutrition_reply('```json\n{"foodName": "Rice"}\n```')
        self.assertEqual(parsed, {"foodName": "Rice"})

    def test_missing_keys_and_odd_types_pass_through(self) -> None:
        parsed = parse_nutrition_reply('{"calories": 250, "warnings": "none"}')
        self.assertEqual(parsed, {"calories": 250, "warnings": "none"})

    def test_malformed_text_raises(self) -> None:
        for text in ("", "not json", '{"foodName": "Rice",'):
            with self.subTest(text=text):
                with self.assertRaises(ResponseParseError):
                    parse_nutrition_reply(text)

    def test_non_object_raises(self) -> None:
        with self.assertRaises(ResponseParseError):
            parse_nutrition_reply('["Rice"]')

    def test_non_finite_constants_raise(self) -> None:
        for token in ("NaN", "Infinity", "-Infinity"):
            with self.subTest(token=token):
                with self.assertRaises(ResponseParseError):
                    parse_nutrition_reply('{"foodName": "X", "calories": ' + token + "}")


class TestTransientImage(_TmpDirCase):
    def test_release_deletes_once(self) -> None:
        image = self._image()
        image.release()
        self.assertFalse(image.path.exists())
        self.assertTrue(image.released)
        # Already released: no second unlink.
        with mock.patch.object(Path, "unlink") as unlink:
            image.release()
            image.release_quietly()
        unlink.assert_not_called()

    def test_release_quietly_tolerates_missing_file(self) -> None:
        image = self._image()
        image.path.unlink()
        image.release_quietly()
        self.assertTrue(image.released)

    def test_release_quietly_swallows_os_error(self) -> None:
        image = self._image()
        with mock.patch.object(Path, "unlink", side_effect=PermissionError("busy")):
            image.release_quietly()
        self.assertFalse(image.released)
        self.assertTrue(image.path.exists())

    def test_read_after_release_fails(self) -> None:
        image = self._image()
        image.release()
        with self.assertRaises(RuntimeError):
            image.read_bytes()


class TestRunAnalysis(_TmpDirCase):
    def test_success_releases_image(self) -> None:
        image = self._image()
        result = run_analysis(
            image=image,
            context=AnalysisContext(),
            client=StaticClient('{"foodName": "Soup"}'),
        )
        self.assertEqual(result, {"foodName": "Soup"})
        self.assertTrue(image.released)
        self.assertFalse(image.path.exists())

    def test_inference_failure_releases_image(self) -> None:
        image = self._image()
        with self.assertRaises(InferenceError):
            run_analysis(
                image=image,
                context=AnalysisContext(),
                client=StaticClient(error=InferenceError("down")),
            )
        self.assertTrue(image.released)
        self.assertFalse(image.path.exists())

    def test_parse_failure_after_release_does_not_double_delete(self) -> None:
        image = self._image()
        original_release_quietly = image.release_quietly
        with mock.patch.object(image, "release_quietly", wraps=original_release_quietly) as quietly:
            with self.assertRaises(ResponseParseError):
                run_analysis(image=image, context=AnalysisContext(), client=StaticClient("oops"))
        quietly.assert_called_once()
        self.assertTrue(image.released)
        self.assertFalse(image.path.exists())

    def test_non_finite_reply_fails_and_releases_image(self) -> None:
        image = self._image()
        with self.assertRaises(ResponseParseError):
            run_analysis(
                image=image,
                context=AnalysisContext(),
                client=StaticClient('{"foodName": "X", "calories": NaN}'),
            )
        self.assertTrue(image.released)
        self.assertFalse(image.path.exists())

    def test_release_failure_on_success_path_propagates(self) -> None:
        image = self._image()
        with mock.patch.object(TransientImage, "release", side_effect=PermissionError("locked")):
            with self.assertRaises(PermissionError):
                run_analysis(image=image, context=AnalysisContext(), client=StaticClient("{}"))
        # Failure handler still cleans up.
        self.assertFalse(image.path.exists())


class TestIngest(_TmpDirCase):
    def test_text_field_counts_as_missing(self) -> None:
        upload_dir = self.tmp / "uploads"
        with self.assertRaises(UploadValidationError):
            ingest_upload(upload="not-a-file", meal_type=None, diet_goal=None, upload_dir=upload_dir)
        self.assertFalse(upload_dir.exists())

    def test_multiple_image_parts_rejected_before_storage(self) -> None:
        upload_dir = self.tmp / "uploads"
        upload = UploadFile(file=io.BytesIO(b"x"), filename="a.jpg")
        with self.assertRaises(AnalysisFailure):
            ingest_upload(upload=upload, meal_type=None, diet_goal=None, upload_dir=upload_dir, part_count=2)
        self.assertFalse(upload_dir.exists())

    def test_missing_upload_creates_nothing(self) -> None:
        upload_dir = self.tmp / "uploads"
        with self.assertRaises(UploadValidationError) as ctx:
            ingest_upload(upload=None, meal_type="Lunch", diet_goal=None, upload_dir=upload_dir)
        self.assertEqual(ctx.exception.message, "No image uploaded")
        self.assertFalse(upload_dir.exists())

    def test_stores_bytes_and_defaults_context(self) -> None:
        upload_dir = self.tmp / "uploads"
        upload = UploadFile(
            file=io.BytesIO(b"jpeg-bytes"),
            filename="meal.jpg",
            headers=Headers({"content-type": "image/jpeg"}),
        )
        image, context = ingest_upload(upload=upload, meal_type=None, diet_goal="", upload_dir=upload_dir)
        self.assertEqual(image.read_bytes(), b"jpeg-bytes")
        self.assertEqual(image.mime_type, "image/jpeg")
        self.assertEqual(image.size_bytes, 10)
        self.assertEqual(image.path.parent, upload_dir)
        self.assertEqual(context, AnalysisContext(meal_type="Unspecified", diet_goal="General Health"))

    def test_handles_are_unique(self) -> None:
        upload_dir = self.tmp / "uploads"
        paths = set()
        for _ in range(3):
            upload = UploadFile(file=io.BytesIO(b"x"), filename="a.jpg")
            image, _ = ingest_upload(upload=upload, meal_type=None, diet_goal=None, upload_dir=upload_dir)
            paths.add(image.path)
        self.assertEqual(len(paths), 3)


if __name__ == "__main__":
    unittest.main()
