import json
import unittest
import warnings
from unittest.mock import MagicMock

from filebucket_core import formats
from filebucket_core.bucket_file import BucketFile
from filebucket_core.errors import ValidationError
from filebucket_core.tests.support import CONTENTS, MD5_CHECKSUM, use_digest_algorithms


class TestFormatSelection(unittest.TestCase):
    def test_defaults_to_raw(self):
        self.assertEqual(formats.DEFAULT_FORMAT, "raw")

    def test_supports_raw_and_json(self):
        self.assertIn("raw", formats.SUPPORTED_FORMATS)
        self.assertIn("json", formats.SUPPORTED_FORMATS)

    def test_rejects_unknown_format(self):
        with self.assertRaisesRegex(ValidationError, "Unsupported format 'yaml'"):
            formats.render(BucketFile(CONTENTS), "yaml")
        with self.assertRaises(ValidationError):
            formats.convert_from("yaml", b"")


class TestRawFormat(unittest.TestCase):
    def test_round_trip(self):
        bucket_file = BucketFile(CONTENTS)
        tripped = BucketFile.convert_from("raw", bucket_file.render())
        self.assertEqual(tripped.contents, bucket_file.contents)

    def test_round_trip_binary(self):
        bucket_file = BucketFile(bytes(range(256)))
        self.assertEqual(formats.convert_from("raw", formats.render(bucket_file)).contents, bytes(range(256)))

    def test_is_not_deprecated(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            formats.convert_from("raw", formats.render(BucketFile(CONTENTS), "raw"))
        self.assertEqual(caught, [])


class TestJsonFormat(unittest.TestCase):
    def test_round_trip(self):
        bucket_file = BucketFile(CONTENTS)
        with self.assertWarns(DeprecationWarning):
            rendered = bucket_file.render("json")
        with self.assertWarns(DeprecationWarning):
            tripped = BucketFile.convert_from("json", rendered)
        self.assertEqual(tripped.contents, bucket_file.contents)

    def test_round_trip_unicode(self):
        text = "caf\u00e9 \u2603\n"
        notify = MagicMock()
        rendered = formats.to_json(BucketFile(text), notify=notify)
        self.assertEqual(formats.from_json(rendered, notify=notify).contents, text.encode("utf-8"))

    def test_requires_utf8_contents(self):
        with self.assertRaisesRegex(ValidationError, "UTF-8"):
            formats.to_json(BucketFile(b"\xff\xfe binary"), notify=MagicMock())

    def test_serializes_contents_only(self):
        notify = MagicMock()
        self.assertEqual(
            formats.to_json(BucketFile("file contents"), notify=notify),
            '{"contents":"file contents"}',
        )
        notify.assert_called_once_with("Serializing BucketFile objects to json is deprecated.")

    def test_loads_from_mapping(self):
        notify = MagicMock()
        bucket_file = formats.from_json({"contents": "file contents"}, notify=notify)
        self.assertEqual(bucket_file.contents, b"file contents")
        notify.assert_called_once_with(
            "Deserializing BucketFile objects from json is deprecated. Upgrade to a newer version."
        )

    def test_default_notice_is_logged(self):
        with self.assertLogs("filebucket.formats", "WARNING") as logs, self.assertWarns(DeprecationWarning):
            BucketFile("file contents").to_json()
        self.assertEqual(logs.output, [
            "WARNING:filebucket.formats:Serializing BucketFile objects to json is deprecated."
        ])

    def test_rejects_other_keys(self):
        notify = MagicMock()
        with self.assertRaises(ValidationError):
            formats.from_json({"contents": "x", "checksum": MD5_CHECKSUM}, notify=notify)

    def test_rejects_missing_contents(self):
        with self.assertRaises(ValidationError):
            formats.from_json("{}", notify=MagicMock())

    def test_rejects_non_string_contents(self):
        with self.assertRaises(ValidationError):
            formats.from_json('{"contents": 5}', notify=MagicMock())

    def test_rejects_unencodable_contents(self):
        with self.assertRaises(ValidationError):
            formats.from_json('{"contents":"\\ud800"}', notify=MagicMock())

    def test_rejects_invalid_json(self):
        with self.assertRaises(ValidationError):
            formats.from_json("{contents", notify=MagicMock())
        with self.assertRaises(ValidationError):
            formats.from_json("[]", notify=MagicMock())

    def test_checksum_is_recomputed(self):
        use_digest_algorithms(self, "md5")
        rendered = formats.to_json(BucketFile(CONTENTS), notify=MagicMock())
        self.assertEqual(json.loads(rendered), {"contents": CONTENTS})
        self.assertEqual(formats.from_json(rendered, notify=MagicMock()).checksum, MD5_CHECKSUM)


if __name__ == "__main__":
    unittest.main()
