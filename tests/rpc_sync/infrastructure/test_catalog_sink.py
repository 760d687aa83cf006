import json
import os
import stat
import unittest
from unittest.mock import patch

from src.rpc_sync.domain.errors import ParseError
from src.rpc_sync.infrastructure.catalog_sink import JsonCatalogSink
from tests.utils.tempdir import managed_temp_dir


class JsonCatalogSinkTests(unittest.TestCase):
    def test_write_catalog_is_pretty_with_trailing_newline(self):
        with managed_temp_dir("catalog_sink_write") as tmp:
            sink = JsonCatalogSink(tmp / "rpc_providers.json")

            path = sink.write_catalog({"1": ["https://b.example"], "2020": [], "αβ": ["https://é.example"]})

            text = path.read_text(encoding="utf-8")
            self.assertTrue(text.endswith("}\n"))
            self.assertIn('  "1": [\n    "https://b.example"\n  ]', text)
            self.assertIn("https://é.example", text)
            self.assertEqual(json.loads(text)["2020"], [])
            self.assertEqual(list(json.loads(text)), ["1", "2020", "αβ"])

    def test_write_catalog_replaces_previous_content(self):
        with managed_temp_dir("catalog_sink_replace", files={"rpc_providers.json": '{"old": ["x"]}'}) as tmp:
            sink = JsonCatalogSink(tmp / "rpc_providers.json")

            sink.write_catalog({"137": ["https://x.example"]})

            self.assertEqual(sink.read_catalog(), {"137": ["https://x.example"]})
            self.assertEqual(sorted(p.name for p in tmp.iterdir()), ["rpc_providers.json"])

    @unittest.skipIf(os.name == "nt", "POSIX permission bits")
    def test_written_catalog_follows_umask(self):
        with managed_temp_dir("catalog_sink_mode") as tmp:
            previous_umask = os.umask(0o022)
            try:
                path = JsonCatalogSink(tmp / "rpc_providers.json").write_catalog({"1": []})
            finally:
                os.umask(previous_umask)

            self.assertEqual(stat.S_IMODE(path.stat().st_mode), 0o644)

    def test_failed_write_leaves_previous_file_untouched(self):
        with managed_temp_dir("catalog_sink_atomic", files={"rpc_providers.json": '{"old": ["x"]}\n'}) as tmp:
            sink = JsonCatalogSink(tmp / "rpc_providers.json")

            with patch("src.rpc_sync.infrastructure.catalog_sink.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    sink.write_catalog({"1": []})

            self.assertEqual((tmp / "rpc_providers.json").read_text(encoding="utf-8"), '{"old": ["x"]}\n')
            self.assertEqual(sorted(p.name for p in tmp.iterdir()), ["rpc_providers.json"])

    def test_read_catalog_rejects_missing_or_malformed_files(self):
        with managed_temp_dir(
            "catalog_sink_read",
            files={"broken.json": "{not json", "list.json": "[]", "nested.json": '{"1": [1, 2]}'},
        ) as tmp:
            for name in ("missing.json", "broken.json", "list.json", "nested.json"):
                with self.subTest(name=name):
                    with self.assertRaises(ParseError):
                        JsonCatalogSink(tmp / name).read_catalog()


if __name__ == "__main__":
    unittest.main()
