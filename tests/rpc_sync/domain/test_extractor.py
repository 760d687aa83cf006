import unittest

from src.rpc_sync.domain.errors import EntryMalformed, ParseError
from src.rpc_sync.domain.extractor import extract_catalog, normalize_candidate
from src.rpc_sync.domain.models import CandidateEntry
from tests.rpc_sync.sample_documents import CHAINLIST_DOCUMENT


class ExtractCatalogTests(unittest.TestCase):
    def test_extracts_networks_in_document_order(self):
        catalog = extract_catalog(CHAINLIST_DOCUMENT)
        self.assertEqual(list(catalog), ["1", "137", "testnet-αβ", "2020"])
        self.assertEqual(catalog["2020"].candidates, ())

    def test_candidates_keep_shape_and_order(self):
        catalog = extract_catalog(CHAINLIST_DOCUMENT)
        self.assertEqual(
            catalog["1"].candidates,
            (
                CandidateEntry("https://a.example"),
                CandidateEntry("https://b.example", "none"),
                CandidateEntry("https://c.example", "yes"),
                CandidateEntry("wss://d.example", "none"),
            ),
        )

    def test_candidate_without_url_is_dropped(self):
        catalog = extract_catalog(CHAINLIST_DOCUMENT)
        self.assertEqual(
            catalog["137"].candidates,
            (CandidateEntry("https://x.example"), CandidateEntry("http://y.example")),
        )

    def test_malformed_networks_are_skipped(self):
        catalog = extract_catalog(CHAINLIST_DOCUMENT)
        self.assertNotIn("56", catalog)
        self.assertNotIn("97", catalog)

    def test_extraction_is_idempotent(self):
        self.assertEqual(extract_catalog(CHAINLIST_DOCUMENT), extract_catalog(CHAINLIST_DOCUMENT))

    def test_custom_export_name(self):
        catalog = extract_catalog("export const rpcs2 = { 10: { rpcs: ['https://op.example'] } };", "rpcs2")
        self.assertEqual(catalog["10"].candidates, (CandidateEntry("https://op.example"),))

    def test_helper_with_regex_does_not_break_extraction(self):
        catalog = extract_catalog(
            "export function removeEndingSlash(rpc) {\n"
            "  return rpc.replace(/\\/$/, \"\");\n"
            "}\n"
            "export const extraRpcs = { 10: { rpcs: ['https://op.example'] } };"
        )
        self.assertEqual(catalog["10"].candidates, (CandidateEntry("https://op.example"),))

    def test_missing_export_raises(self):
        with self.assertRaises(ParseError):
            extract_catalog("const somethingElse = {};")

    def test_export_that_is_not_an_object_raises(self):
        with self.assertRaises(ParseError):
            extract_catalog("export const extraRpcs = mergeDeep(a, b);")

    def test_broken_document_raises(self):
        with self.assertRaises(ParseError):
            extract_catalog("export const extraRpcs = { 1: { rpcs: ['https://a.example' }")


class NormalizeCandidateTests(unittest.TestCase):
    def test_non_string_tracking_becomes_absent(self):
        self.assertEqual(
            normalize_candidate({"url": "https://a.example", "tracking": 3}),
            CandidateEntry("https://a.example", None),
        )

    def test_non_string_url_is_malformed(self):
        with self.assertRaises(EntryMalformed):
            normalize_candidate({"url": ["https://a.example"]})

    def test_other_values_are_malformed(self):
        with self.assertRaises(EntryMalformed):
            normalize_candidate(42)


if __name__ == "__main__":
    unittest.main()
