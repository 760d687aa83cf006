import unittest

from src.rpc_sync.application.workflows.validate_catalog import (
    ValidateCatalogWorkflow,
    ValidateWorkflowConfig,
)
from src.rpc_sync.domain.errors import ParseError
from tests.rpc_sync.application.test_sync_workflow import FakeProber, FakeSink, FakeVersionStore


class MissingCatalogSink(FakeSink):
    def read_catalog(self):
        raise ParseError("Catalog file not found: unit/rpc_providers.json")


class ValidateCatalogWorkflowTests(unittest.IsolatedAsyncioTestCase):
    async def test_dead_endpoints_are_dropped_and_version_bumped(self):
        sink = FakeSink()
        sink.written.append(
            {
                "1": ["https://b.example", "https://gone.example"],
                "137": ["https://x.example"],
                "2020": [],
            }
        )
        versions = FakeVersionStore(current=3)
        workflow = ValidateCatalogWorkflow(
            prober=FakeProber(alive={"https://b.example"}),
            sink=sink,
            version_store=versions,
            config=ValidateWorkflowConfig(show_progress=False),
        )

        summary = await workflow.run()

        self.assertEqual(sink.written[-1], {"1": ["https://b.example"], "137": [], "2020": []})
        self.assertEqual(summary.candidates_total, 3)
        self.assertEqual(summary.verified_total, 1)
        self.assertEqual(summary.primary_network_verified, 1)
        self.assertEqual((summary.previous_version, summary.version), (3, 4))

    async def test_missing_catalog_aborts_before_writing(self):
        sink = MissingCatalogSink()
        versions = FakeVersionStore(current=1)
        workflow = ValidateCatalogWorkflow(
            prober=FakeProber(alive=set()),
            sink=sink,
            version_store=versions,
            config=ValidateWorkflowConfig(show_progress=False),
        )

        with self.assertRaises(ParseError):
            await workflow.run()

        self.assertEqual(sink.written, [])
        self.assertEqual(versions.current, 1)


if __name__ == "__main__":
    unittest.main()
