import asyncio
import sys
import tempfile
from pathlib import Path
import unittest

from sqlalchemy import inspect

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.application.services.combination_ledger import CombinationLedger
from combiner.domain.repositories import DuplicateLabelError
from combiner.infrastructure.db.sql.connection import build_engine, build_session_factory, is_sqlite_memory_url
from combiner.infrastructure.db.sql.repos import SqlCombinationRecordRepository
from combiner.infrastructure.db.sql.schema import ensure_schema, main as schema_main, render_schema


class SqlCombinationRecordRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = build_engine("sqlite+pysqlite:///:memory:")
        ensure_schema(self.engine)
        self.repo = SqlCombinationRecordRepository(build_session_factory(self.engine))

    def tearDown(self) -> None:
        self.engine.dispose()

    def test_schema_has_unique_label_index(self) -> None:
        inspector = inspect(self.engine)
        self.assertIn("element_combination", inspector.get_table_names())
        unique = inspector.get_unique_constraints("element_combination")
        self.assertEqual([["label"]], [constraint["column_names"] for constraint in unique])

    def test_insert_find_and_increment(self) -> None:
        created = self.repo.insert("Steam")
        self.assertEqual(1, created.count)
        self.assertIsNotNone(created.created_at)

        found = self.repo.find_by_label("Steam")
        self.assertEqual(created.id, found.id)

        bumped = self.repo.increment_count(created.id)
        self.assertEqual(2, bumped.count)
        self.assertIsNone(self.repo.find_by_label("Mud"))

    def test_duplicate_insert_maps_to_domain_error(self) -> None:
        self.repo.insert("Steam")
        with self.assertRaises(DuplicateLabelError) as ctx:
            self.repo.insert("Steam")
        self.assertEqual("Steam", ctx.exception.label)

    def test_increment_unknown_id_raises_key_error(self) -> None:
        with self.assertRaises(KeyError):
            self.repo.increment_count(999)

    def test_list_top_orders_by_count_then_label(self) -> None:
        ledger = CombinationLedger(self.repo)
        for label in ("Mud", "Steam", "Steam", "Brick", "Magma", "Magma", "Magma"):
            ledger.record_occurrence_sync(label)

        top = self.repo.list_top(limit=3)

        self.assertEqual([("Magma", 3), ("Steam", 2), ("Brick", 1)], [(r.label, r.count) for r in top])

    def test_render_schema_emits_create_table(self) -> None:
        ddl = render_schema(self.engine)
        self.assertIn("CREATE TABLE element_combination", ddl)
        self.assertTrue(ddl.endswith(";"))


class SqlLedgerThreadedTests(unittest.TestCase):
    def test_async_ledger_over_file_database_counts_every_occurrence(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            engine = build_engine(f"sqlite:///{Path(tmp) / 'ledger.db'}")
            ensure_schema(engine)
            ledger = CombinationLedger(SqlCombinationRecordRepository(build_session_factory(engine)), max_attempts=5)

            async def _record_all() -> list:
                for _ in range(5):
                    await ledger.record_occurrence("Ocean")
                return await ledger.top(1)

            top = asyncio.run(_record_all())
            engine.dispose()

        self.assertEqual([("Ocean", 5)], [(record.label, record.count) for record in top])

    def test_async_ledger_over_memory_database_shares_one_connection(self) -> None:
        for url in ("sqlite://", "sqlite:///:memory:"):
            engine = build_engine(url)
            ensure_schema(engine)
            ledger = CombinationLedger(SqlCombinationRecordRepository(build_session_factory(engine)), max_attempts=5)

            async def _record_all() -> list:
                for _ in range(4):
                    await ledger.record_occurrence("Ocean")
                return await ledger.top(1)

            top = asyncio.run(_record_all())
            engine.dispose()

            self.assertEqual([("Ocean", 4)], [(record.label, record.count) for record in top], url)

    def test_memory_url_detection(self) -> None:
        self.assertTrue(is_sqlite_memory_url("sqlite://"))
        self.assertTrue(is_sqlite_memory_url("sqlite+pysqlite:///:memory:"))
        self.assertFalse(is_sqlite_memory_url("sqlite:///combiner.db"))
        self.assertFalse(is_sqlite_memory_url("postgresql://combiner@localhost/combiner"))

    def test_schema_cli_creates_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            url = f"sqlite:///{Path(tmp) / 'cli.db'}"
            self.assertEqual(0, schema_main(["--url", url]))
            engine = build_engine(url)
            self.assertIn("element_combination", inspect(engine).get_table_names())
            engine.dispose()


if __name__ == "__main__":
    unittest.main()
