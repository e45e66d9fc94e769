import random
import sys
import threading
from pathlib import Path
import unittest

from rich.console import Console

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.application.services.combination_ledger import CombinationLedger
from combiner.application.services.combination_service import CombinationSession
from combiner.application.services.cooldown_guard import CooldownGuard
from combiner.application.services.rate_limiter import SlidingWindowRateLimiter
from combiner.application.services.resolution_pipeline import ResolutionPipeline
from combiner.infrastructure.inmemory.inmemory_combination_repo import InMemoryCombinationRecordRepository
from combiner.presentation.cli import parse_combine_args, render_elements, run_interactive, run_once


def _session(clock=lambda: 50_000) -> CombinationSession:
    return CombinationSession(
        pipeline=ResolutionPipeline(SlidingWindowRateLimiter(clock=lambda: 0), rng=random.Random(9)),
        guard=CooldownGuard(cooldown_ms=2_000, release_delay_s=0, clock=clock),
        ledger=CombinationLedger(InMemoryCombinationRecordRepository()),
    )


def _console() -> Console:
    return Console(record=True, width=100, force_terminal=False)


class ParseCombineArgsTests(unittest.TestCase):
    def test_plus_and_command_forms(self) -> None:
        self.assertEqual(("Water", "Fire"), parse_combine_args("Water + Fire"))
        self.assertEqual(("Water", "Fire"), parse_combine_args("combine Water + Fire"))
        self.assertEqual(("Water", "Fire"), parse_combine_args("combine Water Fire"))
        self.assertEqual(("Hot Spring", "Fire"), parse_combine_args('combine "Hot Spring" Fire'))

    def test_rejects_incomplete_input(self) -> None:
        self.assertIsNone(parse_combine_args("Water +"))
        self.assertIsNone(parse_combine_args("combine Water"))
        self.assertIsNone(parse_combine_args('combine "Water Fire'))


class RunOnceTests(unittest.IsolatedAsyncioTestCase):
    async def test_combines_known_elements_and_prints_panel(self) -> None:
        session = _session()
        console = _console()

        code = await run_once(session, "water", "fire", console=console)

        text = console.export_text()
        self.assertEqual(0, code)
        self.assertIn("Steam", text)
        self.assertIn("Water + Fire", text)
        self.assertEqual("Steam", session.elements[-1].name)

    async def test_unknown_element_is_reported(self) -> None:
        console = _console()

        code = await run_once(_session(), "Water", "Plasma", console=console)

        self.assertEqual(1, code)
        self.assertIn("Unknown element(s): Plasma", console.export_text())

    async def test_cooldown_is_reported(self) -> None:
        session = _session()
        console = _console()
        await run_once(session, "Water", "Fire", console=console)

        code = await run_once(session, "Water", "Earth", console=console)

        self.assertEqual(1, code)
        self.assertIn("still cooling down", console.export_text())

    async def test_board_table_lists_base_elements(self) -> None:
        console = _console()
        console.print(render_elements(_session()))

        text = console.export_text()
        for name in ("Fire", "Water", "Earth", "Bitcoin"):
            self.assertIn(name, text)


class _ScriptedConsole(Console):
    def __init__(self, lines) -> None:
        super().__init__(record=True, width=100, force_terminal=False)
        self.lines = list(lines)
        self.input_threads = []

    def input(self, *_args, **_kwargs) -> str:
        self.input_threads.append(threading.get_ident())
        return self.lines.pop(0)


class RunInteractiveTests(unittest.IsolatedAsyncioTestCase):
    async def test_prompt_is_read_on_the_event_loop_thread(self) -> None:
        session = _session()
        console = _ScriptedConsole(["combine Water Fire", "", "quit"])

        await run_interactive(session, console=console)

        self.assertEqual({threading.get_ident()}, set(console.input_threads))
        self.assertEqual(3, len(console.input_threads))
        self.assertEqual("Steam", session.elements[-1].name)


if __name__ == "__main__":
    unittest.main()
