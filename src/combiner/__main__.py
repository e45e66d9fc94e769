import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from combiner.bootstrap import create_combination_session
from combiner.presentation.cli import run_interactive, run_once


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Interactive: python -m combiner, then 'combine Water Fire'.")
    print("- One-shot: python -m combiner combine Water Fire")
    print("- Startup issues: verify COMBINER_DATABASE_URL or unset it to use the in-memory ledger.")


def _is_database_connectivity_error(exc: Exception) -> bool:
    text = str(exc).lower()
    markers = (
        "sqlalchemy.exc.operationalerror",
        "could not connect to server",
        "connection refused",
        "can't connect to mysql server",
        "unable to open database file",
    )
    return any(marker in text for marker in markers) or type(exc).__name__ == "OperationalError"


def _configure_logging() -> None:
    level = os.getenv("COMBINER_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _run(argv: list[str]) -> int:
    session = create_combination_session()
    try:
        if len(argv) == 3 and argv[0].lower() == "combine":
            return await run_once(session, argv[1], argv[2])
        await run_interactive(session)
        return 0
    finally:
        await session.close()


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    _configure_logging()
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        return asyncio.run(_run(args))
    except (KeyboardInterrupt, EOFError):
        print("\nSession ended.")
        return 0
    except Exception as exc:
        if os.getenv("COMBINER_DATABASE_URL") and _is_database_connectivity_error(exc):
            print("Ledger database unavailable; retrying with the in-memory ledger.")
            os.environ.pop("COMBINER_DATABASE_URL", None)
            try:
                return asyncio.run(_run(args))
            except (KeyboardInterrupt, EOFError):
                print("\nSession ended.")
                return 0
            except Exception as fallback_exc:
                exc = fallback_exc
        print("An unexpected error occurred. The session closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
