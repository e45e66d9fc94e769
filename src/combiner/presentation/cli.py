from __future__ import annotations

import shlex
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from combiner.application.services.combination_service import CombinationSession
from combiner.domain.models.classification import RarityTier
from combiner.domain.models.entity import Entity


_RARITY_STYLES = {
    RarityTier.COMMON: "white",
    RarityTier.UNCOMMON: "green",
    RarityTier.RARE: "cyan",
    RarityTier.LEGENDARY: "bold magenta",
}

_HELP_TEXT = (
    "[bold]combine <a> <b>[/bold]  combine two elements (also: <a> + <b>)\n"
    "[bold]list[/bold]             show the elements on the board\n"
    "[bold]top[/bold]              most frequently produced combinations\n"
    "[bold]help[/bold]             this text\n"
    "[bold]quit[/bold]             leave the session"
)


def parse_combine_args(line: str) -> Optional[tuple[str, str]]:
    if "+" in line:
        left, _, right = line.partition("+")
        left, right = left.strip(), right.strip()
        if left.lower().startswith("combine "):
            left = left[len("combine "):].strip()
        return (left, right) if left and right else None
    try:
        parts = shlex.split(line)
    except ValueError:
        return None
    if parts and parts[0].lower() == "combine":
        parts = parts[1:]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


def render_entity(entity: Entity) -> Panel:
    style = _RARITY_STYLES.get(entity.rarity, "white")
    rarity = entity.rarity.value if entity.rarity else "-"
    domain = entity.domain.value if entity.domain else "-"
    body = (
        f"[bold]{entity.icon}  {entity.name}[/bold]\n"
        f"Rarity: [{style}]{rarity}[/{style}]   Domain: {domain}\n"
        f"From: {' + '.join(entity.combined_from) or '-'}"
    )
    translations = ", ".join(f"{locale}: {label}" for locale, label in sorted(entity.translations.items()))
    if translations:
        body += f"\n[dim]{translations}[/dim]"
    return Panel.fit(body, border_style=style, title="New element")


def render_elements(session: CombinationSession) -> Table:
    table = Table(title="Elements")
    table.add_column("Icon")
    table.add_column("Name", style="bold")
    table.add_column("Rarity")
    table.add_column("Domain")
    table.add_column("From")
    for entity in session.elements:
        table.add_row(
            entity.icon,
            entity.name,
            entity.rarity.value if entity.rarity else ("base" if entity.is_base else "-"),
            entity.domain.value if entity.domain else "-",
            " + ".join(entity.combined_from),
        )
    return table


async def combine_labels(session: CombinationSession, console: Console, first_label: str, second_label: str) -> Optional[Entity]:
    first = session.find(first_label)
    second = session.find(second_label)
    missing = [label for label, entity in ((first_label, first), (second_label, second)) if entity is None]
    if missing:
        console.print(f"[yellow]Unknown element(s): {', '.join(missing)}[/yellow]")
        return None

    with console.status("Combining..."):
        derived = await session.combine(first, second)
    if derived is None:
        console.print("[dim]Attempt ignored: still cooling down.[/dim]")
        return None
    console.print(render_entity(derived))
    return derived


async def _show_top(session: CombinationSession, console: Console) -> None:
    await session.drain()
    rows = await session.top_combinations(limit=10)
    if not rows:
        console.print("[dim]No combinations recorded yet.[/dim]")
        return
    table = Table(title="Top combinations")
    table.add_column("Label", style="bold")
    table.add_column("Count", justify="right")
    for row in rows:
        table.add_row(row.label, str(row.count))
    console.print(table)


async def run_interactive(session: CombinationSession, console: Console | None = None) -> None:
    console = console or Console()
    console.print(Panel.fit("[bold yellow]ELEMENT COMBINER[/bold yellow]\n" + _HELP_TEXT, border_style="yellow"))
    console.print(render_elements(session))

    while True:
        # Blocking read on the loop thread so Ctrl+C reaches the caller at once.
        line = console.input("[bold cyan]> [/bold cyan]").strip()
        if not line:
            continue
        command = line.split()[0].lower()
        if command in {"quit", "exit", "q"}:
            break
        if command == "help":
            console.print(_HELP_TEXT)
        elif command in {"list", "elements"}:
            console.print(render_elements(session))
        elif command == "top":
            await _show_top(session, console)
        else:
            pair = parse_combine_args(line)
            if pair is None:
                console.print("[yellow]Try: combine Water Fire[/yellow]")
                continue
            await combine_labels(session, console, *pair)


async def run_once(session: CombinationSession, first_label: str, second_label: str, console: Console | None = None) -> int:
    console = console or Console()
    derived = await combine_labels(session, console, first_label, second_label)
    await session.drain()
    return 0 if derived is not None else 1
