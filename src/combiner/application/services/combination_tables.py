from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from combiner.domain.models.classification import DomainTag


SUPPORTED_LOCALES = ("en", "es", "fr", "de", "zh")
DEFAULT_LOCALE = "en"
PLACEHOLDER_GLYPH = "💫"


@dataclass(frozen=True)
class PresetWord:
    word: str
    icon: str
    translations: Dict[str, str] = field(default_factory=dict)


def _tr(word: str, es: str, fr: str, de: str, zh: str) -> Dict[str, str]:
    return {"en": word, "es": es, "fr": fr, "de": de, "zh": zh}


def _preset(word: str, icon: str, es: str, fr: str, de: str, zh: str) -> PresetWord:
    return PresetWord(word=word, icon=icon, translations=_tr(word, es, fr, de, zh))


BASE_ELEMENTS: Tuple[PresetWord, ...] = (
    _preset("Fire", "🔥", "Fuego", "Feu", "Feuer", "火"),
    _preset("Water", "💧", "Agua", "Eau", "Wasser", "水"),
    _preset("Earth", "🌍", "Tierra", "Terre", "Erde", "土"),
    _preset("Bitcoin", "₿", "Bitcoin", "Bitcoin", "Bitcoin", "比特币"),
)


def _instant_table(rows: Tuple[Tuple[str, str, PresetWord], ...]) -> Mapping[str, Mapping[str, PresetWord]]:
    table: Dict[str, Dict[str, PresetWord]] = {}
    for first, second, preset in rows:
        table.setdefault(first.lower(), {})[second.lower()] = preset
    return MappingProxyType({key: MappingProxyType(value) for key, value in table.items()})


# Keyed by lower-cased labels; lookups try (a, b) then (b, a).
INSTANT_COMBINATIONS = _instant_table(
    (
        ("Water", "Fire", _preset("Steam", "♨️", "Vapor", "Vapeur", "Dampf", "蒸汽")),
        ("Water", "Earth", _preset("Mud", "💧", "Barro", "Boue", "Schlamm", "泥")),
        ("Fire", "Earth", _preset("Magma", "🌋", "Magma", "Magma", "Magma", "岩浆")),
        ("Bitcoin", "Earth", _preset("CryptoMine", "⛏️", "CriptoMina", "CryptoMine", "Kryptomine", "加密矿")),
        ("Bitcoin", "Fire", _preset("Burnchain", "🔥⛓️", "Burnchain", "Burnchain", "Burnchain", "燃烧链")),
        ("Bitcoin", "Water", _preset("Liquidcoin", "💧₿", "Liquidcoin", "Liquidcoin", "Liquidcoin", "流动币")),
        ("Bitcoin", "Bitcoin", _preset("Blockchain", "🔗", "Cadena de bloques", "Chaîne de blocs", "Blockchain", "区块链")),
        ("Water", "Water", _preset("Ocean", "🌊", "Océano", "Océan", "Ozean", "海洋")),
        ("Fire", "Fire", _preset("Inferno", "🔥", "Infierno", "Enfer", "Inferno", "地狱火")),
        ("Earth", "Earth", _preset("Mountain", "⛰️", "Montaña", "Montagne", "Berg", "山")),
        ("Water", "Wind", _preset("Cloud", "☁️", "Nube", "Nuage", "Wolke", "云")),
        ("Fire", "Wind", _preset("Smoke", "💨", "Humo", "Fumée", "Rauch", "烟")),
        ("Earth", "Wind", _preset("Storm", "⛈️", "Tormenta", "Tempête", "Sturm", "风暴")),
        ("Mud", "Fire", _preset("Brick", "🧱", "Ladrillo", "Brique", "Ziegel", "砖")),
        ("Magma", "Water", _preset("Stone", "🪨", "Piedra", "Pierre", "Stein", "石头")),
        ("Steam", "Earth", _preset("Geyser", "💦", "Géiser", "Geyser", "Geysir", "间歇泉")),
    )
)


THEMATIC_COMBINATIONS: Mapping[Tuple[DomainTag, DomainTag], Tuple[str, ...]] = MappingProxyType(
    {
        (DomainTag.NATURE, DomainTag.NATURE): ("Swamp", "Meadow", "Canyon", "Glacier", "Geyser"),
        (DomainTag.NATURE, DomainTag.TECH): ("Biochip", "Ecobot", "Solarnet", "Greenbyte"),
        (DomainTag.TECH, DomainTag.TECH): ("Mainframe", "Hyperlink", "Codebase", "Servernet"),
        (DomainTag.NATURE, DomainTag.ELEMENTAL): ("Wildfire", "Tempest", "Monsoon", "Avalanche"),
        (DomainTag.ELEMENTAL, DomainTag.ELEMENTAL): ("Maelstrom", "Cyclone", "Firestorm"),
        (DomainTag.TECH, DomainTag.ELEMENTAL): ("Powercell", "Firewall", "Circuit", "Dynamo"),
        (DomainTag.MYTHOLOGY, DomainTag.NATURE): ("Dryad", "Kraken", "Griffin", "Sylph"),
        (DomainTag.MYTHOLOGY, DomainTag.TECH): ("Technomancer", "Runecoin", "Golem"),
        (DomainTag.MYTHOLOGY, DomainTag.MYTHOLOGY): ("Pantheon", "Chimera", "Oracle"),
        (DomainTag.SCIENCE, DomainTag.NATURE): ("Mineral", "Erosion", "Ecosystem"),
        (DomainTag.SCIENCE, DomainTag.TECH): ("Nanobot", "Laser", "Transistor"),
        (DomainTag.COSMIC, DomainTag.NATURE): ("Aurora", "Eclipse", "Meteorite"),
        (DomainTag.COSMIC, DomainTag.TECH): ("Satellite", "Starship", "Telescope"),
        (DomainTag.CULTURE, DomainTag.TECH): ("Videogame", "Podcast", "Meme"),
        (DomainTag.CULTURE, DomainTag.NATURE): ("Garden", "Landscape", "Harvest"),
        (DomainTag.ABSTRACT, DomainTag.NATURE): ("Rebirth", "Solitude", "Harmony"),
        (DomainTag.ABSTRACT, DomainTag.TECH): ("Automation", "Simulation", "Memory"),
    }
)


DOMAIN_PAIR_GLYPHS: Mapping[Tuple[DomainTag, DomainTag], Tuple[str, ...]] = MappingProxyType(
    {
        (DomainTag.NATURE, DomainTag.NATURE): ("🌿", "🌱", "🌲", "🌊", "🔥", "🌋", "🌍", "🌈", "🌧️", "❄️", "⛈️", "🌪️", "🏞️", "⛰️"),
        (DomainTag.TECH, DomainTag.TECH): ("💻", "🤖", "📱", "🔌", "💾", "🖥️", "📡", "🛰️", "🔋", "⚙️", "🛠️", "📊"),
        (DomainTag.NATURE, DomainTag.TECH): ("🌐", "🔬", "🧪", "🧬", "🔭", "📊", "🔋", "📡", "🧭", "🧲", "⚗️"),
        (DomainTag.MYTHOLOGY, DomainTag.NATURE): ("🐉", "🦄", "🧚", "🧙‍♂️", "🧝", "🧜‍♀️", "🧞", "🦅", "🐲", "🦉"),
        (DomainTag.MYTHOLOGY, DomainTag.TECH): ("✨", "🔮", "⚡", "🌟", "💫", "🌠", "🧿", "📿", "🪄"),
        (DomainTag.MYTHOLOGY, DomainTag.MYTHOLOGY): ("🐉", "🔮", "🪄", "🧙‍♂️", "👼", "👻", "🧚"),
        (DomainTag.TECH, DomainTag.CULTURE): ("🎮", "🎬", "🎵", "📺", "📷", "🎨", "🎭", "🎤", "🎧"),
        (DomainTag.NATURE, DomainTag.CULTURE): ("🏞️", "🌅", "🌄", "🏜️", "🏝️", "🗻", "🌈"),
        (DomainTag.SCIENCE, DomainTag.NATURE): ("🧪", "⚗️", "🔬", "🔭", "🧬", "🦠", "🧫", "🌡️"),
        (DomainTag.SCIENCE, DomainTag.TECH): ("🧪", "⚗️", "🔬", "🔭", "🧮", "🧬", "📡", "🛰️"),
        (DomainTag.COSMIC, DomainTag.NATURE): ("🌌", "🌠", "🌟", "✨", "☄️", "🪐", "🌙", "☀️", "🌍"),
        (DomainTag.COSMIC, DomainTag.TECH): ("🌌", "🌠", "☄️", "🪐", "🛰️", "📡", "🔭"),
        (DomainTag.ABSTRACT, DomainTag.NATURE): ("🌈", "☀️", "🌙", "🌑", "🌕", "🌌", "✨"),
        (DomainTag.ABSTRACT, DomainTag.TECH): ("💻", "🤖", "🔌", "💾", "⚙️", "🧠"),
        (DomainTag.ELEMENTAL, DomainTag.TECH): ("🔥", "💧", "⚡", "❄️", "🌪️", "🔋", "🧲", "⚗️"),
        (DomainTag.ELEMENTAL, DomainTag.NATURE): ("🔥", "💧", "🌍", "💨", "⚡", "❄️", "🌪️", "🌊", "🌋"),
        (DomainTag.ELEMENTAL, DomainTag.ELEMENTAL): ("🔥", "💧", "🌍", "💨", "⚡", "❄️", "🌪️", "🌊"),
    }
)

GENERIC_GLYPHS = ("💫", "✨", "🔮", "🌟", "💎", "🧩", "🎯", "🎪", "🎭", "🎨")


ICON_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        "Water": "💧", "Fire": "🔥", "Earth": "🌍", "Air": "💨", "Wind": "🌬️",
        "Ice": "❄️", "Snow": "❄️", "Rain": "🌧️", "Cloud": "☁️", "Storm": "⛈️",
        "Lightning": "⚡", "Thunder": "🌩️", "Tornado": "🌪️", "Hurricane": "🌀",
        "Volcano": "🌋", "Lava": "🌋", "Magma": "🌋", "Rock": "🪨", "Stone": "🪨",
        "Mountain": "⛰️", "Valley": "🏞️", "Canyon": "🏞️", "Forest": "🌲", "Tree": "🌳",
        "Plant": "🌱", "Flower": "🌸", "Grass": "🌿", "Ocean": "🌊", "Sea": "🌊",
        "Lake": "🏞️", "River": "🏞️", "Desert": "🏜️", "Beach": "🏖️", "Island": "🏝️",
        "Mud": "💧", "Steam": "♨️", "Fog": "🌫️", "Mist": "🌫️", "Dust": "💨",
        "Ash": "🔥", "Smoke": "💨", "Swamp": "🌿", "Glacier": "❄️", "Geyser": "💦",
        "Tsunami": "🌊", "Wave": "🌊", "Avalanche": "❄️",
        "Bitcoin": "₿", "Crypto": "₿", "Blockchain": "🔗", "Token": "🪙", "Coin": "🪙",
        "Digital": "💻", "Computer": "💻", "Network": "🌐", "Internet": "🌐", "Code": "👨‍💻",
        "Algorithm": "🧮", "Data": "📊", "Robot": "🤖", "Machine": "⚙️", "Mining": "⛏️",
        "Mine": "⛏️", "Wallet": "👛", "Key": "🔑", "Ledger": "📒", "Block": "🧱", "Chain": "⛓️",
        "Firewall": "🔥", "Market": "📊", "Trade": "📈", "Exchange": "💱",
        "Blaze": "🔥", "Flame": "🔥", "Ember": "🔥", "Spark": "✨", "Forge": "🔥",
        "Furnace": "🔥", "Wildfire": "🔥", "Inferno": "🔥", "Combustion": "💥",
        "Flood": "🌊", "Tide": "🌊", "Splash": "💦", "Foam": "🧼", "Pool": "🏊",
        "Clay": "🏺", "Sand": "🏝️", "Soil": "🌱", "Crystal": "💎", "Gem": "💎",
        "Mineral": "💎", "Cave": "🕳️", "Brick": "🧱",
        "Dragon": "🐉", "Phoenix": "🔥", "Unicorn": "🦄", "Mermaid": "🧜‍♀️", "Wizard": "🧙‍♂️",
        "Magic": "✨", "Spell": "🪄", "Potion": "🧪", "Fairy": "🧚", "Ghost": "👻",
        "Spirit": "👻", "Angel": "👼", "Demon": "👿", "Kraken": "🐙", "Golem": "🗿",
        "Star": "⭐", "Planet": "🪐", "Moon": "🌙", "Sun": "☀️", "Galaxy": "🌌",
        "Comet": "☄️", "Meteor": "☄️", "Supernova": "💥", "Aurora": "🌌", "Eclipse": "🌑",
        "Satellite": "🛰️", "Telescope": "🔭",
        "Time": "⏰", "Energy": "⚡", "Power": "💪", "Life": "🌱", "Death": "💀",
        "Mind": "🧠", "Love": "❤️", "Peace": "☮️", "War": "⚔️", "Light": "💡",
        "Dark": "🌑", "Sound": "🔊", "Dream": "💭",
        "Fusion": "🔄", "Blend": "🔄", "Hybrid": "🔄", "Alloy": "🔄", "Compound": "🔄",
        "Synthesis": "🧪", "Reaction": "⚗️", "Essence": "✨", "Force": "💫",
    }
)


SIMPLE_FALLBACK_POOL: Tuple[PresetWord, ...] = (
    _preset("Fusion", "🔄", "Fusión", "Fusion", "Fusion", "融合"),
    _preset("Blend", "🌀", "Mezcla", "Mélange", "Mischung", "混合"),
    _preset("Hybrid", "🧬", "Híbrido", "Hybride", "Hybrid", "混合体"),
    _preset("Alloy", "⚙️", "Aleación", "Alliage", "Legierung", "合金"),
    _preset("Compound", "⚗️", "Compuesto", "Composé", "Verbindung", "化合物"),
    _preset("Essence", "✨", "Esencia", "Essence", "Essenz", "精华"),
    _preset("Catalyst", "🧪", "Catalizador", "Catalyseur", "Katalysator", "催化剂"),
)

ABSOLUTE_FALLBACK = _preset("Force", PLACEHOLDER_GLYPH, "Fuerza", "Force", "Kraft", "力量")


def _static_translations() -> Mapping[str, Mapping[str, str]]:
    presets = list(BASE_ELEMENTS) + list(SIMPLE_FALLBACK_POOL) + [ABSOLUTE_FALLBACK]
    for inner in INSTANT_COMBINATIONS.values():
        presets.extend(inner.values())
    return MappingProxyType(
        {preset.word.lower(): MappingProxyType(dict(preset.translations)) for preset in presets}
    )


STATIC_TRANSLATIONS = _static_translations()


def lookup_instant(first_label: str, second_label: str) -> PresetWord | None:
    first = str(first_label or "").strip().lower()
    second = str(second_label or "").strip().lower()
    row = INSTANT_COMBINATIONS.get(first)
    if row is not None and second in row:
        return row[second]
    row = INSTANT_COMBINATIONS.get(second)
    if row is not None and first in row:
        return row[first]
    return None


def lookup_thematic(first: DomainTag, second: DomainTag) -> Tuple[str, ...] | None:
    return THEMATIC_COMBINATIONS.get((first, second)) or THEMATIC_COMBINATIONS.get((second, first))


def glyphs_for_domains(first: DomainTag, second: DomainTag) -> Tuple[str, ...]:
    glyphs = DOMAIN_PAIR_GLYPHS.get((first, second)) or DOMAIN_PAIR_GLYPHS.get((second, first))
    if glyphs:
        return glyphs
    pair = (first, second)
    if DomainTag.TECH in pair:
        return DOMAIN_PAIR_GLYPHS[(DomainTag.TECH, DomainTag.TECH)]
    if DomainTag.NATURE in pair:
        return DOMAIN_PAIR_GLYPHS[(DomainTag.NATURE, DomainTag.NATURE)]
    if DomainTag.ELEMENTAL in pair:
        return DOMAIN_PAIR_GLYPHS[(DomainTag.ELEMENTAL, DomainTag.ELEMENTAL)]
    return GENERIC_GLYPHS
