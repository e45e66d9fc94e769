from dataclasses import dataclass
from typing import Tuple


@dataclass
class CombinationDiscovered:
    label: str
    ancestors: Tuple[str, ...]
    count: int


@dataclass
class CombinationRepeated:
    label: str
    ancestors: Tuple[str, ...]
    count: int
