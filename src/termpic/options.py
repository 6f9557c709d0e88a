from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from termpic.geometry import DEFAULT_CELL_SIZE, CellSize


class Action(Enum):
    LOAD = "load"
    DISPLAY = "display"
    LOAD_AND_DISPLAY = "load-and-display"
    CLEAR = "clear"

    @classmethod
    def from_name(cls, name: str) -> "Action":
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown action: {name!r}") from None


@dataclass(frozen=True)
class Options:
    path: Path | None
    action: Action = Action.DISPLAY
    id: int | None = None
    cols: int | None = None
    rows: int | None = None
    x: int | None = None
    y: int | None = None
    upscale: bool = False
    cell_size: CellSize = DEFAULT_CELL_SIZE

    @property
    def positioned(self) -> bool:
        return self.x is not None or self.y is not None
