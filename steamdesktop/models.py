from dataclasses import dataclass
from pathlib import Path

@dataclass
class LibraryEntry:
    name: str       # directory name under steamapps/common
    path: Path

@dataclass
class Game:
    name: str
    id: str         # Steam app id, digits only

@dataclass
class IconCandidate:
    path: Path
    width: int
    height: int
    bitdepth: int

    @property
    def square(self) -> bool:
        return self.width == self.height

    @property
    def size_dir(self) -> str:
        return f"{self.width}x{self.height}"
