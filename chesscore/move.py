"""Position and move records shared by generation, make/unmake and search."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import parse_square, square_name


@dataclass(frozen=True, slots=True)
class Position:
    rank: int
    file: int

    @classmethod
    def from_name(cls, square: str) -> "Position":
        rank, file = parse_square(square)
        return cls(rank, file)

    def name(self) -> str:
        return square_name(self.rank, self.file)

    def __str__(self) -> str:
        return self.name()


@dataclass(frozen=True, slots=True)
class Move:
    from_pos: Position
    to_pos: Position

    @classmethod
    def from_uci(cls, text: str) -> "Move":
        text = text.strip().lower()
        if len(text) != 4:
            raise ValueError(f"Invalid move: {text}")
        return cls(Position.from_name(text[:2]), Position.from_name(text[2:]))

    def uci(self) -> str:
        return f"{self.from_pos.name()}{self.to_pos.name()}"

    def as_quad(self) -> tuple[int, int, int, int]:
        return (self.from_pos.rank, self.from_pos.file, self.to_pos.rank, self.to_pos.file)

    def __str__(self) -> str:
        return self.uci()
