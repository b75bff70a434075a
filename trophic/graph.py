"""Trophic network model, file reader and renderers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from trophic.layout import boxed, squared_line

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_HEADER = (
    "+--[Networks]-[J: {j} | K: {k} | L: {l}]-"
    "[Q: Quitter | S: Export image | G: Isoler espece ]---+\n"
)


def _cp437(code: int) -> str:
    return bytes([code]).decode("cp437")


class GraphFormatError(ValueError):
    """Raised when a network file does not follow the expected layout."""

    def __init__(self, line: int | None, reason: str) -> None:
        self.line = line
        self.reason = reason
        if line is None:
            message = f"Erreur dans le fichier: {reason}"
        else:
            message = f"Erreur dans le fichier à la ligne {line}: {reason}"
        super().__init__(message)


@dataclass
class Arc:
    """A weighted link from one species to another."""

    target: int
    weight: float


@dataclass
class Species:
    """A node of the network: a species and its population."""

    name: str
    growth: float
    index: int
    quantity: float = 100.0
    arcs: list[Arc] = field(default_factory=list)


@dataclass
class Graph:
    """A directed, weighted trophic network."""

    species: list[Species] = field(default_factory=list)
    size: int = 0

    def add_arc(self, source: int, target: int, weight: float) -> None:
        """Append an arc; it goes before the last one when that one's target is larger."""
        arcs = self.species[source].arcs
        arc = Arc(target, weight)
        if arcs and arcs[-1].target > target:
            arcs.insert(len(arcs) - 1, arc)
        else:
            arcs.append(arc)

    def incoming(self, index: int) -> Iterator[tuple[int, Arc]]:
        """Yield ``(source, arc)`` for every arc that points at *index*."""
        for source, species in enumerate(self.species):
            for arc in species.arcs:
                if arc.target == index:
                    yield source, arc


def _strtol(text: str | None) -> int:
    match = _INT_PREFIX.match(text or "")
    return int(match.group(1)) if match else 0


def _strtof(text: str | None) -> float:
    match = _FLOAT_PREFIX.match(text or "")
    return float(match.group(1)) if match else 0.0


class _Reader:
    """Hands out meaningful lines, skipping comments and blank lines."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = iter(lines)
        self.number = 0

    def next(self) -> str:
        for line in self._lines:
            self.number += 1
            if not line or line[0] in "#\n":
                continue
            if line[0] == " ":
                raise GraphFormatError(self.number, "Espace suivi de rien")
            return line
        raise GraphFormatError(None, "fin de fichier inattendue")

    def next_numeric(self, reason: str) -> str:
        line = self.next()
        if not line[0].isdigit() or not line[0].isascii():
            raise GraphFormatError(self.number, reason)
        return line


def parse_graph(lines: Iterable[str]) -> Graph:
    """Build a graph from the lines of a network description."""
    reader = _Reader(lines)
    order = _strtol(reader.next_numeric("Pas un ordre correcte"))
    size = _strtol(reader.next_numeric("Pas une taille correcte"))
    graph = Graph(size=size)

    for index in range(order):
        line = reader.next()
        tokens = [token for token in line.split(";") if token]
        growth_rate = _strtol(tokens[1]) if len(tokens) > 1 else 0
        if growth_rate == 0:
            raise GraphFormatError(reader.number, "Pas une espece correcte")
        graph.species.append(Species(tokens[0], 1.0 / growth_rate, index))

    for _ in range(size):
        line = reader.next_numeric("Pas un arc correcte")
        tokens = [token for token in line.split(" ") if token]
        if len(tokens) < 3:
            raise GraphFormatError(reader.number, "Pas un arc correcte")
        source = _strtol(tokens[0]) - 1
        target = _strtol(tokens[1]) - 1
        if not (0 <= source < order and 0 <= target < order):
            raise GraphFormatError(reader.number, "Pas un arc correcte")
        divisor = _strtof(tokens[2])
        if divisor == 0:
            weight = math.copysign(math.inf, divisor)
        else:
            weight = 10.0 / divisor
        graph.add_arc(source, target, weight)

    return graph


def read_graph(path: str | Path) -> Graph:
    """Read a network description file."""
    with open(path, encoding="utf-8") as handle:
        return parse_graph(handle)


def _whole(quantity: float) -> str:
    return str(int(quantity)) if math.isfinite(quantity) else str(quantity)


def render(graph: Graph, time_running: bool) -> str:
    """Return the framed console view of the network."""
    parts = [
        _HEADER.format(
            j=_cp437(191),
            k=_cp437(215) if time_running else _cp437(16),
            l=_cp437(217),
        )
    ]
    last = len(graph.species) - 1
    for position, species in enumerate(graph.species):
        parts.append(boxed(f"| {species.name} ({_whole(species.quantity)}): ", " ", "|"))
        for arc in species.arcs:
            target_name = graph.species[arc.target].name
            parts.append(boxed(f"|  - {target_name} ({arc.weight:.3f})", " ", "|"))
        if position != last:
            parts.append(squared_line("|", " "))
        else:
            parts.append(squared_line("+", "-"))
            parts.append("\n")
    return "".join(parts)


def to_dot(graph: Graph) -> str:
    """Return a Graphviz description of the network with current populations."""
    parts = ["digraph Graphe {\n", "    node [shape=circle];\n\n"]
    for species in graph.species:
        parts.append(
            f'    "{species.name}" [label="{species.name}\\nPop: {species.quantity:.2f}"];\n'
        )
    parts.append("\n")
    for species in graph.species:
        for arc in species.arcs:
            target_name = graph.species[arc.target].name
            parts.append(
                f'    "{species.name}" -> "{target_name}" [label="{arc.weight:.3f}"];\n'
            )
    parts.append("}\n")
    return "".join(parts)


def write_dot(graph: Graph, path: str | Path) -> None:
    """Write the Graphviz description of the network to *path*."""
    Path(path).write_text(to_dot(graph), encoding="utf-8")