"""Analysis of a trophic network: roles, trophic levels and species removal."""

from __future__ import annotations

from typing import Callable

from trophic.graph import Graph, Species
from trophic.layout import boxed, squared_line


def _check_index(graph: Graph, index: int) -> None:
    if not 0 <= index < len(graph.species):
        raise IndexError(f"id invalide: {index}")


def is_primary_producer(graph: Graph, index: int) -> bool:
    """Return True when the species has no outgoing arc."""
    _check_index(graph, index)
    return not graph.species[index].arcs


def is_top_predator(graph: Graph, index: int) -> bool:
    """Return True when no arc points at the species."""
    _check_index(graph, index)
    return next(graph.incoming(index), None) is None


def trophic_levels(graph: Graph) -> list[list[int]]:
    """Return, for every species, the distinct trophic levels it can occupy.

    A primary producer sits at level 0; any other species takes the levels of
    the species pointing at it, plus one, in the order they are met.
    """
    levels: dict[int, list[int]] = {}

    def visit(index: int) -> None:
        if index in levels:
            return
        if is_primary_producer(graph, index):
            levels[index] = [0]
            return
        found: list[int] = []
        levels[index] = found
        for source, _ in graph.incoming(index):
            visit(source)
            for level in list(levels[source]):
                if level + 1 not in found:
                    found.append(level + 1)

    for index in range(len(graph.species)):
        visit(index)
    return [levels[index] for index in range(len(graph.species))]


def _drop_first_arc_to(species: Species, target: int) -> None:
    position = next(
        (position for position, arc in enumerate(species.arcs) if arc.target == target),
        None,
    )
    if position is not None:
        del species.arcs[position]


def remove_species(graph: Graph, index: int) -> None:
    """Cut a species out of the network and mark it as removed."""
    _check_index(graph, index)
    graph.species[index].arcs.clear()
    for position, species in enumerate(graph.species):
        if position != index:
            _drop_first_arc_to(species, index)
    graph.species[index].quantity = -1


def propagate_removal(graph: Graph, index: int) -> None:
    """Drop the dependency links other species hold on a still present species."""
    if not 0 <= index < len(graph.species) or graph.species[index].quantity == -1:
        raise ValueError(f"espèce invalide ou déjà supprimée: {index}")
    for position, species in enumerate(graph.species):
        if position != index:
            _drop_first_arc_to(species, index)


def species_report(graph: Graph, index: int) -> str:
    """Return the framed summary of one species."""
    _check_index(graph, index)
    species = graph.species[index]
    lines = [boxed(f"+--[{species.name}]-[Quantity: {species.quantity:.2f}]", "-", "+")]
    if is_primary_producer(graph, index):
        lines.append(boxed("| L'espece est un producteur primaire", " ", "|"))
    if is_top_predator(graph, index):
        lines.append(boxed("| L'espece est un predateur principal", " ", "|"))
    levels = " ".join(str(level) for level in trophic_levels(graph)[index])
    lines.append(boxed(f"| Niveaux trophique: {levels}", " ", "|"))
    lines.append(squared_line("+", "-"))
    return "".join(lines)


def _read_choice(count: int, read_line: Callable[[], str]) -> int:
    while True:
        line = read_line()
        if not line:
            raise EOFError("no species selected")
        try:
            choice = int(line.strip())
        except ValueError:
            continue
        if 1 <= choice <= count:
            return choice


def isolate_species(
    graph: Graph,
    read_line: Callable[[], str],
    write: Callable[[str], object],
) -> int:
    """Ask for a species, show its report and wait for acknowledgement.

    Returns the index of the chosen species.
    """
    write("Selectionne l'espece a isoler\n")
    for number, species in enumerate(graph.species, start=1):
        write(f" ({number}) {species.name}\n")
    index = _read_choice(len(graph.species), read_line) - 1
    write(species_report(graph, index))
    write("Appuie sur n'importe quelle touche pour revenir au menu\n")
    read_line()
    return index