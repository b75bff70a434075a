"""One step of the population dynamics of a trophic network."""

from __future__ import annotations

import math

from trophic.graph import Graph


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def simulate(graph: Graph) -> None:
    """Advance every population by one step, species after species."""
    for index, species in enumerate(graph.species):
        capacity = 1.0 + sum(
            arc.weight * graph.species[source].quantity
            for source, arc in graph.incoming(index)
        )
        quantity = species.quantity
        species.quantity += species.growth * quantity * (1 - _divide(quantity, capacity))
        for source, arc in graph.incoming(index):
            species.quantity -= arc.weight * graph.species[source].quantity