# trophic

A small toolkit for trophic networks: it reads a food web from a text file,
shows it in the terminal, works out each species' trophic levels and steps a
population model forward in time. Snapshots of the network can be exported as
Graphviz DOT text or rendered to PNG through the Graphviz `dot` program.

## Installation

```
pip install .
```

No third-party Python packages are needed. PNG screenshots need the Graphviz
`dot` executable.

## Network files

A network file holds, in order, skipping blank lines and lines starting with `#`:

1. the number of species (the order of the graph);
2. the number of arcs;
3. one line per species: `name;growth`, where the growth rate becomes `1 / growth`
   (a growth of 0 or a missing value is an error);
4. one line per arc: `source target weight`, with species numbered from 1.
   An arc is stored with the weight `10 / weight`.

A meaningful line that starts with a space, a count or arc line that does not
start with a digit, an arc naming an unknown species, or a file that ends too
early raises `trophic.graph.GraphFormatError` (a `ValueError`) carrying the
offending line number in `line` where there is one.

```
# a tiny meadow
3
2
Grass;2
Rabbit;4
Fox;8
1 2 5
2 3 10
```

Each species starts with a population of 100.

## Interactive use

```
trophic [network] [--dot DOT]
```

- `network` — the network file; when left out, the program asks for it.
- `--dot` — the Graphviz executable used for screenshots (default `dot`).

If the file cannot be opened or is malformed, an error is printed and the
command exits with status 1. Otherwise the network is shown and these keys act
on it:

| Key         | Action                                              |
|-------------|-----------------------------------------------------|
| space / `k` | start or pause the simulation                       |
| `j` / `l`   | slow down / speed up while running (steps of 0.25)  |
| `s`         | save a PNG screenshot as `graph_N.png`              |
| `g`         | pause, pick a species by number and show its report |
| `q`         | quit                                                |

While running, one simulation step happens every `1 / speed` seconds and the
view is redrawn after each step.

## Library use

```python
from trophic.graph import read_graph, render, to_dot, write_dot
from trophic.processing import (
    is_primary_producer,
    is_top_predator,
    species_report,
    trophic_levels,
)
from trophic.simulation import simulate

graph = read_graph("meadow.txt")
print(render(graph, False))

levels = trophic_levels(graph)       # one list of levels per species
print(is_primary_producer(graph, 0), is_top_predator(graph, 2), levels[2])
print(species_report(graph, 1))

simulate(graph)                      # advances every population by one step
write_dot(graph, "meadow.dot")
```

Main pieces:

- `trophic.graph` — `Graph`, `Species`, `Arc`, `parse_graph(lines)`,
  `read_graph(path)`, `render(graph, time_running)`, `to_dot(graph)`,
  `write_dot(graph, path)`, `GraphFormatError`.
- `trophic.processing` — `is_primary_producer` (no outgoing arc),
  `is_top_predator` (no incoming arc), `trophic_levels` (primary producers at
  level 0, others at their predecessors' levels plus one), `remove_species`
  (cuts a species out and sets its quantity to -1), `propagate_removal`,
  `species_report` and `isolate_species`. An out-of-range species index raises
  `IndexError`.
- `trophic.simulation` — `simulate(graph)`.
- `trophic.cli` — `Player` (playback state), `screenshot(graph, number,
  dot_program)` and `main(argv=None)`.

## Limitations

- Screenshots depend on an external Graphviz `dot`; without it the command
  prints an error and carries on.
- The interactive command reads single keys from a real terminal and is not
  meant to be driven from a pipe.
- Networks are read only; there is no way to save an edited network back to
  the file format.