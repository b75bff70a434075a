import math

import pytest

from trophic.graph import (
    Arc,
    Graph,
    GraphFormatError,
    Species,
    parse_graph,
    read_graph,
    render,
    to_dot,
    write_dot,
)
from trophic.layout import WIDTH

SAMPLE = """# ordre
3
# taille
2

Herbe;2
Lapin;4
Renard;5
2 1 5
3 2 10
"""


@pytest.fixture
def sample_graph():
    return parse_graph(SAMPLE.splitlines(keepends=True))


def _small_graph():
    return Graph(species=[Species(name, 1.0, index) for index, name in enumerate("abcdef")])


def test_parse_species(sample_graph):
    assert [s.name for s in sample_graph.species] == ["Herbe", "Lapin", "Renard"]
    assert [s.index for s in sample_graph.species] == [0, 1, 2]
    assert [s.growth for s in sample_graph.species] == pytest.approx([1 / 2, 1 / 4, 1 / 5])
    assert all(s.quantity == 100 for s in sample_graph.species)
    assert sample_graph.size == 2


def test_parse_arcs(sample_graph):
    assert sample_graph.species[0].arcs == []
    assert sample_graph.species[1].arcs == [Arc(0, pytest.approx(10 / 5))]
    assert sample_graph.species[2].arcs == [Arc(1, pytest.approx(10 / 10))]


def test_read_graph_from_file(tmp_path, sample_graph):
    path = tmp_path / "reseau.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    assert read_graph(path) == sample_graph


def test_read_graph_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_graph(tmp_path / "absent.txt")


def test_space_line_is_rejected_with_line_number():
    lines = ["2\n", " \n"]
    with pytest.raises(GraphFormatError) as info:
        parse_graph(lines)
    assert info.value.line == 2


@pytest.mark.parametrize(
    "text",
    [
        "x\n0\n",
        "1\nz\nA;1\n",
        "1\n0\nA;0\n",
        "1\n0\nA\n",
        "2\n1\nA;1\nB;1\nx 1 2\n",
        "2\n1\nA;1\nB;1\n1 9 2\n",
        "2\n1\nA;1\nB;1\n1 2\n",
    ],
)
def test_malformed_files_raise(text):
    with pytest.raises(GraphFormatError):
        parse_graph(text.splitlines(keepends=True))


def test_truncated_file_raises():
    with pytest.raises(GraphFormatError) as info:
        parse_graph(["3\n", "0\n", "A;1\n"])
    assert info.value.line is None


def test_zero_divisor_gives_infinite_weight():
    graph = parse_graph(["2\n", "1\n", "A;1\n", "B;1\n", "1 2 0\n"])
    arc = graph.species[0].arcs[0]
    assert arc.target == 1
    assert arc.weight == math.inf


def test_add_arc_insertion_order():
    graph = _small_graph()
    for target in (5, 3, 4, 1):
        graph.add_arc(0, target, 1.0)
    assert [arc.target for arc in graph.species[0].arcs] == [3, 4, 1, 5]


def test_incoming(sample_graph):
    assert [source for source, _ in sample_graph.incoming(0)] == [1]
    assert [source for source, _ in sample_graph.incoming(1)] == [2]
    assert list(sample_graph.incoming(2)) == []


def test_render_frame(sample_graph):
    text = render(sample_graph, False)
    header, *body = text.split("\n")
    assert "[Networks]" in header
    framed = [line for line in body if line]
    assert all(len(line) == WIDTH for line in framed)
    assert framed[0].startswith("| Herbe (100): ")
    assert framed[-1] == "+" + "-" * (WIDTH - 2) + "+"
    assert text.endswith("+\n\n")


def test_render_lists_arcs(sample_graph):
    text = render(sample_graph, False)
    assert "|  - Herbe (2.000)" in text
    assert "|  - Lapin (1.000)" in text


def test_to_dot(sample_graph):
    dot = to_dot(sample_graph)
    assert dot.startswith("digraph Graphe {\n    node [shape=circle];\n\n")
    assert '    "Herbe" [label="Herbe\\nPop: 100.00"];\n' in dot
    assert '    "Lapin" -> "Herbe" [label="2.000"];\n' in dot
    assert dot.endswith("}\n")
    assert dot.count("->") == 2


def test_write_dot_round_trip(tmp_path, sample_graph):
    path = tmp_path / "graph.dot"
    write_dot(sample_graph, path)
    assert path.read_text(encoding="utf-8") == to_dot(sample_graph)