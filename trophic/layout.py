"""Fixed-width text framing used by the console views."""

WIDTH = 95


def fill_in(width: int, fill: str, end: str) -> str:
    """Return ``width - 1`` copies of *fill* followed by *end* and a newline."""
    return fill * max(0, width - 1) + end + "\n"


def squared_line(edge: str, fill: str) -> str:
    """Return a full-width line that starts and ends with *edge*."""
    return edge + fill_in(WIDTH - len(edge), fill, edge)


def boxed(text: str, fill: str, end: str) -> str:
    """Return *text* padded with *fill* up to the frame width and closed by *end*."""
    return text + fill_in(WIDTH - len(text), fill, end)