"""Interactive console player for trophic network simulations."""

from __future__ import annotations

import argparse
import enum
import subprocess
import sys
import tempfile
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Sequence

from trophic.graph import Graph, GraphFormatError, read_graph, render, write_dot
from trophic.processing import isolate_species
from trophic.simulation import simulate

if sys.platform == "win32":
    import msvcrt
else:
    import select
    import termios
    import tty

SPEED_STEP = 0.25
DEFAULT_DOT = "dot"


class Command(enum.Enum):
    """What the main loop has to do after a key press."""

    NONE = "none"
    QUIT = "quit"
    SCREENSHOT = "screenshot"
    ISOLATE = "isolate"


@dataclass
class Player:
    """Playback state: speed, pause and the timing of simulation steps."""

    play_speed: float = 0.0
    last_speed: float = 1.0
    time_running: bool = False
    screen: int = 0
    begin: float = 0.0
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    def handle_key(self, key: str) -> Command:
        """Update the state for a key press and tell the caller what to do."""
        if key == "q":
            return Command.QUIT
        if key in (" ", "k"):
            if self.play_speed == 0:
                self.play_speed, self.last_speed = self.last_speed, 0.0
                self.time_running = True
                self.begin = self.clock()
            else:
                self.last_speed, self.play_speed = self.play_speed, 0.0
                self.time_running = False
        elif key == "j":
            if self.play_speed != 0:
                self.play_speed -= SPEED_STEP
        elif key == "l":
            if self.play_speed != 0:
                self.play_speed += SPEED_STEP
        elif key == "s":
            self.screen += 1
            return Command.SCREENSHOT
        elif key == "g":
            self.time_running = False
            return Command.ISOLATE
        return Command.NONE

    def due(self, now: float) -> bool:
        """Return True when a step is due at *now*, restarting the interval if so."""
        if not self.time_running:
            return False
        interval = 1.0 / self.play_speed if self.play_speed else float("inf")
        if now - self.begin > interval:
            self.begin = now
            return True
        return False


def screenshot(graph: Graph, number: int, dot_program: str) -> Path:
    """Render the network to ``graph_<number>.png`` with Graphviz."""
    output = Path(f"graph_{number}.png")
    with tempfile.TemporaryDirectory() as workdir:
        dot_file = Path(workdir) / "graph_temp.dot"
        write_dot(graph, dot_file)
        with open(output, "wb") as image:
            subprocess.run([dot_program, "-Tpng", str(dot_file)], stdout=image, check=True)
    return output


class _Keyboard:
    """Non-blocking single-key input on the controlling terminal."""

    def __enter__(self) -> "_Keyboard":
        if sys.platform != "win32":
            self._fd = sys.stdin.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if sys.platform != "win32":
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)

    def poll(self, timeout: float) -> str | None:
        if sys.platform == "win32":
            if msvcrt.kbhit():
                return msvcrt.getwch()
            time.sleep(timeout)
            return None
        ready, _, _ = select.select([sys.stdin], [], [], timeout)
        return sys.stdin.read(1) if ready else None

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Give the terminal back its line mode for the duration of the block."""
        if sys.platform == "win32":
            yield
            return
        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        try:
            yield
        finally:
            tty.setcbreak(self._fd)


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _load(path: str | None) -> Graph:
    if path is None:
        _write("Vous voulez quelle réseau ?\n>>>")
        path = sys.stdin.readline().strip()
    return read_graph(path)


def main(argv: Sequence[str] | None = None) -> int:
    """Load a network and run the interactive simulation."""
    parser = argparse.ArgumentParser(prog="trophic", description="Trophic network simulator")
    parser.add_argument("network", nargs="?", help="network description file")
    parser.add_argument("--dot", default=DEFAULT_DOT, help="Graphviz dot executable")
    args = parser.parse_args(argv)

    try:
        graph = _load(args.network)
    except OSError:
        _write("Erreur de lecture fichier\n")
        return 1
    except GraphFormatError as error:
        _write(f"{error}\n")
        return 1

    player = Player()
    _write(render(graph, player.time_running))

    with _Keyboard() as keyboard:
        while True:
            key = keyboard.poll(0.01)
            if key is not None:
                command = player.handle_key(key)
                if command is Command.QUIT:
                    return 0
                if command is Command.SCREENSHOT:
                    _write("Conversion du graphe en cours...\n")
                    try:
                        image = screenshot(graph, player.screen, args.dot)
                    except (OSError, subprocess.CalledProcessError) as error:
                        _write(f"Erreur lors de la conversion: {error}\n")
                    else:
                        _write(f"Screenshot enregistre sous le nom: {image}\n")
                elif command is Command.ISOLATE:
                    with keyboard.suspended():
                        try:
                            isolate_species(graph, sys.stdin.readline, _write)
                        except EOFError:
                            return 0
                    _write(render(graph, player.time_running))
            if player.due(time.monotonic()):
                simulate(graph)
                _write(render(graph, player.time_running))


if __name__ == "__main__":
    sys.exit(main())