"""Read, analyse, display and simulate trophic networks."""

__version__ = "0.1.0"