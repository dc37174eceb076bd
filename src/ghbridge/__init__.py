"""ghbridge: GitHub operations for agents, executed through the gh CLI."""

__version__ = "0.1.0"
