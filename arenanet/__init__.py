"""Networked arena game: fixed-step simulation, UDP client and server, software renderer."""

__version__ = "0.1.0"