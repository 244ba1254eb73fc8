"""
Cube Swarm - bouncing, spinning ASCII cubes in the terminal.
"""

__version__ = "0.1.0"
