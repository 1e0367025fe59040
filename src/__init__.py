"""
bpgraph - Blueprint graph notation toolkit

Typed node/pin graphs parsed from, and rendered back to, plain-text
notations (arrow, colored arrow, ASCII tree, Unreal clipboard).
"""

__version__ = "0.1.0"
