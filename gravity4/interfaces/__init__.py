"""
gravity4.interfaces - Front ends for gravity4

This package contains the terminal interface and the gymnasium
environment. Nothing is imported here so the CLI does not pull in
gymnasium.
"""

__all__ = []
