"""
superpack: plugin hook runner.

Plugins register handlers against named hooks; the host fires each hook at a
fixed lifecycle point and gets back a folded result.
"""

__version__ = "0.1.0"
