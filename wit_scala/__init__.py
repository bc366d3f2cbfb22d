"""
Scala.js bindings generator for WebAssembly Component Model (WIT) worlds.
"""

__version__ = "0.1.0"
