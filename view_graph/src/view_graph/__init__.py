"""
Static analysis of Laravel classes and Blade templates: method shapes read from
PHP tokens, and the chain of templates a method renders.
"""

__version__ = "0.1.0"

from view_graph.class_reader import ClassReader, read

__all__ = ["ClassReader", "read", "__version__"]
