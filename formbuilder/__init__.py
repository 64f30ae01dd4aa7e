"""
formbuilder: compiles declarative form templates into validated runtime form state.
"""

__version__ = "0.1.0"
