"""skelgen -- generates project skeletons from declarative generator trees."""

__version__ = "0.1.0"
