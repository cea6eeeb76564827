"""glossa - paragraph annotation and AI-assisted rewriting for plain-text notes."""

__version__ = "0.1.0"
