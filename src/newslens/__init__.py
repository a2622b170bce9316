"""NewsLens: LLM-backed news analysis with community voting and badges."""

__version__ = "0.1.0"
