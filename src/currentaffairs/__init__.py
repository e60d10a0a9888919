"""CurrentAffairs - news ingestion and syllabus-relevance classification."""

from currentaffairs.__version__ import __version__

__all__ = ["__version__"]
