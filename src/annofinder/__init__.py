"""AnnoFinder - gather comments, log statements and TODOs from a source tree."""

__version__ = "0.1.0"
