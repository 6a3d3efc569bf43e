"""AEO Checker - Answer Engine Optimization analysis for web pages."""

__version__ = "1.0.0"
