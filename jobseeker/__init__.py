"""
JobSeeker

Job board scanner: scrapes SEEK, LinkedIn and Indeed search results and
stores new postings per user for later analysis.
"""

__version__ = "1.0.0"
