"""
Resume intake service: turns uploaded resumes into structured candidate
records with Gemini and scores them against a job description.
"""

__version__ = "1.0.0"
