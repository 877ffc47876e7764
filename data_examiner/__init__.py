"""
Data Examiner - conversational analysis of uploaded and pasted data.

Parses CSV, JSON, Excel and free text, profiles every column, selects a
chart and asks an OpenAI-compatible chat model for a markdown analysis,
falling back to local statistics when the model is unavailable.
"""

__version__ = "1.0.0"
