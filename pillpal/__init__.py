"""
PillPal assistant: page-aware medication assistant and smart schedule
suggestions.
"""

__version__ = "0.1.0"
