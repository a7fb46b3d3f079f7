"""App views package.

UI rendering layer for the Streamlit application.
Pure rendering - no business logic or calculations.
"""

__all__ = ["colors", "dashboard", "formatting"]
