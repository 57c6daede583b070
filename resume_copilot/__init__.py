"""Resume Copilot - AI writing assistant embedded in a resume editor."""

__version__ = "0.1.0"
