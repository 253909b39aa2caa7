"""Styling module for the SecureExam desktop client."""

from .styles import ExamPalette, Styles

__all__ = ["ExamPalette", "Styles"]
