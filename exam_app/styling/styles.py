"""Centralized colors and Qt stylesheets for the exam client."""

from __future__ import annotations


class ExamPalette:
    """Dark palette shared with the browser pages."""

    BACKGROUND = "#0B1120"
    CARD = "#111A30"
    TEXT_PRIMARY = "#F5F7FF"
    TEXT_SECONDARY = "#94A3B8"
    ACCENT = "#1F9AA5"
    ACCENT_HOVER = "#16808A"
    BUTTON_SECONDARY = "#334155"
    BORDER = "#334155"
    TIMER = "#FACC15"
    WARNING = "#F87171"
    SUCCESS = "#4ADE80"


class Styles:
    """Helper class to generate Qt stylesheets for the exam client."""

    @staticmethod
    def get_main_window_style() -> str:
        return f"""
            QMainWindow, QDialog {{
                background-color: {ExamPalette.BACKGROUND};
                color: {ExamPalette.TEXT_PRIMARY};
            }}
            QWidget {{
                background-color: {ExamPalette.BACKGROUND};
                color: {ExamPalette.TEXT_PRIMARY};
                font-family: 'Inter', 'Segoe UI', sans-serif;
                font-size: 14px;
            }}
            QFrame#card {{
                background-color: {ExamPalette.CARD};
                border-radius: 12px;
            }}
            QPushButton {{
                background-color: {ExamPalette.BUTTON_SECONDARY};
                border: none;
                border-radius: 8px;
                padding: 8px 16px;
            }}
            QPushButton#primary {{
                background-color: {ExamPalette.ACCENT};
            }}
            QPushButton#primary:hover {{
                background-color: {ExamPalette.ACCENT_HOVER};
            }}
            QPushButton:disabled {{
                color: {ExamPalette.TEXT_SECONDARY};
            }}
            QLineEdit, QTextBrowser {{
                background-color: {ExamPalette.CARD};
                border: 1px solid {ExamPalette.BORDER};
                border-radius: 6px;
                padding: 4px;
            }}
            QRadioButton {{
                padding: 8px;
            }}
        """

    @staticmethod
    def get_timer_style() -> str:
        return f"color: {ExamPalette.TIMER}; font-weight: bold;"

    @staticmethod
    def get_warning_style() -> str:
        return f"color: {ExamPalette.WARNING};"

    @staticmethod
    def get_secondary_text_style() -> str:
        return f"color: {ExamPalette.TEXT_SECONDARY};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
