"""
VSP: Vincollins School Portal core

Identifier generation and parsing for students and staff, together with the
grading engine that turns raw scores into grades, GPA and CGPA.
"""

__version__ = "1.0.0"
__author__ = "Vincollins Portal Team"
__description__ = "Identifier codec and grading engine for the Vincollins School Portal"
