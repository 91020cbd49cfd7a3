"""
contrib-cards: render GitHub contribution streaks and top contributed
repositories as static SVG cards.
"""

__version__ = "1.0.0"
