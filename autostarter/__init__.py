"""
autostarter: X11 session autostart
Launch applications and place their windows per screen resolution
"""

__version__ = "1.0.0"
