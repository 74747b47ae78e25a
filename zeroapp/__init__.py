"""
ZeroApp Builder: Android project generation from JSON app descriptions.

Accepts a description of a simple mobile app (screens, UI components, package
metadata), renders the Android project sources for it and packages the result
as a downloadable placeholder artifact.
"""

__version__ = "1.0.0"
__author__ = "ZeroApp Team"
