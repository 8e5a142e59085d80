"""
slotplanner - propose bookable time slots from a weekly availability pattern.
"""

__version__ = "0.1.0"
