"""
Traewelling desktop client

A PySide6 desktop application for the Träwelling check-in service.

Features:
- Check-ins currently en route with live travel progress
- Delay-aware departure and arrival times
- Personal statistics per operator and product type
- Light/Dark theme switching (defaults to dark)
"""

__version__ = "1.0.0"
__description__ = "Traewelling desktop client"
