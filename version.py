"""
Version information for the Traewelling desktop client.

Centralized version management for the application and its data provider.
"""

# Core application information
__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__app_name__ = "Traewelling Desktop"
__app_display_name__ = "Traewelling Desktop - Check-ins and Statistics"
__company__ = "Traewelling Desktop"
__description__ = "Desktop client showing active check-ins and personal travel statistics"

# Feature information
__features__ = [
    "Check-ins currently en route with live travel progress",
    "Delay-aware departure and arrival times",
    "Personal statistics per operator and product type",
    "Dark/Light theme support",
]

# API information
__api_provider__ = "Träwelling"
__api_url__ = "https://traewelling.de/"
__user_agent__ = f"TraewellingDesktop/{__version__}"

# License information
__license__ = "GPL v3"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"


def get_about_text() -> str:
    """Get formatted about text for dialogs."""
    features_list = "\n".join(f"<li>{feature}</li>" for feature in __features__)

    return f"""
<h3>🚆 {__app_display_name__}</h3>
<p><b>Version {__version__}</b></p>
<p>{__description__}</p>

<p><b>Features:</b></p>
<ul>
{features_list}
</ul>

<p><b>Data Source:</b> {__api_provider__} ({__api_url__})</p>
<p><b>License:</b> {__license__}</p>
"""
