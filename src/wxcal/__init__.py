"""Weather forecast and sunrise/sunset calendars from weather.gov forecasts."""

__version__ = "0.1.0"

# Identifies this software in User-Agent headers and iCal PRODID fields.
PRODUCT_NAME = "wxcal"
