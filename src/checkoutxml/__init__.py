"""checkoutxml: XML mapping engine for the Google Checkout merchant API."""

__version__ = "0.4.0"
