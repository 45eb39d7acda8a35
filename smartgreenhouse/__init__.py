"""Smart Greenhouse - WhatsApp command bot and schedule runner"""

__version__ = "0.1.0"
