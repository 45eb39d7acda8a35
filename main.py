"""
Smart Greenhouse - WhatsApp command bot

Receives WhatsApp messages through a Twilio webhook, controls the greenhouse
pumps and cooler through Firebase, and runs the watering/fertilizing
schedules once per minute.
"""

from smartgreenhouse.core.runner import main


if __name__ == "__main__":
    main()
