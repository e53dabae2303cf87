"""Notification subsystem of the community app.

Stores in-app notifications, fans them out to device push tokens according
to user preferences and reminds attendees of upcoming events.
"""
