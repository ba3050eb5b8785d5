"""TeamHub API package.

Team and project management backend with durable notifications and realtime
delivery to connected clients.
"""
