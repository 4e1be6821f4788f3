"""safariwatch -- Webcam animal counting through a hosted browser agent.

Fetches preview images from the safari park webcams via a remote
browser-automation service, asks its vision model to count the animals
on each feed, and aggregates the counts into a report. The counts can
be requested conversationally or run as a fixed monitoring workflow.
"""

__version__ = "0.1.0"
