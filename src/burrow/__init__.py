"""burrow: an excavation agent that digs spiral tunnels and always finds its way home."""

__version__ = "1.0.0"
