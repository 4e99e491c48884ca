"""Core — models, services and the inception engine."""
