"""Provider clients, payload models and settings for skipsync."""
