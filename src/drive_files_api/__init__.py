"""Drive Files API: return the latest PDF in a caller's Google Drive."""
