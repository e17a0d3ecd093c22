"""Business logic: normalization, analytics, account, playback, presentation."""
