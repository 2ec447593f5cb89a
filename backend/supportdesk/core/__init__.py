"""Core — pure domain logic. Never imports from api/, services/ or infrastructure/."""
