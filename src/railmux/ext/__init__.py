"""Front-end adapters for the Railway tool catalogue."""
