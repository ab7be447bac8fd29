"""Foundation layer: configuration and errors."""
