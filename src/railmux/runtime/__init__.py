"""Runtime layer: concurrency, routing and observability."""
