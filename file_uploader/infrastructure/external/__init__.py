"""External services: storage backends."""
