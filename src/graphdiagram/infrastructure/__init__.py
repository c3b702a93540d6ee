"""Infrastructure components: edge storage backends and caching."""
