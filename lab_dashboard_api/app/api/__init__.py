"""API package containing versioned routers."""
