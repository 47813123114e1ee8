"""HTTP layer.  Routers live in versioned subpackages."""
