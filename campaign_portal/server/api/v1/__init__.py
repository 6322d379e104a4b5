"""Version 1 routers, one module per resource."""
