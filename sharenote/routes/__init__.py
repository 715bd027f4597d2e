"""HTTP routers for ShareNote."""
