"""Business logic services. Stateless; sessions are passed per call."""
