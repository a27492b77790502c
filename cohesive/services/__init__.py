"""Pipeline stages and the orchestrator that runs them."""
