"""FastAPI command surface for the simulation."""
