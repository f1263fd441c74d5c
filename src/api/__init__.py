"""Flask HTTP layer for the fuel-economy catalog."""
