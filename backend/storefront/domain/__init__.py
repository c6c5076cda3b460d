"""Pure cart, order, pricing and rating logic."""
