"""drinkchain: strategy-driven synthesis for the beverage supply chain."""
