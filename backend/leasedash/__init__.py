"""Portfolio occupancy & revenue-loss analytics backend."""
