"""Testing – doubles for exercising searchbase without a browser or engine."""
