"""Input and output screening around the completion call."""
