"""Full-screen interactive applications."""
