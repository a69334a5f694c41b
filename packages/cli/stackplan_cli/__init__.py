"""stackplan command line interface."""
