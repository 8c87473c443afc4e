"""germ command line interface."""
