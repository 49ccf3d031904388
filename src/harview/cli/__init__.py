"""harview command line interface."""
