"""Admin console pages and dialogs."""
